"""CLI parser and entrypoint behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.source_builder import SourceBuilder
from typescripter import cli
from typescripter.cli import _build_parser, _options_from_args
from typescripter.config import HTTP_CLIENT_MODULE, HTTP_MODULE


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    # configure_logging turns off propagation, which hides records from caplog.
    monkeypatch.setattr(cli, "configure_logging", lambda **_: None)


def test_cli_accepts_positional_directories() -> None:
    args = _build_parser().parse_args(["src", "out", "api", "--httpclient", "--combineimports"])
    options = _options_from_args(args)

    assert options.source == "src"
    assert options.destination == "out"
    assert options.api_relative_path == "api"
    assert options.http_module == HTTP_CLIENT_MODULE
    assert options.combine_imports is True


def test_cli_defaults_without_flags() -> None:
    options = _options_from_args(_build_parser().parse_args(["src", "out"]))

    assert options.api_relative_path is None
    assert options.http_module == HTTP_MODULE
    assert options.files == ["*_api.py"]
    assert options.controller_base_class_names == ["ApiController"]


def test_cli_splits_files_and_class_names() -> None:
    args = _build_parser().parse_args(
        ["src", "out", "--files", "*_api.py,views.py", "--class", "ApiController, BaseApi"]
    )
    options = _options_from_args(args)

    assert options.files == ["*_api.py", "views.py"]
    assert options.controller_base_class_names == ["ApiController", "BaseApi"]


def test_cli_accepts_verbose_flag() -> None:
    args = _build_parser().parse_args(["-v", "settings.yml"])

    assert args.verbose is True
    assert args.destination is None


def test_cli_accepts_log_file(tmp_path: Path) -> None:
    args = _build_parser().parse_args(["--log-file", str(tmp_path / "run.log"), "settings.yml"])

    assert args.log_file == tmp_path / "run.log"
    assert _build_parser().parse_args(["settings.yml"]).log_file is None


def test_cli_single_argument_reads_settings_file(tmp_path: Path) -> None:
    settings = tmp_path / "typescripter.yml"
    settings.write_text("source: src\ndestination: out\napi_relative_path: api\n", encoding="utf-8")

    options = _options_from_args(_build_parser().parse_args([str(settings)]))

    assert options.source == "src"
    assert options.api_relative_path == "api"


def test_main_exits_with_usage_error_on_bad_settings(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    settings = tmp_path / "typescripter.yml"
    settings.write_text("destination: out\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(settings)])

    assert excinfo.value.code == 2
    assert "Source is null or empty" in capsys.readouterr().err


def test_main_exits_when_source_is_missing(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(tmp_path / "absent"), str(tmp_path / "out")])

    assert excinfo.value.code == 1
    assert "Source directory not found" in capsys.readouterr().err


def test_main_generates_files(
    source_builder: SourceBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source_builder.write(
        {
            "cli_api.py": """
            from __future__ import annotations

            from dataclasses import dataclass


            class ApiController:
                pass


            @dataclass
            class Ticket:
                title: str


            class TicketsController(ApiController):
                def get_ticket(self, ticket_id: int) -> Ticket:
                    raise NotImplementedError
            """,
        }
    )
    destination = tmp_path / "out"

    cli.main([str(source_builder.path()), str(destination), "api", "--httpclient"])

    assert (destination / "Ticket.ts").is_file()
    assert (destination / "TicketsService.ts").is_file()
    assert "Generated 1 models and 1 endpoints" in capsys.readouterr().out
