"""CLI entrypoint for typescripter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import (
    DEFAULT_CONTROLLER_BASE_CLASS_NAMES,
    DEFAULT_FILES,
    HTTP_CLIENT_MODULE,
    HTTP_MODULE,
    ConfigError,
    Options,
    load_settings,
    split_list,
)
from .logging import configure_logging
from .orchestrator import Orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="typescripter",
        description=(
            "Generate TypeScript models and Angular data services from Python API controllers. "
            "Pass a single settings file, or SOURCE and DESTINATION."
        ),
    )
    parser.add_argument(
        "source",
        help="Settings file (YAML or JSON), or the directory containing the API modules.",
    )
    parser.add_argument(
        "destination",
        nargs="?",
        help="Directory where the generated TypeScript files are written.",
    )
    parser.add_argument(
        "api_path",
        nargs="?",
        help="Prefix used by API calls (leave out to skip data service generation).",
    )
    parser.add_argument(
        "--httpclient",
        action="store_true",
        help="Generated data services use the Angular HttpClientModule.",
    )
    parser.add_argument(
        "--combineimports",
        action="store_true",
        help="Import models from the generated index rather than individual model files.",
    )
    parser.add_argument(
        "--files",
        default=None,
        help=f"Comma separated glob patterns of modules to load (default: {','.join(DEFAULT_FILES)}).",
    )
    parser.add_argument(
        "--class",
        dest="class_names",
        default=None,
        help=(
            "Comma separated controller base class names "
            f"(default: {','.join(DEFAULT_CONTROLLER_BASE_CLASS_NAMES)})."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write the run log, with timestamps, to this file.",
    )
    return parser


def _options_from_args(args: argparse.Namespace) -> Options:
    if args.destination is None:
        return load_settings(Path(args.source))
    return Options(
        source=args.source,
        destination=args.destination,
        files=split_list(args.files, DEFAULT_FILES),
        controller_base_class_names=split_list(args.class_names, DEFAULT_CONTROLLER_BASE_CLASS_NAMES),
        api_relative_path=args.api_path or None,
        http_module=HTTP_CLIENT_MODULE if args.httpclient else HTTP_MODULE,
        combine_imports=bool(args.combineimports),
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for typescripter."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        options = _options_from_args(args)
    except ConfigError as exc:
        parser.exit(2, f"{exc}\n")

    orchestrator = Orchestrator()
    try:
        result = orchestrator.run(options)
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except OSError as exc:
        parser.exit(1, f"typescripter failed: {exc}\nRun with --verbose for more details.\n")

    print(
        f"Generated {len(result.models)} models and {len(result.endpoints)} endpoints "
        f"into {_relativize(options.destination_path())} in {result.elapsed:.3f}s"
    )


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
