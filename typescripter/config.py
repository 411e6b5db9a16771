"""Settings loading and validation for typescripter runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

HTTP_MODULE = "Http"
HTTP_CLIENT_MODULE = "HttpClient"
HTTP_MODULES: tuple[str, ...] = (HTTP_MODULE, HTTP_CLIENT_MODULE)

DEFAULT_FILES: tuple[str, ...] = ("*_api.py",)
DEFAULT_CONTROLLER_BASE_CLASS_NAMES: tuple[str, ...] = ("ApiController",)
DEFAULT_SOURCE = "./"
DEFAULT_DESTINATION = "../models/generated"


class ConfigError(RuntimeError):
    """Raised when settings are missing, unreadable or invalid."""


@dataclass
class Options:
    """Effective options for a generation run."""

    source: str = DEFAULT_SOURCE
    destination: str = DEFAULT_DESTINATION
    files: List[str] = field(default_factory=lambda: list(DEFAULT_FILES))
    controller_base_class_names: List[str] = field(
        default_factory=lambda: list(DEFAULT_CONTROLLER_BASE_CLASS_NAMES)
    )
    api_relative_path: Optional[str] = None
    http_module: str = HTTP_MODULE
    combine_imports: bool = False

    def source_path(self) -> Path:
        return absolute_path(self.source)

    def destination_path(self) -> Path:
        return absolute_path(self.destination)


def load_settings(settings_path: Path) -> Options:
    """Load and validate a YAML (or JSON) settings file."""
    path = Path(settings_path).expanduser()
    if not path.is_file():
        raise ConfigError(f"Settings file {path} does not exist.")

    data = _normalise_keys(_read_settings(path))

    source = _as_str(data.get("source"))
    if not source:
        raise ConfigError("Source is null or empty in options.")
    destination = _as_str(data.get("destination"))
    if not destination:
        raise ConfigError("Destination is null or empty in options.")

    files = _as_str_list(data.get("files")) or list(DEFAULT_FILES)
    class_names = _as_str_list(data.get("controllerbaseclassnames")) or list(
        DEFAULT_CONTROLLER_BASE_CLASS_NAMES
    )
    http_module = _as_str(data.get("httpmodule")) or HTTP_MODULE
    if http_module not in HTTP_MODULES:
        raise ConfigError(f"HttpModule must be one of {HTTP_MODULE} or {HTTP_CLIENT_MODULE}")

    return Options(
        source=source,
        destination=destination,
        files=files,
        controller_base_class_names=class_names,
        api_relative_path=_as_str(data.get("apirelativepath")) or None,
        http_module=http_module,
        combine_imports=_as_bool(data.get("combineimports")) or False,
    )


def absolute_path(relative: str) -> Path:
    """Resolve ``relative`` against the current working directory."""
    path = Path(relative).expanduser()
    if path.is_absolute():
        return path
    return (Path.cwd() / path).resolve()


def split_list(value: Optional[str], default: Sequence[str]) -> List[str]:
    """Split a comma separated CLI value, falling back to ``default``."""
    if not value:
        return list(default)
    items = [item.strip() for item in value.split(",") if item.strip()]
    return items or list(default)


def _read_settings(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        raise ConfigError(f"{path.name} is empty")
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _normalise_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    # "ControllerBaseClassNames" and "controller_base_class_names" name the same option.
    return {str(key).replace("_", "").replace("-", "").lower(): value for key, value in data.items()}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "ConfigError",
    "DEFAULT_CONTROLLER_BASE_CLASS_NAMES",
    "DEFAULT_FILES",
    "HTTP_CLIENT_MODULE",
    "HTTP_MODULE",
    "Options",
    "absolute_path",
    "load_settings",
    "split_list",
]
