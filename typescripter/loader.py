"""Imports source modules selected by file globs."""

from __future__ import annotations

import importlib
import importlib.util
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import List, Sequence, Tuple

from .descriptors.reflection import ReflectionModule
from .logging import get_logger

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_PRIVATE_PREFIX = "_typescripter_source_"


@dataclass
class LoadResult:
    """Modules that imported cleanly and the files that did not."""

    modules: List[ReflectionModule] = field(default_factory=list)
    failures: List[Tuple[Path, str]] = field(default_factory=list)


class ModuleLoader:
    """Loads Python files under a source directory as importable modules.

    The source directory is placed on ``sys.path`` so that imports between
    source modules resolve against it, the way sibling libraries next to the
    scanned files are found.
    """

    def __init__(self, source: Path, patterns: Sequence[str]) -> None:
        self.source = Path(source).expanduser().resolve()
        self.patterns = list(patterns)
        self.logger = get_logger("loader")

    def discover(self) -> List[Path]:
        if not self.source.is_dir():
            raise FileNotFoundError(f"Source directory not found: {self.source}")
        found: dict[Path, None] = {}
        for pattern in self.patterns:
            for path in sorted(self.source.glob(pattern)):
                if path.is_file() and path.suffix == ".py":
                    found.setdefault(path.resolve(), None)
        return list(found)

    def load(self) -> LoadResult:
        files = self.discover()
        self.logger.debug("Matched %d source files in %s", len(files), self.source)
        source_entry = str(self.source)
        if source_entry not in sys.path:
            sys.path.insert(0, source_entry)
        importlib.invalidate_caches()

        result = LoadResult()
        for path in files:
            try:
                module = self._import(path)
            except Exception as exc:  # source modules may raise anything at import time
                self.logger.warning("Skipping %s: %s", path.name, exc)
                result.failures.append((path, str(exc)))
                continue
            result.modules.append(ReflectionModule(module.__name__))
        return result

    def module_name(self, path: Path) -> str:
        relative = path.relative_to(self.source).with_suffix("")
        parts = list(relative.parts)
        if parts and parts[-1] == "__init__":
            parts = parts[:-1]
        if not parts:
            raise ValueError(f"Cannot derive a module name for {path}")
        return ".".join(parts)

    def _import(self, path: Path) -> ModuleType:
        name = self.module_name(path)
        if all(_IDENTIFIER.match(part) for part in name.split(".")):
            module = sys.modules.get(name) or importlib.import_module(name)
            if _loaded_from(module, path):
                return module
            self.logger.warning(
                "%s is shadowed by the already imported module %s; loading it under a private name",
                path.name,
                name,
            )
        return self._import_from_file(path, name)

    @staticmethod
    def _import_from_file(path: Path, name: str) -> ModuleType:
        safe = re.sub(r"[^0-9A-Za-z_]", "_", name.replace(".", "__"))
        for candidate in (safe, f"{_PRIVATE_PREFIX}{safe}"):
            cached = sys.modules.get(candidate)
            if cached is None:
                return _exec_file(path, candidate)
            if _loaded_from(cached, path):
                return cached
        raise ImportError(f"Cannot load {path}: module name {safe} is already taken")


def _loaded_from(module: ModuleType, path: Path) -> bool:
    location = getattr(module, "__file__", None)
    return location is not None and Path(location).resolve() == path.resolve()


def _exec_file(path: Path, name: str) -> ModuleType:
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load {path}")
    module = importlib.util.module_from_spec(spec)
    # Registered before exec so circular imports resolve to the same module.
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(name, None)
        raise
    return module


__all__ = ["LoadResult", "ModuleLoader"]
