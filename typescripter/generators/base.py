"""Shared template environment and file output helpers for generators."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Mapping

from jinja2 import Environment, FileSystemLoader

from ..models import ClassificationResult, CollectionOf, Model

TS_EXTENSION = ".ts"
INDEX_NAME = "index"

_DEFAULT_TEMPLATES_DIR = Path(__file__).with_name("templates")


def create_environment(templates_dir: Path | None = None) -> Environment:
    """Build a Jinja environment, letting ``templates_dir`` override the bundled templates."""
    directories = []
    if templates_dir:
        directories.append(str(templates_dir))
    directories.append(str(_DEFAULT_TEMPLATES_DIR))
    # ensure uniqueness preserving order
    seen: set[str] = set()
    ordered: list[str] = []
    for directory in directories:
        if directory not in seen:
            ordered.append(directory)
            seen.add(directory)
    loader = FileSystemLoader(ordered)
    return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


class TemplateGenerator:
    """Base for generators that render one template per output file."""

    def __init__(self, environment: Environment | None = None) -> None:
        self.env = environment or create_environment()

    def render(self, template_name: str, **context: object) -> str:
        template = self.env.get_template(template_name)
        return template.render(**context).rstrip("\n") + "\n"


def write_file(target: Path, name: str, content: str) -> Path:
    """Write ``<name>.ts`` under ``target``, leaving identical files untouched."""
    target.mkdir(parents=True, exist_ok=True)
    path = target / f"{name}{TS_EXTENSION}"
    if path.exists() and path.read_text(encoding="utf-8") == content:
        return path
    path.write_text(content, encoding="utf-8")
    return path


def referenced_models(result: ClassificationResult) -> List[str]:
    """Names of the models a TypeScript type expression refers to."""
    if isinstance(result, CollectionOf):
        return referenced_models(result.inner)
    if isinstance(result, Model):
        return [result.descriptor.name]
    return []


def build_imports(names: Iterable[str], *, exclude: str | None, combine: bool) -> List[Mapping[str, object]]:
    """Group model names into import statements."""
    unique = sorted({name for name in names if name != exclude})
    if not unique:
        return []
    if combine:
        return [{"names": unique, "path": f"./{INDEX_NAME}"}]
    return [{"names": [name], "path": f"./{name}"} for name in unique]


def camel_case(name: str) -> str:
    """Convert ``get_order_lines`` or ``GetOrderLines`` to ``getOrderLines``."""
    parts = [part for part in re.split(r"_+", name) if part]
    if not parts:
        return name
    head, *tail = parts
    head = head[:1].lower() + head[1:]
    return head + "".join(part[:1].upper() + part[1:] for part in tail)


__all__ = [
    "INDEX_NAME",
    "TS_EXTENSION",
    "TemplateGenerator",
    "build_imports",
    "camel_case",
    "create_environment",
    "referenced_models",
    "write_file",
]
