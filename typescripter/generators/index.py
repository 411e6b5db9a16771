"""Renders the ``index.ts`` barrel that re-exports every generated file."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from .base import INDEX_NAME, TemplateGenerator, write_file


class IndexGenerator(TemplateGenerator):
    """Aggregates entity and service exports into ``index.ts``."""

    def generate(self, target: Path, *generated: Sequence[str]) -> List[str]:
        """Write the index and return every generated name, the index included."""
        names: List[str] = []
        for group in generated:
            for name in group:
                if name not in names:
                    names.append(name)
        content = self.render("index.ts.j2", names=sorted(names))
        write_file(target, INDEX_NAME, content)
        return names + [INDEX_NAME]


__all__ = ["IndexGenerator"]
