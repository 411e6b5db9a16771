"""Renders one TypeScript definition file per model."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from jinja2 import Environment

from ..descriptors.base import DescriptorError, TypeDescriptor, TypeKind
from ..graph.classifier import TypeClassifier
from ..graph.mapper import contains_ignored, map_type_name
from ..logging import get_logger
from ..models import ModelSet
from .base import TemplateGenerator, build_imports, referenced_models, write_file


class EntityGenerator(TemplateGenerator):
    """Writes ``<Model>.ts`` interfaces and enums."""

    def __init__(
        self,
        classifier: TypeClassifier | None = None,
        environment: Environment | None = None,
    ) -> None:
        super().__init__(environment)
        self.classifier = classifier or TypeClassifier()
        self.logger = get_logger("generators.entity")

    def generate(self, target: Path, models: ModelSet, combine_imports: bool = False) -> List[str]:
        names: List[str] = []
        for model in models.sorted():
            content = self.render_model(model, combine_imports=combine_imports)
            write_file(target, model.name, content)
            names.append(model.name)
        self.logger.debug("Wrote %d entity files", len(names))
        return names

    def render_model(self, model: TypeDescriptor, *, combine_imports: bool = False) -> str:
        if model.kind is TypeKind.ENUM:
            return self.render(
                "enum.ts.j2",
                name=model.name,
                members=[
                    {"name": name, "value": _enum_literal(value, index)}
                    for index, (name, value) in enumerate(model.enum_members())
                ],
            )

        ancestors = self.classifier.model_ancestors(model)
        base = ancestors[0].name if ancestors else None

        properties: List[Dict[str, Any]] = []
        referenced: List[str] = [base] if base else []
        try:
            declared = model.properties()
        except DescriptorError as exc:
            self.logger.warning("Rendering %s without properties: %s", model.full_name, exc)
            declared = []
        for prop in declared:
            result = self.classifier.classify(prop.type)
            if contains_ignored(result):
                continue
            referenced.extend(referenced_models(result))
            properties.append(
                {"name": prop.name, "type": map_type_name(result), "optional": prop.nullable}
            )

        return self.render(
            "entity.ts.j2",
            name=model.name,
            base=base,
            properties=properties,
            imports=build_imports(referenced, exclude=model.name, combine=combine_imports),
        )


def _enum_literal(value: Any, index: int) -> str:
    if isinstance(value, bool):
        return str(index)
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return json.dumps(value)
    return str(index)


__all__ = ["EntityGenerator"]
