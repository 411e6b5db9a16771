"""Classifies source types as primitives, models, collections, opaque or ignored."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from ..descriptors.base import TypeDescriptor, TypeKind
from ..markers import IGNORE, Marker
from ..models import ClassificationResult, CollectionOf, Ignored, Model, Opaque, Primitive

PRIMITIVE_TYPES: Dict[str, str] = {
    "builtins.int": "number",
    "builtins.float": "number",
    "builtins.complex": "number",
    "decimal.Decimal": "number",
    "fractions.Fraction": "number",
    "builtins.bool": "boolean",
    "builtins.str": "string",
    "builtins.bytes": "string",
    "builtins.bytearray": "string",
    "uuid.UUID": "string",
    "datetime.timedelta": "string",
    "datetime.datetime": "Date",
    "datetime.date": "Date",
    "datetime.time": "Date",
    "builtins.NoneType": "void",
    "builtins.object": "any",
    "typing.Any": "any",
}

SEQUENCE_GENERICS: frozenset[str] = frozenset(
    {
        "builtins.list",
        "builtins.set",
        "builtins.frozenset",
        "collections.deque",
        "collections.abc.Sequence",
        "collections.abc.MutableSequence",
        "collections.abc.Iterable",
        "collections.abc.Iterator",
        "collections.abc.Collection",
        "collections.abc.Set",
        "collections.abc.MutableSet",
    }
)


class TypeClassifier:
    """Pure classification of type descriptors.

    The classifier carries only immutable configuration, so the same
    descriptor always yields the same result.
    """

    def __init__(
        self,
        *,
        primitives: Optional[Mapping[str, str]] = None,
        ignore_marker: Marker = IGNORE,
    ) -> None:
        self._primitives: Mapping[str, str] = dict(primitives or PRIMITIVE_TYPES)
        self._ignore_marker = ignore_marker

    def classify(self, descriptor: TypeDescriptor) -> ClassificationResult:
        if self.is_ignored(descriptor):
            return Ignored()

        kind = descriptor.kind
        if kind is TypeKind.ARRAY:
            if descriptor.element is None:
                return Opaque("any")
            return CollectionOf(self.classify(descriptor.element))

        target = self._primitives.get(descriptor.full_name)
        if target is not None:
            return Primitive(target)

        if kind is TypeKind.GENERIC:
            arguments = descriptor.arguments
            if descriptor.generic_name in SEQUENCE_GENERICS and len(arguments) == 1:
                return CollectionOf(self.classify(arguments[0]))
            # Maps and other multi-argument shapes are passed through untyped.
            return Opaque("any")

        if kind in (TypeKind.CLASS, TypeKind.ENUM) and not descriptor.is_system:
            return Model(descriptor)
        return Opaque("any")

    def is_ignored(self, descriptor: TypeDescriptor) -> bool:
        return self._ignore_marker in descriptor.markers

    def is_model(self, descriptor: TypeDescriptor) -> bool:
        return isinstance(self.classify(descriptor), Model)

    def models_of(self, result: ClassificationResult) -> List[TypeDescriptor]:
        """Return every model a classification contributes, including model ancestors."""
        if isinstance(result, CollectionOf):
            return self.models_of(result.inner)
        if not isinstance(result, Model):
            return []
        found = [result.descriptor]
        found.extend(self.model_ancestors(result.descriptor))
        return found

    def model_ancestors(self, descriptor: TypeDescriptor) -> List[TypeDescriptor]:
        """Walk the declared-base chain while each base is itself a model."""
        ancestors: List[TypeDescriptor] = []
        seen = {descriptor}
        current = descriptor.base
        while current is not None and current not in seen:
            if not self.is_model(current):
                break
            ancestors.append(current)
            seen.add(current)
            current = current.base
        return ancestors


__all__ = ["PRIMITIVE_TYPES", "SEQUENCE_GENERICS", "TypeClassifier"]
