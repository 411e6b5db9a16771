"""Maps classification results to TypeScript type expressions."""

from __future__ import annotations

from ..models import ClassificationResult, CollectionOf, Ignored, Model, Opaque, Primitive

ARRAY_SUFFIX = "[]"
OPAQUE_TYPE = "any"


class MappingError(ValueError):
    """Raised when an ignored type reaches the mapper."""


def map_type_name(result: ClassificationResult) -> str:
    """Return the literal TypeScript type for ``result``.

    Ignored types must be filtered out (or erased) by the caller first.
    """
    if isinstance(result, Primitive):
        return result.target
    if isinstance(result, CollectionOf):
        return map_type_name(result.inner) + ARRAY_SUFFIX
    if isinstance(result, Model):
        return result.descriptor.name
    if isinstance(result, Ignored):
        raise MappingError("Ignored types have no TypeScript representation")
    if isinstance(result, Opaque):
        return OPAQUE_TYPE
    return OPAQUE_TYPE


def contains_ignored(result: ClassificationResult) -> bool:
    if isinstance(result, Ignored):
        return True
    if isinstance(result, CollectionOf):
        return contains_ignored(result.inner)
    return False


def erase_ignored(result: ClassificationResult) -> ClassificationResult:
    """Replace ignored leaves with an opaque type, for slots that cannot be skipped."""
    if isinstance(result, Ignored):
        return Opaque("ignored")
    if isinstance(result, CollectionOf):
        return CollectionOf(erase_ignored(result.inner))
    return result


__all__ = [
    "ARRAY_SUFFIX",
    "MappingError",
    "OPAQUE_TYPE",
    "contains_ignored",
    "erase_ignored",
    "map_type_name",
]
