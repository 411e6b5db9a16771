"""Core data models shared across typescripter components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .descriptors.base import MethodDescriptor, TypeDescriptor


@dataclass(frozen=True)
class Primitive:
    """Built-in type with a fixed TypeScript name."""

    target: str


@dataclass(frozen=True)
class Model:
    """Type that needs its own generated definition."""

    descriptor: TypeDescriptor


@dataclass(frozen=True)
class CollectionOf:
    """Sequence whose elements classify as ``inner``."""

    inner: "ClassificationResult"


@dataclass(frozen=True)
class Opaque:
    """Shape that is intentionally left untyped."""

    reason: str = "any"


@dataclass(frozen=True)
class Ignored:
    """Type explicitly excluded from generation."""


ClassificationResult = Union[Primitive, Model, CollectionOf, Opaque, Ignored]


class ModelSet:
    """Grow-only set of model descriptors, unique by descriptor identity."""

    def __init__(self, items: Iterable[TypeDescriptor] = ()) -> None:
        self._items: dict[TypeDescriptor, None] = {}
        self.update(items)

    def add(self, descriptor: TypeDescriptor) -> bool:
        """Add ``descriptor``; return True when it was not present yet."""
        if descriptor in self._items:
            return False
        self._items[descriptor] = None
        return True

    def update(self, descriptors: Iterable[TypeDescriptor]) -> None:
        for descriptor in descriptors:
            self.add(descriptor)

    def sorted(self) -> List[TypeDescriptor]:
        return sorted(self._items, key=lambda item: (item.name, item.full_name))

    def names(self) -> List[str]:
        return [item.name for item in self.sorted()]

    def __contains__(self, descriptor: object) -> bool:
        return descriptor in self._items

    def __iter__(self) -> Iterator[TypeDescriptor]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ModelSet):
            return self._items.keys() == other._items.keys()
        if isinstance(other, (set, frozenset)):
            return set(self._items) == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ModelSet({', '.join(self.names())})"


@dataclass(frozen=True)
class EndpointDescriptor:
    """Endpoint class together with the methods that define its API surface."""

    type: TypeDescriptor
    methods: Tuple[MethodDescriptor, ...] = ()

    @property
    def name(self) -> str:
        return self.type.name


@dataclass(frozen=True)
class ResolvedParameter:
    name: str
    classification: ClassificationResult


@dataclass(frozen=True)
class ResolvedMethod:
    """Endpoint method with every signature type already classified."""

    name: str
    http_method: str
    returns: ClassificationResult
    parameters: Tuple[ResolvedParameter, ...] = ()
    route: Optional[str] = None


@dataclass
class ResolvedEndpoint:
    """Per-endpoint artifact handed to the data service renderer."""

    endpoint: EndpointDescriptor
    methods: List[ResolvedMethod] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.endpoint.name


__all__ = [
    "ClassificationResult",
    "CollectionOf",
    "EndpointDescriptor",
    "Ignored",
    "Model",
    "ModelSet",
    "Opaque",
    "Primitive",
    "ResolvedEndpoint",
    "ResolvedMethod",
    "ResolvedParameter",
]
