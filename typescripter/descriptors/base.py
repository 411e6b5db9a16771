"""Capability interfaces for inspecting a loaded object model."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable, List, Optional, Sequence, Tuple

from ..markers import Marker


class DescriptorError(RuntimeError):
    """Raised when metadata for a type or module cannot be read."""


class TypeKind(Enum):
    """Structural shape of a described type."""

    PRIMITIVE = "primitive"
    ENUM = "enum"
    CLASS = "class"
    INTERFACE = "interface"
    ARRAY = "array"
    GENERIC = "generic"
    UNKNOWN = "unknown"


class TypeDescriptor(ABC):
    """Read-only view over a type in the source object model.

    Two descriptors for the same declared type compare equal and hash
    identically; identity is carried entirely by :attr:`key`.
    """

    @property
    @abstractmethod
    def key(self) -> Tuple[Hashable, ...]:
        """Canonical identity of the type."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Simple (unqualified) name."""

    @property
    @abstractmethod
    def full_name(self) -> str:
        """Module-qualified name."""

    @property
    @abstractmethod
    def kind(self) -> TypeKind:
        ...

    @property
    def element(self) -> Optional["TypeDescriptor"]:
        """Element type of an ARRAY."""
        return None

    @property
    def arguments(self) -> Tuple["TypeDescriptor", ...]:
        """Type arguments of a GENERIC instantiation."""
        return ()

    @property
    def generic_name(self) -> Optional[str]:
        """Canonical full name of a GENERIC instantiation's origin."""
        return None

    @property
    def base(self) -> Optional["TypeDescriptor"]:
        """Declared primary base type, if any."""
        return None

    @property
    def interfaces(self) -> Tuple["TypeDescriptor", ...]:
        """Direct bases other than :attr:`base`."""
        return ()

    @property
    def module(self) -> Optional["ModuleDescriptor"]:
        return None

    @property
    def markers(self) -> frozenset[Marker]:
        return frozenset()

    @property
    def is_system(self) -> bool:
        """True for types owned by the standard library or a framework package."""
        return False

    def properties(self) -> List["PropertyDescriptor"]:
        """Declared (not inherited) properties."""
        return []

    def methods(self) -> List["MethodDescriptor"]:
        """Public methods declared on the type."""
        return []

    def enum_members(self) -> List[Tuple[str, Any]]:
        return []

    @abstractmethod
    def is_assignable_from(self, other: "TypeDescriptor") -> bool:
        """Return True when ``other`` has this type in its ancestry."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeDescriptor):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.full_name} ({self.kind.value})>"


class ModuleDescriptor(ABC):
    """A loaded unit of the object model that owns type declarations."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def types(self) -> Sequence[TypeDescriptor]:
        """Enumerate the declared types; raises DescriptorError when that fails."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModuleDescriptor):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(("module", self.name))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


@dataclass(frozen=True)
class PropertyDescriptor:
    """A declared property and its type."""

    name: str
    type: TypeDescriptor
    nullable: bool = False


@dataclass(frozen=True)
class ParameterDescriptor:
    """A method parameter and its type."""

    name: str
    type: TypeDescriptor


@dataclass(frozen=True)
class MethodDescriptor:
    """A method signature: ordered parameters and a return type."""

    name: str
    returns: TypeDescriptor
    parameters: Tuple[ParameterDescriptor, ...] = ()
    http_method: Optional[str] = None
    route: Optional[str] = None


__all__ = [
    "DescriptorError",
    "MethodDescriptor",
    "ModuleDescriptor",
    "ParameterDescriptor",
    "PropertyDescriptor",
    "TypeDescriptor",
    "TypeKind",
]
