"""Type descriptor interfaces and the runtime reflection backend."""

from __future__ import annotations

from .base import (
    DescriptorError,
    MethodDescriptor,
    ModuleDescriptor,
    ParameterDescriptor,
    PropertyDescriptor,
    TypeDescriptor,
    TypeKind,
)
from .reflection import ReflectionModule, ReflectionType, describe

__all__ = [
    "DescriptorError",
    "MethodDescriptor",
    "ModuleDescriptor",
    "ParameterDescriptor",
    "PropertyDescriptor",
    "ReflectionModule",
    "ReflectionType",
    "TypeDescriptor",
    "TypeKind",
    "describe",
]
