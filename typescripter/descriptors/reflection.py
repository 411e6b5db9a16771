"""Type descriptors backed by runtime introspection of imported Python modules."""

from __future__ import annotations

import dataclasses
import enum
import inspect
import sys
import types
import typing
from typing import Any, Hashable, List, Optional, Sequence, Tuple, Union

from ..logging import get_logger
from ..markers import HTTP_METHOD_ATTR, ROUTE_ATTR, Marker, declared_markers
from .base import (
    DescriptorError,
    MethodDescriptor,
    ModuleDescriptor,
    ParameterDescriptor,
    PropertyDescriptor,
    TypeDescriptor,
    TypeKind,
)

_LOGGER = get_logger("descriptors.reflection")

# Framework packages whose classes behave like the runtime's own types: they
# are never generated and never count as a model base.
SYSTEM_PACKAGES: frozenset[str] = frozenset(
    {
        "typescripter",
        "pydantic",
        "pydantic_core",
        "typing_extensions",
        "annotated_types",
    }
)

_STDLIB_PACKAGES: frozenset[str] = frozenset(sys.stdlib_module_names) | {"builtins"}

_SCALAR_CLASSES: frozenset[type] = frozenset(
    {int, float, complex, bool, str, bytes, bytearray, type(None)}
)

_SKIPPED_BASES: Tuple[Any, ...] = (object, typing.Generic, typing.Protocol)


def describe(hint: Any) -> TypeDescriptor:
    """Return a descriptor for a runtime type or type hint."""
    if hint is None:
        hint = type(None)
    if hint is typing.Any:
        return ReflectionType(
            key=("type", "typing", "Any"),
            name="Any",
            full_name="typing.Any",
            kind=TypeKind.PRIMITIVE,
        )
    if isinstance(hint, (str, typing.ForwardRef)):
        text = hint if isinstance(hint, str) else hint.__forward_arg__
        return _unknown(text)
    if isinstance(hint, typing.TypeVar):
        return _unknown(hint.__name__)

    origin = typing.get_origin(hint)
    if origin is typing.Annotated:
        return describe(typing.get_args(hint)[0])
    if origin is Union or origin is types.UnionType:
        return _describe_union(hint)
    if origin is tuple:
        args = typing.get_args(hint)
        if len(args) == 2 and args[1] is Ellipsis:
            element = describe(args[0])
            return ReflectionType(
                key=("array", element.key),
                name=f"{element.name}[]",
                full_name=f"{element.full_name}[]",
                kind=TypeKind.ARRAY,
                element=element,
            )
    if origin is not None:
        return _describe_generic(origin, typing.get_args(hint))

    if isinstance(hint, type):
        return _describe_class(hint)
    return _unknown(repr(hint))


def _describe_union(hint: Any) -> TypeDescriptor:
    args = typing.get_args(hint)
    non_null = [arg for arg in args if arg is not type(None)]
    if len(non_null) == 1:
        return describe(non_null[0])
    return _describe_generic(Union, tuple(non_null))


def _describe_generic(origin: Any, raw_args: Sequence[Any]) -> TypeDescriptor:
    generic_name = _origin_name(origin)
    if origin is typing.Literal:
        # Literal arguments are values, not types.
        raw_args = ()
    arguments = tuple(describe(arg) for arg in raw_args if arg is not Ellipsis)
    simple = generic_name.rsplit(".", 1)[-1]
    name = f"{simple}[{', '.join(arg.name for arg in arguments)}]" if arguments else simple
    return ReflectionType(
        key=("generic", generic_name, *(arg.key for arg in arguments)),
        name=name,
        full_name=f"{generic_name}[{', '.join(arg.full_name for arg in arguments)}]",
        kind=TypeKind.GENERIC,
        arguments=arguments,
        generic_name=generic_name,
        obj=origin if isinstance(origin, type) else None,
    )


def _origin_name(origin: Any) -> str:
    if origin is Union:
        return "typing.Union"
    if isinstance(origin, type):
        return f"{origin.__module__}.{origin.__qualname__}"
    name = getattr(origin, "_name", None) or getattr(origin, "__name__", None) or repr(origin)
    module = getattr(origin, "__module__", None) or "typing"
    return f"{module}.{name}"


def _describe_class(cls: type) -> TypeDescriptor:
    if cls in _SCALAR_CLASSES:
        kind = TypeKind.PRIMITIVE
    elif issubclass(cls, enum.Enum):
        kind = TypeKind.ENUM
    elif getattr(cls, "_is_protocol", False):
        kind = TypeKind.INTERFACE
    else:
        kind = TypeKind.CLASS
    return ReflectionType(
        key=("type", cls.__module__, cls.__qualname__),
        name=cls.__name__,
        full_name=f"{cls.__module__}.{cls.__qualname__}",
        kind=kind,
        obj=cls,
    )


def _unknown(text: str) -> TypeDescriptor:
    return ReflectionType(
        key=("unknown", text),
        name=text,
        full_name=text,
        kind=TypeKind.UNKNOWN,
    )


def _top_level(module_name: str) -> str:
    return module_name.split(".", 1)[0]


class ReflectionType(TypeDescriptor):
    """Descriptor wrapping a Python class or typing construct."""

    def __init__(
        self,
        *,
        key: Tuple[Hashable, ...],
        name: str,
        full_name: str,
        kind: TypeKind,
        obj: Optional[type] = None,
        element: Optional[TypeDescriptor] = None,
        arguments: Tuple[TypeDescriptor, ...] = (),
        generic_name: Optional[str] = None,
    ) -> None:
        self._key = key
        self._name = name
        self._full_name = full_name
        self._kind = kind
        self._obj = obj
        self._element = element
        self._arguments = arguments
        self._generic_name = generic_name

    @property
    def key(self) -> Tuple[Hashable, ...]:
        return self._key

    @property
    def name(self) -> str:
        return self._name

    @property
    def full_name(self) -> str:
        return self._full_name

    @property
    def kind(self) -> TypeKind:
        return self._kind

    @property
    def element(self) -> Optional[TypeDescriptor]:
        return self._element

    @property
    def arguments(self) -> Tuple[TypeDescriptor, ...]:
        return self._arguments

    @property
    def generic_name(self) -> Optional[str]:
        return self._generic_name

    @property
    def python_type(self) -> Optional[type]:
        """The wrapped class, when the descriptor is class-backed."""
        return self._obj

    @property
    def base(self) -> Optional[TypeDescriptor]:
        bases = self._declared_bases()
        return describe(bases[0]) if bases else None

    @property
    def interfaces(self) -> Tuple[TypeDescriptor, ...]:
        return tuple(describe(base) for base in self._declared_bases()[1:])

    @property
    def module(self) -> Optional[ModuleDescriptor]:
        if self._obj is None or self._kind is TypeKind.GENERIC:
            return None
        return ReflectionModule(_top_level(self._obj.__module__))

    @property
    def markers(self) -> frozenset[Marker]:
        if self._obj is None or self._kind is TypeKind.GENERIC:
            return frozenset()
        return declared_markers(self._obj)

    @property
    def is_system(self) -> bool:
        if self._obj is None:
            return self._kind is not TypeKind.UNKNOWN
        top = _top_level(self._obj.__module__)
        return top in _STDLIB_PACKAGES or top in SYSTEM_PACKAGES

    def properties(self) -> List[PropertyDescriptor]:
        if self._obj is None or self._kind not in (TypeKind.CLASS, TypeKind.INTERFACE):
            return []
        cls = self._obj
        try:
            hints = _own_type_hints(cls)
        except Exception as exc:
            raise DescriptorError(f"Cannot resolve annotations of {self.full_name}: {exc}") from exc

        result: List[PropertyDescriptor] = []
        seen: set[str] = set()
        for name, hint in hints.items():
            if name.startswith("_"):
                continue
            if typing.get_origin(hint) is typing.ClassVar or isinstance(hint, dataclasses.InitVar):
                continue
            result.append(PropertyDescriptor(name=name, type=describe(hint), nullable=_is_optional(hint)))
            seen.add(name)

        for name, member in vars(cls).items():
            if name.startswith("_") or name in seen or not isinstance(member, property):
                continue
            if member.fget is None:
                continue
            try:
                returns = typing.get_type_hints(member.fget).get("return", typing.Any)
            except Exception as exc:
                raise DescriptorError(f"Cannot resolve property {self.full_name}.{name}: {exc}") from exc
            result.append(PropertyDescriptor(name=name, type=describe(returns), nullable=_is_optional(returns)))
        return result

    def methods(self) -> List[MethodDescriptor]:
        if self._obj is None or self._kind is not TypeKind.CLASS:
            return []
        result: List[MethodDescriptor] = []
        for name, member in vars(self._obj).items():
            if name.startswith("_"):
                continue
            bound_first = True
            if isinstance(member, staticmethod):
                member = member.__func__
                bound_first = False
            elif isinstance(member, classmethod):
                member = member.__func__
            if not inspect.isfunction(member):
                continue
            result.append(self._describe_method(name, member, skip_first=bound_first))
        return result

    def _describe_method(self, name: str, fn: Any, *, skip_first: bool) -> MethodDescriptor:
        try:
            hints = typing.get_type_hints(fn)
        except Exception as exc:  # unresolved forward references degrade to Any
            _LOGGER.debug("Cannot resolve hints of %s.%s: %s", self.full_name, name, exc)
            hints = {}

        parameters: List[ParameterDescriptor] = []
        signature = inspect.signature(fn)
        for index, parameter in enumerate(signature.parameters.values()):
            if skip_first and index == 0:
                continue
            if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
                continue
            parameters.append(
                ParameterDescriptor(name=parameter.name, type=describe(hints.get(parameter.name, typing.Any)))
            )

        returns = hints["return"] if "return" in hints else typing.Any
        return MethodDescriptor(
            name=name,
            returns=describe(returns),
            parameters=tuple(parameters),
            http_method=getattr(fn, HTTP_METHOD_ATTR, None),
            route=getattr(fn, ROUTE_ATTR, None),
        )

    def enum_members(self) -> List[Tuple[str, Any]]:
        if self._kind is not TypeKind.ENUM or self._obj is None:
            return []
        return [(member.name, member.value) for member in self._obj]

    def is_assignable_from(self, other: TypeDescriptor) -> bool:
        if self._obj is None or self._kind is TypeKind.GENERIC:
            return False
        other_obj = getattr(other, "python_type", None)
        if other_obj is None or other.kind is TypeKind.GENERIC:
            return False
        try:
            return issubclass(other_obj, self._obj)
        except TypeError:
            return False

    def _declared_bases(self) -> Tuple[type, ...]:
        if self._obj is None or self._kind is TypeKind.GENERIC:
            return ()
        return tuple(base for base in self._obj.__bases__ if base not in _SKIPPED_BASES)


def _own_type_hints(cls: type) -> dict[str, Any]:
    """Resolve the annotations declared on ``cls`` itself, nested forward references included.

    Hints inherited from framework bases are never evaluated; some of them only
    resolve under static type checking.
    """
    namespace = {"__annotations__": dict(inspect.get_annotations(cls)), "__module__": cls.__module__}
    view = type(cls.__name__, (), namespace)
    module = sys.modules.get(cls.__module__)
    # Module names take precedence over class attributes, as in get_type_hints(cls).
    return typing.get_type_hints(
        view,
        globalns=dict(vars(cls)),
        localns=dict(vars(module)) if module is not None else {},
        include_extras=True,
    )


def _is_optional(hint: Any) -> bool:
    origin = typing.get_origin(hint)
    if origin is typing.Annotated:
        return _is_optional(typing.get_args(hint)[0])
    if origin is Union or origin is types.UnionType:
        return type(None) in typing.get_args(hint)
    return False


class ReflectionModule(ModuleDescriptor):
    """An imported module (and its imported submodules) viewed as a type container."""

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def types(self) -> Sequence[TypeDescriptor]:
        prefix = f"{self._name}."
        try:
            modules = [
                module
                for module_name, module in list(sys.modules.items())
                if module is not None and (module_name == self._name or module_name.startswith(prefix))
            ]
            found: dict[TypeDescriptor, None] = {}
            for module in modules:
                for value in list(vars(module).values()):
                    if isinstance(value, type) and value.__module__ == module.__name__:
                        found.setdefault(describe(value), None)
        except Exception as exc:
            raise DescriptorError(f"Cannot enumerate types of module {self._name}: {exc}") from exc
        if not modules:
            raise DescriptorError(f"Module {self._name} is not loaded")
        return list(found)


__all__ = ["ReflectionModule", "ReflectionType", "SYSTEM_PACKAGES", "describe"]
