"""Static markers that source code attaches to models and endpoint methods.

Markers are plain sentinel objects compared by identity, so an unrelated
decorator or attribute that happens to share a name never matches.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

MARKERS_ATTR = "__typescripter_markers__"
HTTP_METHOD_ATTR = "__typescripter_http_method__"
ROUTE_ATTR = "__typescripter_route__"

_HTTP_METHODS = frozenset({"GET", "POST", "PUT", "DELETE", "PATCH"})

_T = TypeVar("_T")


class Marker:
    """Identity-compared sentinel attached to a declaration."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Marker({self.name!r})"


IGNORE = Marker("ignore")


def ignore(cls: type[_T]) -> type[_T]:
    """Exclude a class from generation, even when it is reachable from an endpoint.

    The marker is stored in the class's own namespace and is not inherited by
    subclasses.
    """
    existing = frozenset(vars(cls).get(MARKERS_ATTR, ()))
    setattr(cls, MARKERS_ATTR, existing | {IGNORE})
    return cls


def declared_markers(obj: Any) -> frozenset[Marker]:
    """Return the markers declared directly on ``obj``."""
    try:
        namespace = vars(obj)
    except TypeError:
        return frozenset()
    values = namespace.get(MARKERS_ATTR, ())
    return frozenset(value for value in values if isinstance(value, Marker))


def http_method(verb: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Pin the HTTP verb the generated client uses for an endpoint method."""
    normalized = verb.strip().upper()
    if normalized not in _HTTP_METHODS:
        raise ValueError(f"Unsupported HTTP method '{verb}'")

    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        setattr(fn, HTTP_METHOD_ATTR, normalized)
        return fn

    return deco


def route(template: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Override the relative route of an endpoint method, e.g. ``orders/{order_id}``."""

    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        setattr(fn, ROUTE_ATTR, template.strip("/"))
        return fn

    return deco


__all__ = [
    "IGNORE",
    "Marker",
    "declared_markers",
    "http_method",
    "ignore",
    "route",
]
