"""Type-graph resolution: classification, mapping, endpoint scanning and closure."""

from __future__ import annotations

from .classifier import PRIMITIVE_TYPES, TypeClassifier
from .expander import GraphExpander
from .mapper import MappingError, contains_ignored, erase_ignored, map_type_name
from .scanner import DEFAULT_ENDPOINT_BASES, EndpointScanner

__all__ = [
    "DEFAULT_ENDPOINT_BASES",
    "EndpointScanner",
    "GraphExpander",
    "MappingError",
    "PRIMITIVE_TYPES",
    "TypeClassifier",
    "contains_ignored",
    "erase_ignored",
    "map_type_name",
]
