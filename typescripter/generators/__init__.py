"""TypeScript renderers for entities, data services and the index barrel."""

from __future__ import annotations

from .base import INDEX_NAME, TS_EXTENSION, create_environment
from .data_service import DataServiceGenerator, service_name
from .entity import EntityGenerator
from .index import IndexGenerator

__all__ = [
    "DataServiceGenerator",
    "EntityGenerator",
    "INDEX_NAME",
    "IndexGenerator",
    "TS_EXTENSION",
    "create_environment",
    "service_name",
]
