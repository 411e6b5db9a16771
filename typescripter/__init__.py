"""Generate TypeScript definitions from Python API controllers and their models."""

from __future__ import annotations

from .markers import http_method, ignore, route

__version__ = "0.1.0"

__all__ = ["__version__", "http_method", "ignore", "route"]
