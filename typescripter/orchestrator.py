"""Pipeline orchestration: load, scan, expand, render, clean up."""

from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from .config import Options
from .descriptors.base import ModuleDescriptor
from .generators import DataServiceGenerator, EntityGenerator, IndexGenerator, TS_EXTENSION
from .graph import EndpointScanner, GraphExpander, TypeClassifier
from .loader import ModuleLoader
from .logging import get_logger
from .models import ModelSet, ResolvedEndpoint

ModuleSource = Callable[[Options], Sequence[ModuleDescriptor]]


@dataclass
class GenerationResult:
    """Summary of a generation run."""

    models: ModelSet
    endpoints: List[ResolvedEndpoint]
    generated: List[str]
    removed: List[Path] = field(default_factory=list)
    elapsed: float = 0.0


class Orchestrator:
    """Coordinates the type graph resolution and the TypeScript renderers."""

    def __init__(
        self,
        classifier: TypeClassifier | None = None,
        entity_generator: EntityGenerator | None = None,
        data_service_generator: DataServiceGenerator | None = None,
        index_generator: IndexGenerator | None = None,
        module_source: Optional[ModuleSource] = None,
    ) -> None:
        self.classifier = classifier or TypeClassifier()
        self.entity_generator = entity_generator or EntityGenerator(self.classifier)
        self.data_service_generator = data_service_generator or DataServiceGenerator()
        self.index_generator = index_generator or IndexGenerator()
        self._module_source = module_source or _load_modules
        self.logger = get_logger("orchestrator")

    def run(self, options: Options) -> GenerationResult:
        started = time.perf_counter()
        self.logger.info("Scanning for DTO objects in %s", options.source_path())

        modules = self._module_source(options)
        scanner = EndpointScanner(self.classifier, options.controller_base_class_names)
        endpoints = scanner.find_endpoints(modules)
        self.logger.debug("Found %d endpoints", len(endpoints))

        seed = scanner.collect_seed_models(endpoints)
        models = GraphExpander(self.classifier).expand(seed)
        self.logger.info("Found %d models", len(models))
        self._warn_on_name_collisions(models)

        resolved = scanner.resolve(endpoints)
        target = options.destination_path()
        target.mkdir(parents=True, exist_ok=True)

        entity_names = self.entity_generator.generate(target, models, options.combine_imports)
        service_names = self.data_service_generator.generate(
            options.api_relative_path,
            resolved,
            target,
            options.http_module,
            options.combine_imports,
        )
        generated = self.index_generator.generate(target, entity_names, service_names)
        removed = remove_non_generated_files(target, generated)

        elapsed = time.perf_counter() - started
        self.logger.info("Done in %.3fs", elapsed)
        return GenerationResult(
            models=models,
            endpoints=resolved,
            generated=generated,
            removed=removed,
            elapsed=elapsed,
        )

    def _warn_on_name_collisions(self, models: ModelSet) -> None:
        counts = Counter(model.name for model in models)
        for name, count in sorted(counts.items()):
            if count > 1:
                self.logger.warning(
                    "%d models share the name %s; only one %s%s is written",
                    count,
                    name,
                    name,
                    TS_EXTENSION,
                )


def remove_non_generated_files(target: Path, generated: Iterable[str]) -> List[Path]:
    """Delete files in ``target`` that this run did not generate (case-insensitive)."""
    keep = {f"{name}{TS_EXTENSION}".lower() for name in generated}
    removed: List[Path] = []
    for path in sorted(target.iterdir()):
        if path.is_file() and path.name.lower() not in keep:
            path.unlink()
            removed.append(path)
    return removed


def _load_modules(options: Options) -> Sequence[ModuleDescriptor]:
    return ModuleLoader(options.source_path(), options.files).load().modules


__all__ = ["GenerationResult", "Orchestrator", "remove_non_generated_files"]
