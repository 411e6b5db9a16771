"""Computes the closure of model types reachable from a seed set."""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Sequence

from ..descriptors.base import DescriptorError, ModuleDescriptor, TypeDescriptor
from ..logging import get_logger
from ..models import ModelSet
from .classifier import TypeClassifier


class GraphExpander:
    """Expands seed models through derived types and declared properties.

    The result is the smallest model set that contains the seed models and is
    closed under "assignable subtype declared in the same module", "model
    ancestor" and "model reachable through a declared property".
    """

    def __init__(self, classifier: Optional[TypeClassifier] = None) -> None:
        self.classifier = classifier or TypeClassifier()
        self.logger = get_logger("graph.expander")

    def expand(self, seed: Iterable[TypeDescriptor]) -> ModelSet:
        result = ModelSet()
        pending: Deque[TypeDescriptor] = deque()
        module_types: Dict[ModuleDescriptor, Sequence[TypeDescriptor]] = {}

        def visit(found: Iterable[TypeDescriptor]) -> None:
            for descriptor in found:
                # Marked visited before queueing so cycles terminate.
                if result.add(descriptor):
                    pending.append(descriptor)

        for descriptor in seed:
            visit(self.classifier.models_of(self.classifier.classify(descriptor)))

        while pending:
            model = pending.popleft()
            visit(self._derived_models(model, module_types))
            visit(self._property_models(model))

        self.logger.debug("Expanded seed to %d models", len(result))
        return result

    def _derived_models(
        self,
        model: TypeDescriptor,
        module_types: Dict[ModuleDescriptor, Sequence[TypeDescriptor]],
    ) -> List[TypeDescriptor]:
        module = model.module
        if module is None:
            return []
        if module not in module_types:
            try:
                module_types[module] = list(module.types())
            except DescriptorError as exc:
                self.logger.debug("Skipping derived types of %s: %s", model.full_name, exc)
                module_types[module] = []

        derived: List[TypeDescriptor] = []
        for candidate in module_types[module]:
            if candidate == model or not model.is_assignable_from(candidate):
                continue
            derived.extend(self.classifier.models_of(self.classifier.classify(candidate)))
        return derived

    def _property_models(self, model: TypeDescriptor) -> List[TypeDescriptor]:
        try:
            properties = model.properties()
        except DescriptorError as exc:
            self.logger.debug("Skipping properties of %s: %s", model.full_name, exc)
            return []

        found: List[TypeDescriptor] = []
        for prop in properties:
            found.extend(self.classifier.models_of(self.classifier.classify(prop.type)))
        return found


__all__ = ["GraphExpander"]
