"""Locates endpoint classes and collects the models their signatures use."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence

from ..descriptors.base import DescriptorError, MethodDescriptor, ModuleDescriptor, TypeDescriptor
from ..logging import get_logger
from ..models import (
    ClassificationResult,
    CollectionOf,
    EndpointDescriptor,
    Model,
    ModelSet,
    ResolvedEndpoint,
    ResolvedMethod,
    ResolvedParameter,
)
from .classifier import TypeClassifier

DEFAULT_ENDPOINT_BASES: tuple[str, ...] = ("ApiController",)

_VERB_PREFIX = re.compile(r"^([Gg]et|[Pp]ost|[Pp]ut|[Dd]elete|[Pp]atch)(?=_|[A-Z]|$)")
_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


class EndpointScanner:
    """Finds endpoints across loaded modules and derives their seed models."""

    def __init__(
        self,
        classifier: Optional[TypeClassifier] = None,
        base_names: Sequence[str] = DEFAULT_ENDPOINT_BASES,
    ) -> None:
        self.classifier = classifier or TypeClassifier()
        self.base_names = frozenset(base_names)
        self.logger = get_logger("graph.scanner")

    def find_endpoints(self, modules: Iterable[ModuleDescriptor]) -> List[EndpointDescriptor]:
        endpoints: dict[TypeDescriptor, EndpointDescriptor] = {}
        for module in modules:
            try:
                declared = list(module.types())
            except DescriptorError as exc:
                self.logger.warning("Skipping module %s: %s", module.name, exc)
                continue
            for descriptor in declared:
                if descriptor in endpoints or not self.is_endpoint(descriptor):
                    continue
                endpoints[descriptor] = EndpointDescriptor(
                    type=descriptor, methods=tuple(self._methods_of(descriptor))
                )
        return sorted(endpoints.values(), key=lambda endpoint: endpoint.type.full_name)

    def is_endpoint(self, descriptor: TypeDescriptor) -> bool:
        """Only direct bases count; indirect inheritance from an allowed base does not."""
        direct = [descriptor.base, *descriptor.interfaces]
        return any(base is not None and base.name in self.base_names for base in direct)

    def collect_seed_models(self, endpoints: Iterable[EndpointDescriptor]) -> ModelSet:
        seed = ModelSet()
        for endpoint in endpoints:
            for method in endpoint.methods:
                signature = [method.returns, *(parameter.type for parameter in method.parameters)]
                for descriptor in signature:
                    seed.update(self.classifier.models_of(self.classifier.classify(descriptor)))
        return seed

    def resolve(self, endpoints: Iterable[EndpointDescriptor]) -> List[ResolvedEndpoint]:
        """Classify every parameter and return type of every endpoint method."""
        resolved: List[ResolvedEndpoint] = []
        for endpoint in endpoints:
            methods = [self._resolve_method(method) for method in endpoint.methods]
            resolved.append(ResolvedEndpoint(endpoint=endpoint, methods=methods))
        return resolved

    def _resolve_method(self, method: MethodDescriptor) -> ResolvedMethod:
        parameters = tuple(
            ResolvedParameter(name=parameter.name, classification=self.classifier.classify(parameter.type))
            for parameter in method.parameters
        )
        return ResolvedMethod(
            name=method.name,
            http_method=self._http_method(method, parameters),
            returns=self.classifier.classify(method.returns),
            parameters=parameters,
            route=method.route,
        )

    @staticmethod
    def _http_method(method: MethodDescriptor, parameters: Sequence[ResolvedParameter]) -> str:
        if method.http_method:
            return method.http_method.upper()
        match = _VERB_PREFIX.match(method.name)
        if match:
            return match.group(1).upper()
        if any(is_body_candidate(parameter.classification) for parameter in parameters):
            return "POST"
        return "GET"

    def _methods_of(self, descriptor: TypeDescriptor) -> List[MethodDescriptor]:
        try:
            return descriptor.methods()
        except DescriptorError as exc:
            self.logger.warning("Skipping methods of %s: %s", descriptor.full_name, exc)
            return []


def is_body_candidate(result: ClassificationResult) -> bool:
    """True for models and collections of models, which travel in a request body."""
    if isinstance(result, CollectionOf):
        return is_body_candidate(result.inner)
    return isinstance(result, Model)


def accepts_body(http_method: str) -> bool:
    return http_method.upper() in _BODY_METHODS


__all__ = [
    "DEFAULT_ENDPOINT_BASES",
    "EndpointScanner",
    "accepts_body",
    "is_body_candidate",
]
