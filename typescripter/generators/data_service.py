"""Renders an Angular data service per endpoint."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from jinja2 import Environment

from ..config import HTTP_CLIENT_MODULE
from ..graph.mapper import erase_ignored, map_type_name
from ..graph.scanner import accepts_body, is_body_candidate
from ..logging import get_logger
from ..models import Primitive, ResolvedEndpoint, ResolvedMethod, ResolvedParameter
from .base import TemplateGenerator, build_imports, camel_case, referenced_models, write_file

SERVICE_SUFFIX = "Service"
_CONTROLLER_SUFFIX = "Controller"
_ROUTE_PARAMETER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


class DataServiceGenerator(TemplateGenerator):
    """Writes ``<Endpoint>Service.ts`` clients that call the endpoint methods."""

    def __init__(self, environment: Environment | None = None) -> None:
        super().__init__(environment)
        self.logger = get_logger("generators.data_service")

    def generate(
        self,
        api_relative_path: Optional[str],
        endpoints: Sequence[ResolvedEndpoint],
        target: Path,
        http_module: str,
        combine_imports: bool = False,
    ) -> List[str]:
        if not api_relative_path:
            self.logger.debug("No API path configured; skipping data services")
            return []
        names: List[str] = []
        for endpoint in endpoints:
            name = service_name(endpoint.name)
            content = self.render_service(
                endpoint,
                api_relative_path=api_relative_path,
                http_module=http_module,
                combine_imports=combine_imports,
            )
            write_file(target, name, content)
            names.append(name)
        return names

    def render_service(
        self,
        endpoint: ResolvedEndpoint,
        *,
        api_relative_path: str,
        http_module: str,
        combine_imports: bool = False,
    ) -> str:
        controller = controller_name(endpoint.name)
        referenced: List[str] = []
        methods: List[Dict[str, str]] = []
        for method in endpoint.methods:
            returns = erase_ignored(method.returns)
            referenced.extend(referenced_models(returns))
            for parameter in method.parameters:
                referenced.extend(referenced_models(erase_ignored(parameter.classification)))
            methods.append(self._render_method(method, api_relative_path, controller))

        return self.render(
            "data_service.ts.j2",
            name=service_name(endpoint.name),
            http_client=http_module == HTTP_CLIENT_MODULE,
            methods=methods,
            imports=build_imports(referenced, exclude=None, combine=combine_imports),
        )

    def _render_method(self, method: ResolvedMethod, api_relative_path: str, controller: str) -> Dict[str, str]:
        returns = map_type_name(erase_ignored(method.returns))
        verb = method.http_method.lower()

        body: Optional[ResolvedParameter] = None
        if accepts_body(method.http_method):
            body = next(
                (parameter for parameter in method.parameters if is_body_candidate(parameter.classification)),
                None,
            )

        route = method.route or f"{controller}/{method.name}"
        route_parameters = set(_ROUTE_PARAMETER.findall(route))
        path = _ROUTE_PARAMETER.sub(r"${\1}", f"{api_relative_path.strip('/')}/{route}")

        query = [
            f"{parameter.name}=${{{_encode(parameter)}}}"
            for parameter in method.parameters
            if parameter is not body and parameter.name not in route_parameters
        ]
        url = f"`{path}{'?' + '&'.join(query) if query else ''}`"

        arguments = url
        if accepts_body(method.http_method):
            arguments = f"{url}, {body.name if body is not None else 'null'}"

        signature = ", ".join(
            f"{parameter.name}: {map_type_name(erase_ignored(parameter.classification))}"
            for parameter in method.parameters
        )
        unwrap = "() => undefined" if returns == "void" else f"response => response.json() as {returns}"
        return {
            "name": camel_case(method.name),
            "signature": signature,
            "returns": returns,
            "verb": verb,
            "arguments": arguments,
            "unwrap": unwrap,
        }


def controller_name(endpoint_name: str) -> str:
    """Strip the conventional ``Controller`` suffix: ``OrdersController`` -> ``Orders``."""
    if endpoint_name.endswith(_CONTROLLER_SUFFIX) and len(endpoint_name) > len(_CONTROLLER_SUFFIX):
        return endpoint_name[: -len(_CONTROLLER_SUFFIX)]
    return endpoint_name


def service_name(endpoint_name: str) -> str:
    return f"{controller_name(endpoint_name)}{SERVICE_SUFFIX}"


def _encode(parameter: ResolvedParameter) -> str:
    if isinstance(parameter.classification, Primitive):
        return f"encodeURIComponent(String({parameter.name}))"
    return f"encodeURIComponent(JSON.stringify({parameter.name}))"


__all__ = ["DataServiceGenerator", "SERVICE_SUFFIX", "controller_name", "service_name"]
