"""Tests for typescripter.generators.data_service."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

import pytest

from typescripter.config import HTTP_CLIENT_MODULE, HTTP_MODULE
from typescripter.descriptors import ReflectionModule
from typescripter.generators.data_service import DataServiceGenerator, controller_name, service_name
from typescripter.graph import EndpointScanner
from typescripter.markers import http_method, ignore, route
from typescripter.models import ResolvedEndpoint


class ApiController:
    pass


@dataclass
class Order:
    id: int


@ignore
class Audit:
    pass


class OrdersController(ApiController):
    def get_order(self, order_id: int) -> Order:
        raise NotImplementedError

    def save(self, order: Order, notify: bool) -> None:
        raise NotImplementedError

    def list_orders(self, tags: List[str]) -> List[Order]:
        raise NotImplementedError

    @route("orders/{order_id}/lines")
    @http_method("delete")
    def remove_line(self, order_id: int, line: int) -> None:
        raise NotImplementedError

    def audit(self, entry: Audit) -> Audit:
        raise NotImplementedError


@pytest.fixture
def endpoint() -> ResolvedEndpoint:
    scanner = EndpointScanner()
    (resolved,) = scanner.resolve(scanner.find_endpoints([ReflectionModule(OrdersController.__module__)]))
    return resolved


@pytest.fixture
def generator() -> DataServiceGenerator:
    return DataServiceGenerator()


def test_service_and_controller_names() -> None:
    assert controller_name("OrdersController") == "Orders"
    assert controller_name("Controller") == "Controller"
    assert controller_name("Reports") == "Reports"
    assert service_name("OrdersController") == "OrdersService"


def test_http_client_service_header(generator: DataServiceGenerator, endpoint: ResolvedEndpoint) -> None:
    rendered = generator.render_service(endpoint, api_relative_path="/api/", http_module=HTTP_CLIENT_MODULE)

    assert rendered.startswith(
        "import { Injectable } from '@angular/core';\n"
        "import { HttpClient } from '@angular/common/http';\n"
        "import { Observable } from 'rxjs';\n"
        "import { Order } from './Order';\n"
        "\n"
        "@Injectable()\n"
        "export class OrdersService {\n"
        "    constructor(private http: HttpClient) {\n"
        "    }\n"
    )
    assert rendered.endswith("    }\n}\n")


def test_http_client_methods(generator: DataServiceGenerator, endpoint: ResolvedEndpoint) -> None:
    rendered = generator.render_service(endpoint, api_relative_path="api", http_module=HTTP_CLIENT_MODULE)

    assert (
        "    public getOrder(order_id: number): Observable<Order> {\n"
        "        return this.http.get<Order>(`api/Orders/get_order?order_id=${encodeURIComponent(String(order_id))}`);\n"
        "    }\n"
    ) in rendered
    assert (
        "        return this.http.post<void>(`api/Orders/save?notify=${encodeURIComponent(String(notify))}`, order);\n"
    ) in rendered
    assert (
        "    public listOrders(tags: string[]): Observable<Order[]> {\n"
        "        return this.http.get<Order[]>(`api/Orders/list_orders?tags=${encodeURIComponent(JSON.stringify(tags))}`);\n"
    ) in rendered
    assert (
        "        return this.http.delete<void>(`api/orders/${order_id}/lines?line=${encodeURIComponent(String(line))}`);\n"
    ) in rendered


def test_ignored_signature_types_are_erased_to_any(
    generator: DataServiceGenerator, endpoint: ResolvedEndpoint
) -> None:
    rendered = generator.render_service(endpoint, api_relative_path="api", http_module=HTTP_CLIENT_MODULE)

    assert "    public audit(entry: any): Observable<any> {\n" in rendered
    assert "Audit" not in rendered


def test_http_module_service_maps_responses(generator: DataServiceGenerator, endpoint: ResolvedEndpoint) -> None:
    rendered = generator.render_service(endpoint, api_relative_path="api", http_module=HTTP_MODULE)

    assert "import { Http } from '@angular/http';\n" in rendered
    assert "import 'rxjs/add/operator/map';\n" in rendered
    assert "    constructor(private http: Http) {\n" in rendered
    assert (
        "        return this.http.get(`api/Orders/get_order?order_id=${encodeURIComponent(String(order_id))}`)"
        ".map(response => response.json() as Order);\n"
    ) in rendered
    assert ".map(() => undefined);\n" in rendered


def test_combined_imports_use_the_index(generator: DataServiceGenerator, endpoint: ResolvedEndpoint) -> None:
    rendered = generator.render_service(
        endpoint, api_relative_path="api", http_module=HTTP_CLIENT_MODULE, combine_imports=True
    )

    assert "import { Order } from './index';\n" in rendered


def test_generate_without_api_path_writes_nothing(
    generator: DataServiceGenerator, endpoint: ResolvedEndpoint, tmp_path: Path
) -> None:
    assert generator.generate(None, [endpoint], tmp_path, HTTP_CLIENT_MODULE) == []
    assert list(tmp_path.iterdir()) == []


def test_generate_writes_service_files(
    generator: DataServiceGenerator, endpoint: ResolvedEndpoint, tmp_path: Path
) -> None:
    names = generator.generate("api", [endpoint], tmp_path, HTTP_CLIENT_MODULE)

    assert names == ["OrdersService"]
    assert (tmp_path / "OrdersService.ts").is_file()
