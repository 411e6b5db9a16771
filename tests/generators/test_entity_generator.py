"""Tests for typescripter.generators.entity."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from tests._fixtures.fakes import FakeType
from typescripter.descriptors import describe
from typescripter.generators.entity import EntityGenerator
from typescripter.markers import ignore
from typescripter.models import ModelSet


class Color(Enum):
    RED = 1
    GREEN = 2


class Level(Enum):
    LOW = "low"
    HIGH = "high"


class Shape:
    sides: int


class Square(Shape):
    size: float
    label: Optional[str]


@ignore
class Secret:
    token: str


class Drawing:
    shapes: List[Shape]
    owner: Secret
    secrets: List[Secret]
    lookup: Dict[str, int]
    square: Square
    color: Color


class Node:
    name: str
    children: List[Node]


@pytest.fixture
def generator() -> EntityGenerator:
    return EntityGenerator()


def test_render_interface_without_imports(generator: EntityGenerator) -> None:
    assert generator.render_model(describe(Shape)) == "export interface Shape {\n    sides: number;\n}\n"


def test_render_derived_interface_imports_its_base(generator: EntityGenerator) -> None:
    expected = (
        "import { Shape } from './Shape';\n"
        "\n"
        "export interface Square extends Shape {\n"
        "    size: number;\n"
        "    label?: string;\n"
        "}\n"
    )

    assert generator.render_model(describe(Square)) == expected


def test_render_skips_ignored_properties_and_sorts_imports(generator: EntityGenerator) -> None:
    expected = (
        "import { Color } from './Color';\n"
        "import { Shape } from './Shape';\n"
        "import { Square } from './Square';\n"
        "\n"
        "export interface Drawing {\n"
        "    shapes: Shape[];\n"
        "    lookup: any;\n"
        "    square: Square;\n"
        "    color: Color;\n"
        "}\n"
    )

    assert generator.render_model(describe(Drawing)) == expected


def test_combined_imports_use_the_index(generator: EntityGenerator) -> None:
    rendered = generator.render_model(describe(Drawing), combine_imports=True)

    assert rendered.startswith("import { Color, Shape, Square } from './index';\n\n")


def test_self_reference_is_not_imported(generator: EntityGenerator) -> None:
    rendered = generator.render_model(describe(Node))

    assert "import" not in rendered
    assert "    children: Node[];\n" in rendered


def test_render_numeric_enum(generator: EntityGenerator) -> None:
    assert generator.render_model(describe(Color)) == "export enum Color {\n    RED = 1,\n    GREEN = 2,\n}\n"


def test_render_string_enum(generator: EntityGenerator) -> None:
    rendered = generator.render_model(describe(Level))

    assert '    LOW = "low",\n' in rendered
    assert '    HIGH = "high",\n' in rendered


def test_unreadable_model_renders_without_properties(generator: EntityGenerator) -> None:
    broken = FakeType("Broken", broken=True)

    assert generator.render_model(broken) == "export interface Broken {\n}\n"


def test_generate_writes_one_file_per_model(generator: EntityGenerator, tmp_path: Path) -> None:
    models = ModelSet([describe(Square), describe(Shape), describe(Color)])

    names = generator.generate(tmp_path, models)

    assert names == ["Color", "Shape", "Square"]
    assert sorted(path.name for path in tmp_path.iterdir()) == ["Color.ts", "Shape.ts", "Square.ts"]
    assert (tmp_path / "Shape.ts").read_text(encoding="utf-8") == generator.render_model(describe(Shape))
