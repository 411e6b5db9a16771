"""Tests for typescripter.graph.classifier."""

from __future__ import annotations

import collections.abc
import typing
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple, Union

import pytest
from pydantic import BaseModel

from typescripter.descriptors import describe
from typescripter.graph.classifier import TypeClassifier
from typescripter.markers import MARKERS_ATTR, ignore
from typescripter.models import CollectionOf, Ignored, Model, Opaque, Primitive


@dataclass
class Bar:
    label: str


@dataclass
class Foo:
    bars: List[Bar]
    name: str


@ignore
@dataclass
class Secret:
    token: str


@dataclass
class SecretChild(Secret):
    extra: int


class Color(Enum):
    RED = 1
    GREEN = 2


class Animal:
    name: str


class Dog(Animal):
    breed: str


class Puppy(Dog):
    age: int


class Payload(BaseModel):
    amount: Decimal


class Shaped(Protocol):
    def area(self) -> float: ...


class NameCollision:
    __typescripter_markers__ = ("ignore",)


@pytest.fixture
def classifier() -> TypeClassifier:
    return TypeClassifier()


@pytest.mark.parametrize(
    ("hint", "expected"),
    [
        (int, "number"),
        (float, "number"),
        (Decimal, "number"),
        (bool, "boolean"),
        (str, "string"),
        (bytes, "string"),
        (uuid.UUID, "string"),
        (datetime, "Date"),
        (date, "Date"),
        (None, "void"),
        (Any, "any"),
        (object, "any"),
    ],
)
def test_builtin_types_classify_as_primitives(classifier: TypeClassifier, hint: object, expected: str) -> None:
    assert classifier.classify(describe(hint)) == Primitive(expected)


@pytest.mark.parametrize(
    "hint",
    [
        List[Foo],
        list[Foo],
        Sequence[Foo],
        Iterable[Foo],
        collections.abc.Iterable[Foo],
        set[Foo],
        frozenset[Foo],
        typing.AbstractSet[Foo],
        Tuple[Foo, ...],
    ],
)
def test_sequences_of_models_classify_as_collections(classifier: TypeClassifier, hint: object) -> None:
    assert classifier.classify(describe(hint)) == CollectionOf(Model(describe(Foo)))


def test_nested_sequences_keep_their_depth(classifier: TypeClassifier) -> None:
    result = classifier.classify(describe(List[List[int]]))

    assert result == CollectionOf(CollectionOf(Primitive("number")))


@pytest.mark.parametrize(
    "hint",
    [
        Dict[int, Foo],
        dict[str, Any],
        Mapping[int, Foo],
        Union[int, str],
        Tuple[int, str],
        list,
        dict,
    ],
)
def test_maps_unions_and_bare_containers_are_opaque(classifier: TypeClassifier, hint: object) -> None:
    assert classifier.classify(describe(hint)) == Opaque("any")


def test_user_classes_are_models(classifier: TypeClassifier) -> None:
    assert classifier.classify(describe(Foo)) == Model(describe(Foo))
    assert classifier.classify(describe(Payload)) == Model(describe(Payload))


def test_enums_are_models(classifier: TypeClassifier) -> None:
    assert classifier.classify(describe(Color)) == Model(describe(Color))


def test_optional_unwraps_to_inner_type(classifier: TypeClassifier) -> None:
    assert classifier.classify(describe(Optional[Foo])) == Model(describe(Foo))
    assert classifier.classify(describe(Optional[int])) == Primitive("number")


def test_annotated_unwraps_to_inner_type(classifier: TypeClassifier) -> None:
    assert classifier.classify(describe(typing.Annotated[int, "meta"])) == Primitive("number")


@pytest.mark.parametrize("hint", [Path, BaseModel, Shaped])
def test_system_types_and_protocols_are_opaque(classifier: TypeClassifier, hint: object) -> None:
    assert classifier.classify(describe(hint)) == Opaque("any")


def test_ignored_class_wins_over_every_other_rule(classifier: TypeClassifier) -> None:
    assert classifier.classify(describe(Secret)) == Ignored()
    assert classifier.is_ignored(describe(Secret)) is True


def test_collection_of_ignored_keeps_ignored_inner(classifier: TypeClassifier) -> None:
    assert classifier.classify(describe(List[Secret])) == CollectionOf(Ignored())


def test_ignore_marker_is_not_inherited(classifier: TypeClassifier) -> None:
    assert MARKERS_ATTR in vars(Secret)
    assert classifier.classify(describe(SecretChild)) == Model(describe(SecretChild))


def test_marker_is_matched_by_identity_not_by_name(classifier: TypeClassifier) -> None:
    assert classifier.classify(describe(NameCollision)) == Model(describe(NameCollision))


def test_classification_is_deterministic(classifier: TypeClassifier) -> None:
    first = classifier.classify(describe(List[Foo]))
    second = TypeClassifier().classify(describe(List[Foo]))

    assert first == second


def test_models_of_includes_model_ancestors(classifier: TypeClassifier) -> None:
    found = classifier.models_of(classifier.classify(describe(List[Puppy])))

    assert found == [describe(Puppy), describe(Dog), describe(Animal)]


def test_model_ancestors_stop_at_first_non_model(classifier: TypeClassifier) -> None:
    assert classifier.model_ancestors(describe(Payload)) == []
    assert classifier.model_ancestors(describe(SecretChild)) == []


def test_models_of_non_models_is_empty(classifier: TypeClassifier) -> None:
    assert classifier.models_of(Primitive("number")) == []
    assert classifier.models_of(Opaque("any")) == []
    assert classifier.models_of(Ignored()) == []


def test_custom_primitive_table_overrides_defaults() -> None:
    classifier = TypeClassifier(primitives={f"{Bar.__module__}.{Bar.__qualname__}": "string"})

    assert classifier.classify(describe(Bar)) == Primitive("string")
    assert classifier.classify(describe(int)) == Opaque("any")
