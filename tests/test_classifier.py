"""Tests for the value classifier."""

from __future__ import annotations

import dataclasses
import datetime as dt
import enum
import threading
import uuid
from collections import OrderedDict, deque, namedtuple
from decimal import Decimal
from pathlib import PurePosixPath
from types import MappingProxyType

import pytest
from pydantic import BaseModel, ConfigDict

from object_digest.canonical.classifier import Kind, classify, iter_record_fields, type_name


class Color(enum.IntEnum):
    RED = 1


@dataclasses.dataclass
class Person:
    name: str
    age: int


class Account(BaseModel):
    model_config = ConfigDict(extra="allow")

    owner: str
    balance: float = 0.0


Point = namedtuple("Point", ["x", "y"])


class Plain:
    def __init__(self) -> None:
        self.visible = 1
        self._hidden = 2


class Slotted:
    __slots__ = ("a", "b", "_c")

    def __init__(self) -> None:
        self.a = 1
        self._c = 3


def _generator():
    yield 1


@pytest.mark.parametrize(
    ("value", "kind"),
    [
        (None, Kind.NULL),
        ("text", Kind.SCALAR),
        (True, Kind.SCALAR),
        (7, Kind.SCALAR),
        (7.5, Kind.SCALAR),
        (b"raw", Kind.SCALAR),
        (bytearray(b"raw"), Kind.SCALAR),
        (Color.RED, Kind.SCALAR),
        (Decimal("1.5"), Kind.SCALAR),
        (dt.datetime(2024, 1, 1), Kind.SCALAR),
        (dt.date(2024, 1, 1), Kind.SCALAR),
        (dt.timedelta(seconds=3), Kind.SCALAR),
        (uuid.UUID(int=1), Kind.SCALAR),
        (PurePosixPath("/tmp/x"), Kind.SCALAR),
        ({"a": 1}, Kind.MAPPING),
        (OrderedDict(a=1), Kind.MAPPING),
        (MappingProxyType({"a": 1}), Kind.MAPPING),
        (Person("John", 30), Kind.RECORD),
        (Account(owner="x"), Kind.RECORD),
        (Point(1, 2), Kind.RECORD),
        (Plain(), Kind.RECORD),
        (Slotted(), Kind.RECORD),
        ([1, 2], Kind.SEQUENCE),
        ((1, 2), Kind.SEQUENCE),
        ({1, 2}, Kind.SEQUENCE),
        (frozenset({1}), Kind.SEQUENCE),
        (deque([1]), Kind.SEQUENCE),
        (range(3), Kind.SEQUENCE),
        (object(), Kind.UNSUPPORTED),
        (len, Kind.UNSUPPORTED),
        (lambda: None, Kind.UNSUPPORTED),
        (Person, Kind.UNSUPPORTED),
        (threading, Kind.UNSUPPORTED),
        (_generator(), Kind.UNSUPPORTED),
        (iter([1, 2]), Kind.UNSUPPORTED),
        (memoryview(b"x"), Kind.UNSUPPORTED),
    ],
)
def test_classify(value: object, kind: Kind) -> None:
    """Values are placed in the expected structural kind."""

    assert classify(value) is kind


def test_dataclass_fields_in_declaration_order() -> None:
    """Dataclasses yield every declared field."""

    assert list(iter_record_fields(Person("John", 30))) == [("name", "John"), ("age", 30)]


def test_pydantic_fields_include_extras() -> None:
    """Pydantic models yield declared fields then extras."""

    account = Account(owner="x", note="vip")
    assert list(iter_record_fields(account)) == [
        ("owner", "x"),
        ("balance", 0.0),
        ("note", "vip"),
    ]


def test_named_tuple_fields() -> None:
    """Named tuples yield their named fields."""

    assert list(iter_record_fields(Point(1, 2))) == [("x", 1), ("y", 2)]


def test_plain_object_skips_private_attributes() -> None:
    """Underscore attributes of plain objects are not fields."""

    assert list(iter_record_fields(Plain())) == [("visible", 1)]


def test_slotted_object_skips_unset_and_private_slots() -> None:
    """Unset slots and private slots are skipped."""

    assert list(iter_record_fields(Slotted())) == [("a", 1)]


def test_type_name_is_qualified() -> None:
    """Builtins use the bare name, other types are module-qualified."""

    assert type_name(1) == "int"
    assert type_name(Person("a", 1)) == f"{__name__}.Person"


@dataclasses.dataclass
class Deferred:
    source: str
    cache: int = dataclasses.field(init=False)


def test_dataclass_skips_unset_init_false_field() -> None:
    """A ``field(init=False)`` that was never assigned yields nothing."""

    pending = Deferred("x")
    assert list(iter_record_fields(pending)) == [("source", "x")]

    pending.cache = 7
    assert list(iter_record_fields(pending)) == [("source", "x"), ("cache", 7)]
