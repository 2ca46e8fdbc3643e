"""Classify arbitrary runtime values into structural kinds.

Every type test the engine relies on lives here so that the policy is
auditable in one place. :func:`classify` is total: anything that matches no
known kind is :attr:`Kind.UNSUPPORTED`.
"""

from __future__ import annotations

import dataclasses
import datetime as dt
import enum
import inspect
import types
import uuid
from collections.abc import Collection, Iterator, Mapping
from decimal import Decimal
from pathlib import PurePath
from typing import Final

from pydantic import BaseModel

__all__ = [
    "Kind",
    "TYPED_TEXT_TYPES",
    "classify",
    "is_named_tuple",
    "iter_record_fields",
    "type_name",
]


class Kind(enum.Enum):
    """Structural kind of a value."""

    NULL = "null"
    SCALAR = "scalar"
    MAPPING = "mapping"
    RECORD = "record"
    SEQUENCE = "sequence"
    UNSUPPORTED = "unsupported"


_PLAIN_SCALARS: Final[tuple[type, ...]] = (bool, int, float, str, bytes, bytearray)

# Order matters: datetime is a subclass of date.
TYPED_TEXT_TYPES: Final[tuple[tuple[type, str], ...]] = (
    (Decimal, "decimal"),
    (dt.datetime, "datetime"),
    (dt.date, "date"),
    (dt.time, "time"),
    (dt.timedelta, "timedelta"),
    (uuid.UUID, "uuid"),
    (PurePath, "path"),
)

_TEXT_LIKE: Final[tuple[type, ...]] = (str, bytes, bytearray, memoryview)

_NOT_RECORDS: Final[tuple[type, ...]] = (
    type,
    types.ModuleType,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.GeneratorType,
    types.CoroutineType,
    types.AsyncGeneratorType,
    types.CodeType,
    types.FrameType,
)


def type_name(value: object) -> str:
    """Return the qualified type name used in diagnostics and markers."""

    cls = type(value)
    module = cls.__module__
    if module == "builtins":
        return cls.__qualname__
    return f"{module}.{cls.__qualname__}"


def is_named_tuple(value: object) -> bool:
    """Return ``True`` for instances of ``collections.namedtuple`` classes."""

    return isinstance(value, tuple) and isinstance(
        getattr(type(value), "_fields", None), tuple
    )


def _is_declared_record(value: object) -> bool:
    if isinstance(value, BaseModel):
        return True
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return True
    return is_named_tuple(value)


def _is_plain_object(value: object) -> bool:
    if isinstance(value, _NOT_RECORDS) or inspect.isroutine(value):
        return False
    if hasattr(value, "__next__"):
        # Iterators would be consumed by inspection.
        return False
    return hasattr(value, "__dict__") or bool(_slot_names(type(value)))


def classify(value: object) -> Kind:
    """Return the structural kind of ``value``.

    Decision order: null, scalar, mapping, declared record (dataclass,
    pydantic model, named tuple), non-text collection, plain object with
    attributes, unsupported.

    Args:
        value: Any runtime value.

    Returns:
        The :class:`Kind` for ``value``. Never raises.
    """

    if value is None:
        return Kind.NULL
    if isinstance(value, enum.Enum) or isinstance(value, _PLAIN_SCALARS):
        return Kind.SCALAR
    for cls, _ in TYPED_TEXT_TYPES:
        if isinstance(value, cls):
            return Kind.SCALAR
    if isinstance(value, Mapping):
        return Kind.MAPPING
    if _is_declared_record(value):
        return Kind.RECORD
    if isinstance(value, Collection) and not isinstance(value, _TEXT_LIKE):
        return Kind.SEQUENCE
    if _is_plain_object(value):
        return Kind.RECORD
    return Kind.UNSUPPORTED


def _slot_names(cls: type) -> tuple[str, ...]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in ("__dict__", "__weakref__") and name not in names:
                names.append(name)
    return tuple(names)


def iter_record_fields(value: object) -> Iterator[tuple[str, object]]:
    """Yield ``(name, value)`` for every field of a record.

    Dataclasses yield every declared field that is set, pydantic models their
    declared fields followed by extras, named tuples their ``_fields``. Plain
    objects yield public attributes from ``__dict__`` and declared slots;
    unset slots are skipped.

    Args:
        value: A value classified as :attr:`Kind.RECORD`.

    Yields:
        Field name and current field value pairs, in declaration order.
    """

    if isinstance(value, BaseModel):
        for name in type(value).model_fields:
            yield name, getattr(value, name)
        extra = value.model_extra or {}
        for name, item in extra.items():
            yield str(name), item
        return
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        for field in dataclasses.fields(value):
            try:
                item = getattr(value, field.name)
            except AttributeError:
                # ``field(init=False)`` without a default stays unset until assigned.
                continue
            yield field.name, item
        return
    if is_named_tuple(value):
        for name in type(value)._fields:  # type: ignore[attr-defined]
            yield name, getattr(value, name)
        return

    seen: set[str] = set()
    attributes = getattr(value, "__dict__", None)
    if isinstance(attributes, Mapping):
        for name, item in attributes.items():
            if isinstance(name, str) and not name.startswith("_"):
                seen.add(name)
                yield name, item
    for name in _slot_names(type(value)):
        if name.startswith("_") or name in seen:
            continue
        try:
            item = getattr(value, name)
        except AttributeError:
            continue
        yield name, item
