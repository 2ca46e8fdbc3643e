"""Canonical node variants produced by the canonicalization engine.

A canonical tree is immutable and already deterministic: field maps are
sorted, unordered collections have been sorted by the rendered text of their
elements, and cycles have been cut with :data:`CIRCULAR`. The encoder only
has to walk it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TypeAlias

from object_digest.canonical.floats import CanonicalFloat

__all__ = [
    "CIRCULAR",
    "NULL",
    "CanonicalNode",
    "CircularMarker",
    "FieldMapNode",
    "NullNode",
    "ScalarNode",
    "ScalarValue",
    "SequenceNode",
    "TypedText",
    "UnsupportedNode",
]


@dataclass(frozen=True, slots=True)
class TypedText:
    """A scalar with a canonical text form and a type tag.

    Used for values such as ``Decimal`` or ``datetime`` that are neither
    plain text nor numbers, so that ``Decimal("1.5")`` and ``"1.5"`` never
    canonicalize to the same node.
    """

    tag: str
    text: str

    def render(self) -> str:
        return f"t:{self.tag}:{json.dumps(self.text, ensure_ascii=False)}"


ScalarValue: TypeAlias = str | bool | int | bytes | CanonicalFloat | TypedText


class CanonicalNode:
    """Base class of every canonical node variant."""

    __slots__ = ()

    def render(self) -> str:
        """Return the deterministic, injective text rendering of this node."""

        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class NullNode(CanonicalNode):
    """A nested ``None``."""

    def render(self) -> str:
        return "null"


@dataclass(frozen=True, slots=True)
class CircularMarker(CanonicalNode):
    """Stands in for a container already visited in the current pass."""

    def render(self) -> str:
        return "<circular>"


NULL: NullNode = NullNode()
CIRCULAR: CircularMarker = CircularMarker()


@dataclass(frozen=True, slots=True)
class ScalarNode(CanonicalNode):
    """Text, boolean, integer, bytes, canonical float or typed text."""

    value: ScalarValue

    def __eq__(self, other: object) -> bool:
        # True == 1 in Python; canonical scalars of different types never match.
        if not isinstance(other, ScalarNode):
            return NotImplemented
        return type(self.value) is type(other.value) and self.value == other.value

    def render(self) -> str:
        value = self.value
        # bool before int: True is an int.
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str):
            return json.dumps(value, ensure_ascii=False)
        if isinstance(value, bytes):
            return f"b:{value.hex()}"
        return value.render()


@dataclass(frozen=True, slots=True)
class SequenceNode(CanonicalNode):
    """Ordered list of child nodes, in emission order."""

    items: tuple[CanonicalNode, ...] = ()

    def render(self) -> str:
        return "[" + ",".join(item.render() for item in self.items) + "]"


@dataclass(frozen=True, slots=True)
class FieldMapNode(CanonicalNode):
    """Named children, always sorted by name with unique names.

    Build instances with :meth:`from_pairs`; the constructor validates the
    ordering invariant but does not sort.
    """

    fields: tuple[tuple[str, CanonicalNode], ...] = ()

    def __post_init__(self) -> None:
        names = [name for name, _ in self.fields]
        for previous, current in zip(names, names[1:]):
            if previous >= current:
                raise ValueError(
                    "FieldMapNode fields must be sorted with unique names; "
                    f"{previous!r} precedes {current!r}."
                )

    @classmethod
    def from_pairs(
        cls, pairs: dict[str, CanonicalNode] | list[tuple[str, CanonicalNode]]
    ) -> FieldMapNode:
        """Return a field map with ``pairs`` sorted by name.

        Args:
            pairs: Mapping or list of ``(name, node)`` pairs. In a list, a
                later duplicate name overwrites an earlier one.

        Returns:
            New :class:`FieldMapNode`.
        """

        merged = dict(pairs)
        return cls(tuple(sorted(merged.items(), key=lambda pair: pair[0])))

    def render(self) -> str:
        body = ",".join(
            f"{json.dumps(name, ensure_ascii=False)}:{node.render()}"
            for name, node in self.fields
        )
        return "{" + body + "}"


@dataclass(frozen=True, slots=True)
class UnsupportedNode(CanonicalNode):
    """Marker for a value the classifier could not place in any kind."""

    type_name: str

    def render(self) -> str:
        return f"<unsupported {json.dumps(self.type_name, ensure_ascii=False)}>"
