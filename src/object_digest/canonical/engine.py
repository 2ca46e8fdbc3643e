"""Recursive canonicalization of arbitrary object graphs.

The engine turns a value into an immutable :class:`CanonicalNode` tree. The
exclusion set and the cycle tracker are explicit parameters threaded through
every recursive call; the engine keeps no state of its own and is safe to
run concurrently as long as each call gets its own tracker.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Collection, Iterable, Mapping

from object_digest.canonical.classifier import (
    TYPED_TEXT_TYPES,
    Kind,
    classify,
    iter_record_fields,
    type_name,
)
from object_digest.canonical.floats import normalize_float
from object_digest.canonical.nodes import (
    CIRCULAR,
    NULL,
    CanonicalNode,
    FieldMapNode,
    ScalarNode,
    ScalarValue,
    SequenceNode,
    TypedText,
    UnsupportedNode,
)
from object_digest.canonical.policy import (
    is_trackable,
    mapping_preserves_order,
    sequence_preserves_order,
)
from object_digest.canonical.tracker import CycleTracker
from object_digest.errors import NullInputError
from object_digest.settings import CycleScope

__all__ = ["build_canonical_form", "canonicalize", "key_text"]

LOGGER = logging.getLogger(__name__)


def build_canonical_form(
    value: object,
    exclusions: Iterable[str] = (),
    *,
    cycle_scope: CycleScope = "pass",
) -> CanonicalNode:
    """Canonicalize a top-level value with a fresh cycle tracker.

    Args:
        value: Root of the object graph. Must not be ``None``.
        exclusions: Field names dropped at every nesting depth.
        cycle_scope: Cycle tracking scope, see :class:`CycleTracker`.

    Returns:
        The canonical tree for ``value``.

    Raises:
        NullInputError: If ``value`` is ``None``.
    """

    if value is None:
        raise NullInputError()
    tracker = CycleTracker(cycle_scope)
    try:
        return canonicalize(value, frozenset(exclusions), tracker)
    finally:
        tracker.clear()


def canonicalize(
    value: object, exclusions: frozenset[str], tracker: CycleTracker
) -> CanonicalNode:
    """Return the canonical node for ``value``.

    A nested ``None`` becomes the null node; the top-level check lives in
    :func:`build_canonical_form`.

    Args:
        value: Value to canonicalize.
        exclusions: Field and mapping-key names to omit.
        tracker: Live tracker for the current pass.

    Returns:
        Immutable canonical node.
    """

    kind = classify(value)
    if kind is Kind.NULL:
        return NULL
    if kind is Kind.SCALAR:
        return ScalarNode(_scalar_value(value))
    if kind is Kind.UNSUPPORTED:
        name = type_name(value)
        LOGGER.debug("Recording unsupported value of type %s", name)
        return UnsupportedNode(name)

    trackable = is_trackable(value)
    if trackable:
        if tracker.seen(value):
            LOGGER.debug("Circular reference to %s replaced by marker", type_name(value))
            return CIRCULAR
        tracker.mark(value)
    try:
        if kind is Kind.RECORD:
            return _canonicalize_record(value, exclusions, tracker)
        if kind is Kind.MAPPING:
            return _canonicalize_mapping(value, exclusions, tracker)  # type: ignore[arg-type]
        return _canonicalize_collection(value, exclusions, tracker)  # type: ignore[arg-type]
    finally:
        if trackable:
            tracker.release(value)


def _scalar_value(value: object) -> ScalarValue:
    if isinstance(value, enum.Enum):
        cls = type(value)
        return TypedText("enum", f"{cls.__module__}.{cls.__qualname__}.{value.name}")
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return normalize_float(value)
    if isinstance(value, str):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    for cls, tag in TYPED_TEXT_TYPES:
        if isinstance(value, cls):
            return TypedText(tag, _typed_text(value))
    raise TypeError(f"{type_name(value)} is not a scalar")  # pragma: no cover


def _typed_text(value: object) -> str:
    isoformat = getattr(value, "isoformat", None)
    if callable(isoformat):
        return str(isoformat())
    if hasattr(value, "total_seconds"):
        # timedelta: exact integer microseconds.
        return str(value // type(value)(microseconds=1))  # type: ignore[operator]
    if hasattr(value, "as_posix"):
        return str(value.as_posix())  # type: ignore[attr-defined]
    return str(value)


def key_text(key: object, exclusions: frozenset[str]) -> str:
    """Return the text a mapping key sorts and matches exclusions by.

    ``str`` keys are used verbatim; any other key uses the rendering of its
    own canonical form, computed with a private tracker.
    """

    if isinstance(key, str):
        return key
    return canonicalize(key, exclusions, CycleTracker()).render()


def _canonicalize_record(
    value: object, exclusions: frozenset[str], tracker: CycleTracker
) -> CanonicalNode:
    items = {
        name: item
        for name, item in iter_record_fields(value)
        if name not in exclusions
    }
    return _sorted_field_map(items, exclusions, tracker)


def _canonicalize_mapping(
    mapping: Mapping[object, object],
    exclusions: frozenset[str],
    tracker: CycleTracker,
) -> CanonicalNode:
    items: dict[str, object] = {}
    for key, item in mapping.items():
        name = key_text(key, exclusions)
        if name in exclusions:
            continue
        if name in items:
            LOGGER.debug("Mapping key %r collapses onto existing key text %r", key, name)
            # Re-inserting moves a colliding key to the position of its last occurrence.
            del items[name]
        items[name] = item
    if mapping_preserves_order(mapping):
        return SequenceNode(
            tuple(
                SequenceNode((ScalarNode(name), canonicalize(item, exclusions, tracker)))
                for name, item in items.items()
            )
        )
    return _sorted_field_map(items, exclusions, tracker)


def _sorted_field_map(
    items: dict[str, object], exclusions: frozenset[str], tracker: CycleTracker
) -> FieldMapNode:
    # Children are visited in name order: which sibling reaches a shared
    # container first must not follow insertion or declaration order.
    return FieldMapNode(
        tuple(
            (name, canonicalize(items[name], exclusions, tracker))
            for name in sorted(items)
        )
    )


def _canonicalize_collection(
    collection: Collection[object],
    exclusions: frozenset[str],
    tracker: CycleTracker,
) -> CanonicalNode:
    items = [canonicalize(item, exclusions, tracker) for item in collection]
    if not sequence_preserves_order(collection):
        items.sort(key=lambda node: node.render())
    return SequenceNode(tuple(items))
