"""CBOR encoding of canonical trees.

Canonical trees are written with :mod:`cbor2` in non-canonical mode so that
the emission order decided by the engine is kept verbatim. Node variants
without a native CBOR type are wrapped in semantic tags from the
first-come-first-served range:

=====================  =====  ===========================
Node                   Tag    Tagged content
=====================  =====  ===========================
canonical float        40960  8-byte big-endian binary64
typed text scalar      40961  ``[tag, text]``
circular marker        40962  ``null``
unsupported value      40963  type name
=====================  =====  ===========================

A nested null is a CBOR null and therefore never collides with any string,
including ``"[NULL]"``.
"""

from __future__ import annotations

import io
from typing import Final, Protocol

import cbor2

from object_digest.canonical.floats import CanonicalFloat
from object_digest.canonical.nodes import (
    CanonicalNode,
    CircularMarker,
    FieldMapNode,
    NullNode,
    ScalarNode,
    SequenceNode,
    TypedText,
    UnsupportedNode,
)
from object_digest.errors import ObjectDigestError

__all__ = [
    "CIRCULAR_TAG",
    "ENCODING_NAME",
    "FLOAT_TAG",
    "TYPED_TEXT_TAG",
    "UNSUPPORTED_TAG",
    "BinaryWriter",
    "encode_node",
    "encode_node_bytes",
]

ENCODING_NAME: Final[str] = "cbor"

FLOAT_TAG: Final[int] = 40960
TYPED_TEXT_TAG: Final[int] = 40961
CIRCULAR_TAG: Final[int] = 40962
UNSUPPORTED_TAG: Final[int] = 40963


class BinaryWriter(Protocol):
    """Anything accepting encoded bytes."""

    def write(self, data: bytes, /) -> object: ...


def _encode_canonical(encoder: cbor2.CBOREncoder, value: object) -> None:
    """``cbor2`` default hook expanding canonical nodes one level at a time."""

    if isinstance(value, ScalarNode):
        encoder.encode(value.value)
    elif isinstance(value, SequenceNode):
        encoder.encode(list(value.items))
    elif isinstance(value, FieldMapNode):
        encoder.encode(dict(value.fields))
    elif isinstance(value, NullNode):
        encoder.encode(None)
    elif isinstance(value, CanonicalFloat):
        encoder.encode(cbor2.CBORTag(FLOAT_TAG, value.bits))
    elif isinstance(value, TypedText):
        encoder.encode(cbor2.CBORTag(TYPED_TEXT_TAG, [value.tag, value.text]))
    elif isinstance(value, CircularMarker):
        encoder.encode(cbor2.CBORTag(CIRCULAR_TAG, None))
    elif isinstance(value, UnsupportedNode):
        encoder.encode(cbor2.CBORTag(UNSUPPORTED_TAG, value.type_name))
    else:
        raise cbor2.CBOREncodeError(
            f"cannot encode {type(value).__name__} outside a canonical tree"
        )


def encode_node(node: CanonicalNode, fp: BinaryWriter) -> None:
    """Write the CBOR encoding of ``node`` to ``fp``.

    Args:
        node: Root of a canonical tree.
        fp: Destination; only ``write`` is used.

    Raises:
        ObjectDigestError: If the tree contains something that is not a
            canonical node.
    """

    if not isinstance(node, CanonicalNode):
        raise ObjectDigestError(
            f"Expected a canonical node, got {type(node).__name__}."
        )
    try:
        cbor2.dump(node, fp, default=_encode_canonical)
    except cbor2.CBOREncodeError as exc:
        raise ObjectDigestError("Failed to encode canonical form.") from exc


def encode_node_bytes(node: CanonicalNode) -> bytes:
    """Return the CBOR encoding of ``node`` as bytes."""

    buffer = io.BytesIO()
    encode_node(node, buffer)
    return buffer.getvalue()
