"""Canonical form construction: classification, ordering policy, cycles and floats."""

from object_digest.canonical.classifier import Kind, classify
from object_digest.canonical.engine import build_canonical_form, canonicalize
from object_digest.canonical.floats import FLOAT_ENCODING, CanonicalFloat, normalize_float
from object_digest.canonical.nodes import (
    CIRCULAR,
    NULL,
    CanonicalNode,
    CircularMarker,
    FieldMapNode,
    NullNode,
    ScalarNode,
    SequenceNode,
    TypedText,
    UnsupportedNode,
)
from object_digest.canonical.tracker import CycleTracker

__all__ = [
    "CIRCULAR",
    "FLOAT_ENCODING",
    "NULL",
    "CanonicalFloat",
    "CanonicalNode",
    "CircularMarker",
    "CycleTracker",
    "FieldMapNode",
    "Kind",
    "NullNode",
    "ScalarNode",
    "SequenceNode",
    "TypedText",
    "UnsupportedNode",
    "build_canonical_form",
    "canonicalize",
    "classify",
    "normalize_float",
]
