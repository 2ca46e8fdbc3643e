"""Float normalisation for canonical forms.

Floats are represented by their raw IEEE-754 binary64 bit pattern in
big-endian byte order. Bit-identical inputs give identical output and
``+0.0``/``-0.0``, both infinities and NaN stay distinguishable. NaN payloads
are kept as-is.

Changing :data:`FLOAT_ENCODING` changes every digest of data containing
floats; treat it as a versioned compatibility contract.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Final

__all__ = ["FLOAT_ENCODING", "CanonicalFloat", "normalize_float"]

FLOAT_ENCODING: Final[str] = "ieee754-binary64-be"

_BINARY64: Final[struct.Struct] = struct.Struct(">d")


@dataclass(frozen=True, slots=True)
class CanonicalFloat:
    """Fixed-width canonical representation of a float."""

    bits: bytes

    def __post_init__(self) -> None:
        if len(self.bits) != _BINARY64.size:
            raise ValueError(
                f"Canonical floats carry exactly {_BINARY64.size} bytes, "
                f"got {len(self.bits)}."
            )

    def render(self) -> str:
        """Return the canonical text rendering, ``f:`` followed by 16 hex digits."""

        return f"f:{self.bits.hex()}"

    def to_float(self) -> float:
        """Decode the bit pattern back into a Python float."""

        return _BINARY64.unpack(self.bits)[0]


def normalize_float(value: float) -> CanonicalFloat:
    """Return the canonical representation of ``value``.

    Args:
        value: Float to normalise. ``int`` values are not accepted here; the
            engine keeps integers as integers.

    Returns:
        :class:`CanonicalFloat` wrapping the big-endian binary64 bytes.
    """

    return CanonicalFloat(_BINARY64.pack(float(value)))
