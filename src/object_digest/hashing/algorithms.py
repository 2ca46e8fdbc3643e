"""Supported hash algorithms and name resolution."""

from __future__ import annotations

import hashlib
from enum import StrEnum
from typing import Final

from object_digest.errors import UnsupportedAlgorithmError

__all__ = ["HashAlgorithm", "HEX_LENGTHS", "new_hasher", "resolve_algorithm"]


class HashAlgorithm(StrEnum):
    """Hash primitives a digest can be computed with.

    ``MD5`` and ``SHA1`` are kept for compatibility with existing digests
    only; prefer the SHA-2 family for new data.
    """

    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"

    @property
    def hex_length(self) -> int:
        """Length of the hex digest produced by this algorithm."""

        return HEX_LENGTHS[self]

    @property
    def is_legacy(self) -> bool:
        return self in (HashAlgorithm.MD5, HashAlgorithm.SHA1)


HEX_LENGTHS: Final[dict[HashAlgorithm, int]] = {
    HashAlgorithm.MD5: 32,
    HashAlgorithm.SHA1: 40,
    HashAlgorithm.SHA256: 64,
    HashAlgorithm.SHA384: 96,
    HashAlgorithm.SHA512: 128,
}

_ALIASES: Final[dict[str, HashAlgorithm]] = {
    "legacy128": HashAlgorithm.MD5,
    "legacy160": HashAlgorithm.SHA1,
}


def resolve_algorithm(name: HashAlgorithm | str) -> HashAlgorithm:
    """Resolve an algorithm name to :class:`HashAlgorithm`.

    Matching ignores case, ``-`` and ``_`` so ``"SHA-256"`` and ``"sha_256"``
    both resolve. ``"legacy-128"`` and ``"legacy-160"`` alias MD5 and SHA-1.

    Args:
        name: Enum member or algorithm name.

    Returns:
        The matching :class:`HashAlgorithm`.

    Raises:
        UnsupportedAlgorithmError: If ``name`` matches no supported algorithm.
    """

    if isinstance(name, HashAlgorithm):
        return name
    if not isinstance(name, str):
        raise UnsupportedAlgorithmError(name)
    key = name.strip().lower().replace("-", "").replace("_", "")
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return HashAlgorithm(key)
    except ValueError as exc:
        raise UnsupportedAlgorithmError(name) from exc


def new_hasher(algorithm: HashAlgorithm) -> "hashlib._Hash":
    """Return a fresh :mod:`hashlib` object for ``algorithm``.

    Digests are fingerprints, not security tokens, so the legacy algorithms
    stay available on FIPS-restricted builds.
    """

    return hashlib.new(algorithm.value, usedforsecurity=False)
