"""Public digest handle.

:class:`ObjectDigest` wraps the digest of one value together with the
algorithm and the exclusion set used to compute it::

    >>> digest = ObjectDigest({"Name": "John", "Age": 30}, exclusions="Age")
    >>> digest == ObjectDigest({"Name": "John", "Age": 31}, exclusions="Age")
    True

The handle is not safe for concurrent ``digest`` calls on the same
instance; distinct instances share no mutable state.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from functools import total_ordering

from object_digest.canonical.engine import build_canonical_form
from object_digest.errors import InvalidExclusionArgumentError, UnsupportedAlgorithmError
from object_digest.hashing.algorithms import HashAlgorithm, resolve_algorithm
from object_digest.hashing.computer import digest_node
from object_digest.schemas import DigestRecord
from object_digest.settings import CycleScope, ObjectDigestSettings, get_settings

__all__ = ["ExclusionArgument", "ObjectDigest", "digest_object"]

LOGGER = logging.getLogger(__name__)

ExclusionArgument = str | Iterable[str]


def _exclusion_names(argument: object) -> frozenset[str]:
    """Flatten an exclusion argument into field names.

    Raises:
        InvalidExclusionArgumentError: If ``argument`` is neither a string nor
            a flat iterable of strings.
    """

    if isinstance(argument, str):
        return frozenset((argument,))
    if isinstance(argument, (bytes, bytearray)) or not isinstance(argument, Iterable):
        raise InvalidExclusionArgumentError(argument)
    names: set[str] = set()
    for name in argument:
        if not isinstance(name, str):
            raise InvalidExclusionArgumentError(name)
        names.add(name)
    return frozenset(names)


@total_ordering
class ObjectDigest:
    """Deterministic digest of a structured value.

    The digest is computed at construction. Changing exclusions does not
    recompute; changing the algorithm clears the stored hash until the next
    :meth:`digest` call.

    Args:
        value: Value to digest. ``None`` raises ``NullInputError``.
        exclusions: Field name or flat collection of field names omitted at
            every depth. Defaults to ``OBJECT_DIGEST_EXCLUDE``.
        algorithm: Hash algorithm or name. Defaults to
            ``OBJECT_DIGEST_ALGORITHM``.
        settings: Settings override; defaults to :func:`get_settings`.
        cycle_scope: Cycle tracking scope override.

    Raises:
        NullInputError: If ``value`` is ``None``.
        UnsupportedAlgorithmError: If the algorithm is not supported.
        InvalidExclusionArgumentError: If ``exclusions`` is malformed.
    """

    __slots__ = ("_algorithm", "_exclusions", "_record", "_chunk_size", "_cycle_scope")

    def __init__(
        self,
        value: object,
        exclusions: ExclusionArgument | None = None,
        algorithm: HashAlgorithm | str | None = None,
        *,
        settings: ObjectDigestSettings | None = None,
        cycle_scope: CycleScope | None = None,
    ) -> None:
        effective = settings or get_settings()
        self._record: DigestRecord | None = None
        self._algorithm = resolve_algorithm(
            algorithm if algorithm is not None else effective.default_algorithm
        )
        self._exclusions: set[str] = set(
            effective.default_exclusions
            if exclusions is None
            else _exclusion_names(exclusions)
        )
        self._chunk_size = effective.chunk_size
        self._cycle_scope: CycleScope = cycle_scope or effective.cycle_scope
        self.digest(value)

    def digest(self, value: object, algorithm: HashAlgorithm | str | None = None) -> str:
        """Recompute the digest of ``value`` and replace the stored result.

        Args:
            value: Value to digest.
            algorithm: Optional algorithm switch, kept for later calls.

        Returns:
            The new lowercase hex digest.

        Raises:
            NullInputError: If ``value`` is ``None``; the stored result and
                the algorithm are left untouched.
            UnsupportedAlgorithmError: If ``algorithm`` is not supported; the
                stored result is cleared.
        """

        if algorithm is None:
            resolved = self._algorithm
        else:
            try:
                resolved = resolve_algorithm(algorithm)
            except UnsupportedAlgorithmError:
                self._record = None
                raise
        exclusions = frozenset(self._exclusions)
        node = build_canonical_form(value, exclusions, cycle_scope=self._cycle_scope)
        hexdigest = digest_node(node, resolved, chunk_size=self._chunk_size)
        self._algorithm = resolved
        self._record = DigestRecord(
            hexdigest=hexdigest, algorithm=resolved, exclusions=exclusions
        )
        LOGGER.debug(
            "Computed %s digest %s (%d exclusions)",
            resolved.value,
            hexdigest,
            len(exclusions),
        )
        return hexdigest

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._algorithm

    @algorithm.setter
    def algorithm(self, value: HashAlgorithm | str) -> None:
        self._record = None
        self._algorithm = resolve_algorithm(value)

    @property
    def exclusions(self) -> frozenset[str]:
        """Snapshot of the live exclusion set."""

        return frozenset(self._exclusions)

    def add_exclusion(self, names: ExclusionArgument) -> None:
        """Exclude one field name or a collection of names from later digests."""

        self._exclusions |= _exclusion_names(names)

    def remove_exclusion(self, names: ExclusionArgument) -> None:
        """Stop excluding one field name or a collection of names."""

        self._exclusions -= _exclusion_names(names)

    @property
    def record(self) -> DigestRecord | None:
        """Stored result, or ``None`` after the algorithm was changed."""

        return self._record

    @property
    def hexdigest(self) -> str | None:
        return None if self._record is None else self._record.hexdigest

    def __str__(self) -> str:
        return self.hexdigest or ""

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(algorithm={self._algorithm.value!r}, "
            f"hexdigest={self.hexdigest!r})"
        )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ObjectDigest):
            return self.hexdigest == other.hexdigest
        if isinstance(other, str):
            return self.hexdigest == other.lower()
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, ObjectDigest):
            theirs = other.hexdigest
        elif isinstance(other, str):
            theirs = other.lower()
        else:
            return NotImplemented
        return (self.hexdigest or "") < (theirs or "")

    def __hash__(self) -> int:
        return hash(self.hexdigest)


def digest_object(
    value: object,
    exclusions: ExclusionArgument | None = None,
    algorithm: HashAlgorithm | str | None = None,
) -> str:
    """Return the hex digest of ``value`` in one call.

    Raises:
        NullInputError: If ``value`` is ``None``.
        UnsupportedAlgorithmError: If the algorithm is not supported.
    """

    return str(ObjectDigest(value, exclusions, algorithm))
