"""Error taxonomy for :mod:`object_digest`.

Only fatal conditions are exceptions. A nested value that cannot be
classified is not an error: it becomes an ``UnsupportedNode`` in the
canonical form so the digest still completes deterministically.
"""

from __future__ import annotations

__all__ = [
    "ObjectDigestError",
    "NullInputError",
    "UnsupportedAlgorithmError",
    "InvalidExclusionArgumentError",
]


class ObjectDigestError(Exception):
    """Base class for all object-digest errors."""


class NullInputError(ObjectDigestError, ValueError):
    """Raised when the top-level value handed to a digest computation is ``None``."""

    def __init__(self, message: str = "Cannot compute a digest of None.") -> None:
        super().__init__(message)


class UnsupportedAlgorithmError(ObjectDigestError, ValueError):
    """Raised when a hash algorithm name is outside the supported enumeration.

    Attributes:
        algorithm: The offending algorithm name as supplied by the caller.
    """

    def __init__(self, algorithm: object) -> None:
        self.algorithm = algorithm
        super().__init__(
            f"Unsupported hash algorithm {algorithm!r}; expected one of "
            "md5, sha1, sha256, sha384, sha512."
        )


class InvalidExclusionArgumentError(ObjectDigestError, TypeError):
    """Raised when an exclusion argument is not a field name or flat collection of names.

    Attributes:
        argument_type: Name of the offending argument's (or element's) type.
    """

    def __init__(self, argument: object) -> None:
        self.argument_type = type(argument).__name__
        super().__init__(
            "Exclusions must be a field name or a flat collection of field "
            f"names, got {self.argument_type}."
        )
