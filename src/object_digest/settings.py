"""Environment-backed settings primitives for :mod:`object_digest`."""

from __future__ import annotations

from typing import Final, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["CycleScope", "ObjectDigestSettings", "get_settings"]

CycleScope = Literal["pass", "path"]

DEFAULT_CHUNK_SIZE: Final[int] = 64 * 1024


class ObjectDigestSettings(BaseSettings):
    """Expose environment-derived configuration knobs for object digests.

    All environment lookups go through this class. Malformed values fall back
    to the documented defaults instead of failing at import time.

    Attributes:
        default_algorithm: Hash algorithm used when a handle is created
            without an explicit choice. Validated lazily by the handle so an
            unsupported name surfaces as ``UnsupportedAlgorithmError``.
        chunk_size: Block size in bytes fed to the hash primitive.
        cycle_scope: ``"pass"`` keeps every visited container marked for the
            whole canonicalization pass; ``"path"`` only tracks ancestors.
        default_exclusions_raw: Comma separated field names excluded by
            default on every new handle.
        log_level: Level applied to the ``object_digest`` logger by
            :func:`object_digest.logging_pipeline.configure_logging`.
    """

    default_algorithm: str = Field(default="sha256", alias="OBJECT_DIGEST_ALGORITHM")
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, alias="OBJECT_DIGEST_CHUNK_SIZE")
    cycle_scope: CycleScope = Field(default="pass", alias="OBJECT_DIGEST_CYCLE_SCOPE")
    default_exclusions_raw: str | None = Field(
        default=None, alias="OBJECT_DIGEST_EXCLUDE"
    )
    log_level: str = Field(default="WARNING", alias="OBJECT_DIGEST_LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    @field_validator("chunk_size", mode="before")
    @classmethod
    def _parse_chunk_size(cls, value: object) -> int:
        """Parse the chunk size while tolerating malformed input.

        Args:
            value: Raw environment value.

        Returns:
            Parsed positive integer, otherwise the default chunk size.
        """

        if isinstance(value, bool):
            return DEFAULT_CHUNK_SIZE
        if isinstance(value, int):
            return value if value > 0 else DEFAULT_CHUNK_SIZE
        if isinstance(value, str):
            try:
                parsed = int(value.strip())
            except ValueError:
                return DEFAULT_CHUNK_SIZE
            return parsed if parsed > 0 else DEFAULT_CHUNK_SIZE
        return DEFAULT_CHUNK_SIZE

    @field_validator("cycle_scope", mode="before")
    @classmethod
    def _parse_cycle_scope(cls, value: object) -> str:
        """Normalise the cycle scope, defaulting to ``"pass"``."""

        if isinstance(value, str) and value.strip().lower() == "path":
            return "path"
        return "pass"

    @field_validator("default_algorithm", "log_level", mode="before")
    @classmethod
    def _strip_text(cls, value: object) -> object:
        """Strip surrounding whitespace from textual settings."""

        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def default_exclusions(self) -> frozenset[str]:
        """Return the configured default exclusions as a set of field names.

        Returns:
            Field names parsed from ``OBJECT_DIGEST_EXCLUDE``; empty entries
            are ignored.
        """

        if not self.default_exclusions_raw:
            return frozenset()
        return frozenset(
            name.strip()
            for name in self.default_exclusions_raw.split(",")
            if name.strip()
        )


def get_settings() -> ObjectDigestSettings:
    """Return a :class:`ObjectDigestSettings` instance.

    Returns:
        Settings parsed from environment variables.
    """

    return ObjectDigestSettings()
