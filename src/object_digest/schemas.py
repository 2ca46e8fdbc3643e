"""Pydantic models describing stored digest results."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from object_digest.canonical.floats import FLOAT_ENCODING
from object_digest.hashing.algorithms import HashAlgorithm
from object_digest.hashing.encoder import ENCODING_NAME

SchemaVersionLiteral = Literal["1.0.0"]
CURRENT_DIGEST_SCHEMA_VERSION: SchemaVersionLiteral = "1.0.0"


class DigestRecord(BaseModel):
    """Immutable result of one digest computation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: SchemaVersionLiteral = Field(
        default=CURRENT_DIGEST_SCHEMA_VERSION,
        description="Semantic version of the digest record schema.",
    )
    hexdigest: str = Field(
        ...,
        pattern=r"^[0-9a-f]+$",
        description="Lowercase hexadecimal digest of the encoded canonical form.",
    )
    algorithm: HashAlgorithm = Field(
        ...,
        description="Hash algorithm that produced the digest.",
    )
    exclusions: tuple[str, ...] = Field(
        default=(),
        description="Field names excluded at every depth, sorted.",
    )
    encoding: Literal["cbor"] = Field(
        default=ENCODING_NAME,
        description="Binary encoding applied to the canonical form before hashing.",
    )
    float_encoding: Literal["ieee754-binary64-be"] = Field(
        default=FLOAT_ENCODING,
        description="Canonical float representation; part of the compatibility contract.",
    )

    @field_validator("exclusions", mode="before")
    @classmethod
    def _sort_exclusions(cls, value: object) -> object:
        """Store exclusions as a sorted tuple regardless of the input collection."""

        if isinstance(value, (set, frozenset, list, tuple)):
            return tuple(sorted(value))
        return value

    @model_validator(mode="after")
    def _check_length(self) -> DigestRecord:
        """Reject digests whose length does not match the algorithm."""

        if len(self.hexdigest) != self.algorithm.hex_length:
            raise ValueError(
                f"{self.algorithm.value} digests have {self.algorithm.hex_length} "
                f"hex characters, got {len(self.hexdigest)}."
            )
        return self
