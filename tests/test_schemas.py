"""Tests for the stored digest record model."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from object_digest.hashing.algorithms import HashAlgorithm
from object_digest.schemas import CURRENT_DIGEST_SCHEMA_VERSION, DigestRecord


def test_record_normalises_exclusions() -> None:
    """Exclusions are stored as a sorted tuple."""

    record = DigestRecord(
        hexdigest="0" * 64, algorithm="sha256", exclusions=frozenset({"b", "a"})
    )
    assert record.algorithm is HashAlgorithm.SHA256
    assert record.exclusions == ("a", "b")
    assert record.encoding == "cbor"
    assert record.float_encoding == "ieee754-binary64-be"


@pytest.mark.parametrize(
    "payload",
    [
        {"hexdigest": "0" * 63, "algorithm": "sha256"},
        {"hexdigest": "A" * 32, "algorithm": "md5"},
        {"hexdigest": "0" * 32, "algorithm": "crc32"},
        {"hexdigest": "0" * 32, "algorithm": "md5", "unexpected": True},
    ],
)
def test_record_rejects_invalid_payloads(payload: dict[str, object]) -> None:
    """Length, case, algorithm and unknown fields are validated."""

    with pytest.raises(ValidationError):
        DigestRecord.model_validate(payload)


def test_record_is_frozen() -> None:
    """Stored results cannot be modified in place."""

    record = DigestRecord(hexdigest="0" * 40, algorithm=HashAlgorithm.SHA1)
    with pytest.raises(ValidationError):
        record.hexdigest = "1" * 40  # type: ignore[misc]


def test_published_digest_schema_matches_model() -> None:
    """The committed JSON schema matches the runtime model."""

    project_root = Path(__file__).resolve().parents[1]
    schema_path = project_root / f"digest_schema_v{CURRENT_DIGEST_SCHEMA_VERSION}.json"
    if not schema_path.exists():
        pytest.skip("digest schema artifact has not been exported")

    published = json.loads(schema_path.read_text(encoding="utf-8"))
    assert published == DigestRecord.model_json_schema()
