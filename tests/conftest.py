"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator

import pytest

# Ensure src/ is on sys.path for tests so the src layout is used during test runs
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

_ENVIRONMENT_KEYS = (
    "OBJECT_DIGEST_ALGORITHM",
    "OBJECT_DIGEST_CHUNK_SIZE",
    "OBJECT_DIGEST_CYCLE_SCOPE",
    "OBJECT_DIGEST_EXCLUDE",
    "OBJECT_DIGEST_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep host environment settings from leaking into digests under test."""

    for key in _ENVIRONMENT_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield
