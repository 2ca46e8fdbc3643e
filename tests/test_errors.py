"""Tests for the error taxonomy."""

from __future__ import annotations

import pytest

from object_digest.errors import (
    InvalidExclusionArgumentError,
    NullInputError,
    ObjectDigestError,
    UnsupportedAlgorithmError,
)


@pytest.mark.parametrize(
    ("error", "builtin"),
    [
        (NullInputError(), ValueError),
        (UnsupportedAlgorithmError("whirlpool"), ValueError),
        (InvalidExclusionArgumentError(42), TypeError),
    ],
)
def test_errors_share_base_and_builtin(error: Exception, builtin: type) -> None:
    """Every error derives from the package base and a matching builtin."""

    assert isinstance(error, ObjectDigestError)
    assert isinstance(error, builtin)


def test_unsupported_algorithm_carries_name() -> None:
    """The offending algorithm name is kept for diagnostics."""

    err = UnsupportedAlgorithmError("whirlpool")
    assert err.algorithm == "whirlpool"
    assert "whirlpool" in str(err)


def test_invalid_exclusion_carries_type_name() -> None:
    """The offending argument type is reported."""

    err = InvalidExclusionArgumentError(3.5)
    assert err.argument_type == "float"
    assert "float" in str(err)
