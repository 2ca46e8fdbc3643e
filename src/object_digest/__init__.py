"""Object Digest - deterministic fingerprints of structured in-memory values."""

from __future__ import annotations

from importlib import import_module
from typing import Any, TYPE_CHECKING

__all__ = [
    "ObjectDigest",
    "digest_object",
    "HashAlgorithm",
    "DigestRecord",
    "build_canonical_form",
    "configure_logging",
    "ObjectDigestSettings",
    "ObjectDigestError",
    "NullInputError",
    "UnsupportedAlgorithmError",
    "InvalidExclusionArgumentError",
]

if TYPE_CHECKING:
    from .canonical.engine import build_canonical_form
    from .errors import (
        InvalidExclusionArgumentError,
        NullInputError,
        ObjectDigestError,
        UnsupportedAlgorithmError,
    )
    from .handle import ObjectDigest, digest_object
    from .hashing.algorithms import HashAlgorithm
    from .logging_pipeline import configure_logging
    from .schemas import DigestRecord
    from .settings import ObjectDigestSettings


def __getattr__(name: str) -> Any:
    """Lazily import submodules so ``import object_digest`` stays cheap."""

    module_map = {
        "ObjectDigest": "handle",
        "digest_object": "handle",
        "HashAlgorithm": "hashing.algorithms",
        "DigestRecord": "schemas",
        "build_canonical_form": "canonical.engine",
        "configure_logging": "logging_pipeline",
        "ObjectDigestSettings": "settings",
        "ObjectDigestError": "errors",
        "NullInputError": "errors",
        "UnsupportedAlgorithmError": "errors",
        "InvalidExclusionArgumentError": "errors",
    }

    if name not in module_map:
        raise AttributeError(name)

    module = import_module(f".{module_map[name]}", __name__)
    return getattr(module, name)
