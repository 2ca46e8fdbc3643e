"""Encoding of canonical forms and the streaming digest computer."""

from object_digest.hashing.algorithms import HEX_LENGTHS, HashAlgorithm, resolve_algorithm
from object_digest.hashing.computer import ChunkedDigestWriter, compute_digest, digest_node
from object_digest.hashing.encoder import encode_node, encode_node_bytes

__all__ = [
    "HEX_LENGTHS",
    "ChunkedDigestWriter",
    "HashAlgorithm",
    "compute_digest",
    "digest_node",
    "encode_node",
    "encode_node_bytes",
    "resolve_algorithm",
]
