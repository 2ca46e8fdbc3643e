"""Streaming digest computation over encoded canonical forms."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from object_digest.canonical.nodes import CanonicalNode
from object_digest.hashing.algorithms import HashAlgorithm, new_hasher, resolve_algorithm
from object_digest.hashing.encoder import encode_node
from object_digest.settings import DEFAULT_CHUNK_SIZE

__all__ = ["ChunkedDigestWriter", "compute_digest", "digest_node"]

LOGGER = logging.getLogger(__name__)


class ChunkedDigestWriter:
    """File-like sink feeding a hash primitive in fixed-size blocks.

    Writes are buffered until ``chunk_size`` bytes are pending and then
    handed to the hash object, so memory use is bounded by the chunk size
    rather than by the size of the encoded form.

    Args:
        algorithm: Hash algorithm or name; see :func:`resolve_algorithm`.
        chunk_size: Block size in bytes. Must be positive.
    """

    def __init__(
        self,
        algorithm: HashAlgorithm | str,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.algorithm = resolve_algorithm(algorithm)
        self.chunk_size = chunk_size
        self._hasher = new_hasher(self.algorithm)
        self._buffer = bytearray()
        self._closed = False
        self.bytes_written = 0
        self.chunks_hashed = 0

    def write(self, data: bytes) -> int:
        """Buffer ``data``, hashing every complete chunk."""

        if self._closed:
            raise ValueError("write to a finalized digest writer")
        view = memoryview(data)
        self._buffer += view
        self.bytes_written += len(view)
        while len(self._buffer) >= self.chunk_size:
            self._hasher.update(self._buffer[: self.chunk_size])
            del self._buffer[: self.chunk_size]
            self.chunks_hashed += 1
        return len(view)

    def flush(self) -> None:
        """Hash any partial chunk still buffered."""

        if self._buffer:
            self._hasher.update(self._buffer)
            self._buffer.clear()
            self.chunks_hashed += 1

    def hexdigest(self) -> str:
        """Flush, finalize and return the lowercase hex digest."""

        self.flush()
        self._closed = True
        return self._hasher.hexdigest()


def compute_digest(
    chunks: Iterable[bytes],
    algorithm: HashAlgorithm | str,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """Hash a stream of byte chunks.

    Args:
        chunks: Encoded bytes, in any chunking.
        algorithm: Hash algorithm or name.
        chunk_size: Block size fed to the hash primitive.

    Returns:
        Lowercase hex digest whose length matches the algorithm.

    Raises:
        UnsupportedAlgorithmError: If ``algorithm`` is not supported.
    """

    writer = ChunkedDigestWriter(algorithm, chunk_size=chunk_size)
    for chunk in chunks:
        writer.write(chunk)
    return writer.hexdigest()


def digest_node(
    node: CanonicalNode,
    algorithm: HashAlgorithm | str,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """Encode ``node`` straight into a hash and return the hex digest."""

    writer = ChunkedDigestWriter(algorithm, chunk_size=chunk_size)
    encode_node(node, writer)
    digest = writer.hexdigest()
    LOGGER.debug(
        "Hashed %d encoded bytes in %d chunks with %s",
        writer.bytes_written,
        writer.chunks_hashed,
        writer.algorithm.value,
    )
    return digest
