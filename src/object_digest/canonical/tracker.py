"""Identity-based cycle tracking for one canonicalization pass."""

from __future__ import annotations

from typing import get_args

from object_digest.settings import CycleScope

__all__ = ["CycleTracker"]


class CycleTracker:
    """Registry of container identities visited during one pass.

    Identities are compared with ``id()``, never by value equality. Marked
    objects are pinned by a strong reference until the tracker is discarded,
    so a temporary container that is freed mid-pass cannot hand its ``id()``
    to an unrelated object.

    With the ``"pass"`` scope an identity stays marked until the pass ends,
    so a container shared by two siblings renders as a circular marker the
    second time. With the ``"path"`` scope :meth:`release` forgets the
    identity once its subtree is done and only true ancestors are reported.

    Field maps are visited in name order, so in the ``"pass"`` scope the
    sibling that receives the marker is fixed by key order. Unordered
    collections are visited in iteration order and sorted afterwards: for a
    ``set`` of identity-hashed objects that share a mutable child, which
    element carries the marker follows ``id()``-based iteration order and can
    differ between processes. Use the ``"path"`` scope for such data.
    """

    __slots__ = ("_scope", "_marked", "_pinned")

    def __init__(self, scope: CycleScope = "pass") -> None:
        if scope not in get_args(CycleScope):
            raise ValueError(f"Unknown cycle scope {scope!r}")
        self._scope: CycleScope = scope
        self._marked: set[int] = set()
        self._pinned: list[object] = []

    @property
    def scope(self) -> CycleScope:
        return self._scope

    def seen(self, value: object) -> bool:
        """Return ``True`` when ``value`` is currently marked."""

        return id(value) in self._marked

    def mark(self, value: object) -> None:
        """Register ``value`` before its children are visited."""

        self._marked.add(id(value))
        self._pinned.append(value)

    def release(self, value: object) -> None:
        """Forget ``value`` after its subtree completes (``"path"`` scope only)."""

        if self._scope == "path":
            self._marked.discard(id(value))

    def clear(self) -> None:
        """Drop every mark and pinned reference."""

        self._marked.clear()
        self._pinned.clear()

    def __len__(self) -> int:
        return len(self._marked)

    def __contains__(self, value: object) -> bool:
        return self.seen(value)
