"""
Time and quality indexes built on the AVL primitives.

Both indexes hold one AVLNode per record; they differ only in ordering.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from . import avl
from .node import AVLNode, size


class AVLIndex:
    """
    AVL tree owning its root, ordered by a fixed key function.

    Subclasses set ``order``.
    """

    order = staticmethod(avl.by_time)

    def __init__(self):
        self.root: Optional[AVLNode] = None

    def __len__(self) -> int:
        return size(self.root)

    def __bool__(self) -> bool:
        return self.root is not None

    def __iter__(self) -> Iterator[AVLNode]:
        return avl.iter_nodes(self.root)

    def insert(self, node: AVLNode) -> bool:
        """
        Insert a node.

        Returns:
            False if a node with the same order key already exists; the
            given node is then left unlinked and the caller owns it
        """
        before = len(self)
        self.root = avl.insert(self.root, node, self.order)
        return len(self) > before

    def delete(self, target: Any) -> bool:
        """
        Delete the node with the given order key.

        Returns:
            False if no such node exists
        """
        before = len(self)
        self.root = avl.delete(self.root, target, self.order)
        return len(self) < before

    def find(self, target: Any) -> Optional[AVLNode]:
        return avl.find(self.root, target, self.order)

    def refresh(self, target: Any) -> None:
        """Recompute aggregates along the path to target after an in-place quality change."""
        avl.refresh_path(self.root, target, self.order)

    def validate(self) -> None:
        """Check every tree invariant; raises InvariantError."""
        avl.validate(self.root, self.order)


class TimeIndex(AVLIndex):
    """Index ordered by record time. Times are unique."""

    order = staticmethod(avl.by_time)

    def predecessor(self, time: int) -> Optional[AVLNode]:
        """Node with the largest time strictly before the given time."""
        return avl.predecessor(self.root, time, self.order)

    def successor(self, time: int) -> Optional[AVLNode]:
        """Node with the smallest time strictly after the given time."""
        return avl.successor(self.root, time, self.order)


class QualityIndex(AVLIndex):
    """
    Index ordered by (quality, time).

    Qualities repeat; the record time disambiguates equal qualities, so
    targets for find/delete are (quality, time) pairs.
    """

    order = staticmethod(avl.by_quality)

    def find_quality(self, quality: int) -> Optional[AVLNode]:
        """Return any node with the given quality, or None."""
        node = self.root
        while node is not None:
            if quality < node.key:
                node = node.left
            elif quality > node.key:
                node = node.right
            else:
                return node
        return None

    def max_quality(self) -> Optional[int]:
        if self.root is None:
            return None
        return avl.maximum(self.root).quality

    def min_quality(self) -> Optional[int]:
        if self.root is None:
            return None
        return avl.minimum(self.root).quality
