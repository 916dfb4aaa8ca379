"""
Augmented AVL node shared by the time and quality indexes.

Besides the usual balance metadata, every node tracks the size of its
subtree and a reference to the subtree node holding the lowest quality.
"""

from __future__ import annotations

from typing import Optional


class AVLNode:
    """
    A record's node in one index.

    ``key`` is the ordering key of the owning index (time or quality),
    ``time`` and ``quality`` are always the record's own values.
    """

    __slots__ = ("key", "time", "quality", "height", "size", "worst", "left", "right")

    def __init__(self, key: int, time: int, quality: int):
        self.key = key
        self.time = time
        self.quality = quality
        self.height: int = 0
        self.size: int = 1
        # Observer reference into the same subtree, never an owner.
        self.worst: AVLNode = self
        self.left: Optional[AVLNode] = None
        self.right: Optional[AVLNode] = None

    def __repr__(self) -> str:
        return f"AVLNode(key={self.key}, time={self.time}, quality={self.quality})"

    def record(self) -> tuple[int, int]:
        """Return the record as a (time, quality) pair."""
        return self.time, self.quality


def height(node: Optional[AVLNode]) -> int:
    """Height of a subtree, -1 when empty."""
    return node.height if node is not None else -1


def size(node: Optional[AVLNode]) -> int:
    """Number of nodes in a subtree, 0 when empty."""
    return node.size if node is not None else 0


def worst(node: Optional[AVLNode]) -> Optional[AVLNode]:
    """Lowest-quality node of a subtree, None when empty."""
    return node.worst if node is not None else None


def balance_factor(node: AVLNode) -> int:
    return height(node.left) - height(node.right)


def pick_worst(*candidates: Optional[AVLNode]) -> Optional[AVLNode]:
    """
    Return the candidate with the lowest quality.

    Candidates are given in key order; on equal quality the earliest one
    wins. Empty (None) candidates are skipped.

    Args:
        *candidates: Nodes in left-to-right order, possibly None

    Returns:
        The lowest-quality node, or None if every candidate is empty
    """
    best = None
    for candidate in candidates:
        if candidate is None:
            continue
        if best is None or candidate.quality < best.quality:
            best = candidate
    return best


def update(node: AVLNode) -> None:
    """Recompute height, size and worst from the node's children."""
    node.height = max(height(node.left), height(node.right)) + 1
    node.size = size(node.left) + size(node.right) + 1
    node.worst = pick_worst(worst(node.left), node, worst(node.right))
