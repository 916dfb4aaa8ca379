"""
Windowed minimum and window size over the time index.

A window [time1, time2] is split at the lowest common ancestor of its
bounds: the LCA itself, the part of its left subtree at or after time1,
and the part of its right subtree at or before time2. Each side is walked
down a single boundary path, folding in whole subtrees through their
``worst`` and ``size`` aggregates, so every query is O(log n).

Both bounds must be times present in the tree with time1 <= time2.
"""

from __future__ import annotations

from typing import Optional

from .node import AVLNode, pick_worst, size, worst


def lowest_common_ancestor(
    root: Optional[AVLNode], time1: int, time2: int
) -> Optional[AVLNode]:
    """
    Find the deepest node whose time lies within [time1, time2].

    Args:
        root: Time index root
        time1: Lower bound
        time2: Upper bound

    Returns:
        The LCA, or None for an empty tree
    """
    node = root
    while node is not None:
        if node.key > time1 and node.key > time2:
            node = node.left
        elif node.key < time1 and node.key < time2:
            node = node.right
        else:
            return node
    return None


def _worst_from(node: Optional[AVLNode], time1: int) -> Optional[AVLNode]:
    """Lowest-quality node among keys >= time1 within a left subtree of the LCA."""
    if node is None:
        return None
    if node.key == time1:
        return pick_worst(node, worst(node.right))
    if node.key > time1:
        return pick_worst(_worst_from(node.left, time1), node, worst(node.right))
    return _worst_from(node.right, time1)


def _worst_until(node: Optional[AVLNode], time2: int) -> Optional[AVLNode]:
    """Lowest-quality node among keys <= time2 within a right subtree of the LCA."""
    if node is None:
        return None
    if node.key == time2:
        return pick_worst(worst(node.left), node)
    if node.key < time2:
        return pick_worst(worst(node.left), node, _worst_until(node.right, time2))
    return _worst_until(node.left, time2)


def worst_in_window(
    root: Optional[AVLNode],
    time1: int,
    time2: int,
    lca: Optional[AVLNode] = None,
) -> Optional[AVLNode]:
    """
    Return the lowest-quality node with time in [time1, time2].

    On equal quality the earliest time wins.

    Args:
        root: Time index root
        time1: Lower bound, present in the tree
        time2: Upper bound, present in the tree
        lca: Precomputed LCA of the bounds, if available

    Returns:
        The window's worst node, or None for an empty tree
    """
    if lca is None:
        lca = lowest_common_ancestor(root, time1, time2)
        if lca is None:
            return None
    return pick_worst(
        _worst_from(lca.left, time1), lca, _worst_until(lca.right, time2)
    )


def _count_from(node: Optional[AVLNode], time1: int) -> int:
    if node is None:
        return 0
    if node.key == time1:
        return 1 + size(node.right)
    if node.key > time1:
        return _count_from(node.left, time1) + 1 + size(node.right)
    return _count_from(node.right, time1)


def _count_until(node: Optional[AVLNode], time2: int) -> int:
    if node is None:
        return 0
    if node.key == time2:
        return size(node.left) + 1
    if node.key < time2:
        return size(node.left) + 1 + _count_until(node.right, time2)
    return _count_until(node.left, time2)


def count_in_window(
    root: Optional[AVLNode],
    time1: int,
    time2: int,
    lca: Optional[AVLNode] = None,
) -> int:
    """
    Count the records with time in [time1, time2].

    Same preconditions and decomposition as worst_in_window.
    """
    if lca is None:
        lca = lowest_common_ancestor(root, time1, time2)
        if lca is None:
            return 0
    return _count_from(lca.left, time1) + 1 + _count_until(lca.right, time2)
