"""
Balance-preserving AVL primitives over augmented nodes.

Every function works on a subtree root and returns the new root where the
shape may change. The ordering of an index is supplied as a key function
(``order``) mapping a node to a comparable value, so the same primitives
serve the time index (ordered by time) and the quality index (ordered by
quality, then time).
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, Optional

from .exceptions import InvariantError
from .node import AVLNode, balance_factor, height, pick_worst, size, update, worst

Order = Callable[[AVLNode], Any]


def by_time(node: AVLNode) -> int:
    return node.key


def by_quality(node: AVLNode) -> tuple[int, int]:
    return node.key, node.time


# ----------------------------------------------------------------------
# Rotations
# ----------------------------------------------------------------------
def rotate_left(node: AVLNode) -> AVLNode:
    """
    Rotate the subtree left around its right child.

    Only the two rotated nodes have their aggregates recomputed; the
    lowered node first since the new root depends on it.

    Returns:
        New subtree root
    """
    pivot = node.right
    node.right = pivot.left
    pivot.left = node
    update(node)
    update(pivot)
    return pivot


def rotate_right(node: AVLNode) -> AVLNode:
    """Mirror image of rotate_left."""
    pivot = node.left
    node.left = pivot.right
    pivot.right = node
    update(node)
    update(pivot)
    return pivot


def rebalance(node: AVLNode) -> AVLNode:
    """
    Restore AVL balance at a node whose children are balanced.

    Args:
        node: Subtree root with up-to-date aggregates

    Returns:
        New subtree root
    """
    factor = balance_factor(node)
    if factor > 1:
        if balance_factor(node.left) < 0:
            node.left = rotate_left(node.left)
        return rotate_right(node)
    if factor < -1:
        if balance_factor(node.right) > 0:
            node.right = rotate_right(node.right)
        return rotate_left(node)
    return node


# ----------------------------------------------------------------------
# Mutation
# ----------------------------------------------------------------------
def insert(root: Optional[AVLNode], node: AVLNode, order: Order) -> AVLNode:
    """
    Insert a fresh node into a subtree.

    A node whose order key is already present is not linked and the
    subtree is returned unchanged.

    Args:
        root: Subtree root (None for empty)
        node: Unlinked node with default aggregates
        order: Key function of the index

    Returns:
        New subtree root
    """
    if root is None:
        return node

    key = order(node)
    here = order(root)
    if key < here:
        root.left = insert(root.left, node, order)
    elif key > here:
        root.right = insert(root.right, node, order)
    else:
        return root

    update(root)
    return rebalance(root)


def delete(root: Optional[AVLNode], target: Any, order: Order) -> Optional[AVLNode]:
    """
    Delete the node whose order key equals target.

    A node with two children takes over its in-order successor's record
    and the successor is removed from the right subtree instead, so the
    node physically unlinked never has more than one child. Deleting an
    absent key leaves the subtree unchanged.

    Args:
        root: Subtree root
        target: Order key to remove
        order: Key function of the index

    Returns:
        New subtree root (None if the subtree became empty)
    """
    if root is None:
        return None

    here = order(root)
    if target < here:
        root.left = delete(root.left, target, order)
    elif target > here:
        root.right = delete(root.right, target, order)
    elif root.left is None or root.right is None:
        return root.left if root.left is not None else root.right
    else:
        successor = minimum(root.right)
        root.key = successor.key
        root.time = successor.time
        root.quality = successor.quality
        root.right = delete(root.right, order(successor), order)

    update(root)
    return rebalance(root)


def refresh_path(root: Optional[AVLNode], target: Any, order: Order) -> None:
    """
    Recompute aggregates on the path from root down to target.

    Used after changing a node's quality in place. Keys are untouched, so
    no rebalancing is needed.
    """
    if root is None:
        return
    here = order(root)
    if target < here:
        refresh_path(root.left, target, order)
    elif target > here:
        refresh_path(root.right, target, order)
    update(root)


# ----------------------------------------------------------------------
# Queries
# ----------------------------------------------------------------------
def find(root: Optional[AVLNode], target: Any, order: Order) -> Optional[AVLNode]:
    node = root
    while node is not None:
        here = order(node)
        if target < here:
            node = node.left
        elif target > here:
            node = node.right
        else:
            return node
    return None


def minimum(root: AVLNode) -> AVLNode:
    while root.left is not None:
        root = root.left
    return root


def maximum(root: AVLNode) -> AVLNode:
    while root.right is not None:
        root = root.right
    return root


def predecessor(root: Optional[AVLNode], target: Any, order: Order) -> Optional[AVLNode]:
    """Node with the largest key strictly below target, whether or not target is present."""
    best = None
    node = root
    while node is not None:
        if order(node) < target:
            best = node
            node = node.right
        else:
            node = node.left
    return best


def successor(root: Optional[AVLNode], target: Any, order: Order) -> Optional[AVLNode]:
    """Node with the smallest key strictly above target, whether or not target is present."""
    best = None
    node = root
    while node is not None:
        if order(node) > target:
            best = node
            node = node.left
        else:
            node = node.right
    return best


def iter_nodes(root: Optional[AVLNode]) -> Iterator[AVLNode]:
    """Yield the subtree's nodes in key order."""
    stack: list[AVLNode] = []
    node = root
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        yield node
        node = node.right


def validate(root: Optional[AVLNode], order: Order) -> None:
    """
    Verify ordering, balance, height, size and worst for a subtree (for testing).

    Raises:
        InvariantError: On the first violated invariant
    """
    previous = None
    for node in iter_nodes(root):
        if previous is not None and not order(previous) < order(node):
            raise InvariantError(f"keys out of order at {previous!r} -> {node!r}")
        previous = node
    _validate_node(root)


def _validate_node(node: Optional[AVLNode]) -> None:
    if node is None:
        return
    _validate_node(node.left)
    _validate_node(node.right)

    if abs(balance_factor(node)) > 1:
        raise InvariantError(f"unbalanced at {node!r}")
    if node.height != max(height(node.left), height(node.right)) + 1:
        raise InvariantError(f"stale height at {node!r}")
    if node.size != size(node.left) + size(node.right) + 1:
        raise InvariantError(f"stale size at {node!r}")
    if node.worst is not pick_worst(worst(node.left), node, worst(node.right)):
        raise InvariantError(f"stale worst at {node!r}")
