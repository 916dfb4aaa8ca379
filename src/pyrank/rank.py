"""
Order-statistic queries by quality.

The global rank walks the quality index using subtree sizes. The windowed
rank has no dedicated structure behind it: it repeatedly takes the
window minimum from the time index, hiding each extracted record by
raising its quality above every real one, and puts the qualities back
once the i-th record is known.
"""

from __future__ import annotations

from typing import Optional

from .config import get_logger
from .indexes import TimeIndex
from .node import AVLNode, size
from .rangemin import count_in_window, lowest_common_ancestor, worst_in_window

logger = get_logger(__name__)


def rank_overall(root: Optional[AVLNode], i: int) -> Optional[AVLNode]:
    """
    Find the i-th node (1-based) of a quality index.

    Args:
        root: Quality index root
        i: Rank, 1 for the lowest quality

    Returns:
        The i-th node, or None when i is out of [1, size]
    """
    if i <= 0 or i > size(root):
        return None

    node = root
    while node is not None:
        left = size(node.left)
        if left + 1 == i:
            return node
        if left + 1 > i:
            node = node.left
        else:
            i -= left + 1
            node = node.right
    return None


def rank_in_window(
    index: TimeIndex, time1: int, time2: int, i: int, sentinel: int
) -> Optional[AVLNode]:
    """
    Find the node of i-th lowest quality among times in [time1, time2].

    Ties on quality are ordered by time. The time index is temporarily
    modified and always restored before returning, also when an exception
    propagates.

    Args:
        index: Time index
        time1: Lower bound, present in the index
        time2: Upper bound, present in the index, time1 <= time2
        i: Rank within the window, 1 for the lowest quality
        sentinel: A quality strictly greater than any stored quality

    Returns:
        The i-th node of the window, or None if the window holds fewer
        than i records
    """
    if i <= 0:
        return None
    lca = lowest_common_ancestor(index.root, time1, time2)
    if lca is None or count_in_window(index.root, time1, time2, lca) < i:
        return None

    # LCA stays valid: only qualities change, never keys or shape.
    hidden: list[tuple[AVLNode, int]] = []
    try:
        for _ in range(i - 1):
            node = worst_in_window(index.root, time1, time2, lca)
            hidden.append((node, node.quality))
            node.quality = sentinel
            index.refresh(node.key)
        result = worst_in_window(index.root, time1, time2, lca)
    finally:
        for node, quality in reversed(hidden):
            node.quality = quality
            index.refresh(node.key)

    logger.debug(
        "rank %d in [%d, %d] after %d extractions: time %d",
        i, time1, time2, len(hidden), result.key,
    )
    return result
