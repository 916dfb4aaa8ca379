"""
Batch catalog operations.

This module provides helpers that apply many writes from array-likes and
export rankings as numpy arrays.
"""

from typing import Any

import numpy as np

from .catalog import Catalog


def _as_int_array(values: Any, name: str) -> np.ndarray:
    """
    Convert an array-like to a 1-D integer array.

    Raises:
        ValueError: If values are not one-dimensional integers
    """
    arr = np.asarray(values)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional, got shape {arr.shape}")
    if arr.size and not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"{name} must hold integers, got dtype {arr.dtype}")
    return arr


def bulk_add(catalog: Catalog, times: Any, qualities: Any) -> int:
    """
    Add records given as parallel arrays.

    Input is validated before the catalog is touched. Records whose time
    is already present (including repeats within times) are skipped as
    with Catalog.add.

    Args:
        catalog: Target catalog
        times: Record times
        qualities: Record qualities, same length as times

    Returns:
        Number of records added
    """
    times = _as_int_array(times, "times")
    qualities = _as_int_array(qualities, "qualities")
    if len(times) != len(qualities):
        raise ValueError(
            f"times and qualities differ in length ({len(times)} != {len(qualities)})"
        )

    added = 0
    for time, quality in zip(times.tolist(), qualities.tolist()):
        if catalog.add(time, quality):
            added += 1
    return added


def bulk_remove(catalog: Catalog, times: Any) -> int:
    """
    Remove the records with the given times.

    Returns:
        Number of records removed
    """
    times = _as_int_array(times, "times")
    removed = 0
    for time in times.tolist():
        if catalog.remove_by_time(time):
            removed += 1
    return removed


def from_arrays(target_quality: int, times: Any, qualities: Any) -> Catalog:
    """Create a catalog and fill it from parallel arrays."""
    catalog = Catalog(target_quality)
    bulk_add(catalog, times, qualities)
    return catalog


def ranked_times(catalog: Catalog) -> np.ndarray:
    """
    Record times ordered by rank.

    Element k holds catalog.rank_overall(k + 1).
    """
    return np.fromiter(
        (time for time, _ in catalog.ranked()), dtype=np.int64, count=len(catalog)
    )
