"""
Catalog of (time, quality) records with rank queries.

The catalog owns a time index and a quality index over the same records
and keeps them in step on every write. It also caches whether any record
currently has the target quality given at construction.
"""

from __future__ import annotations

from typing import Iterator, Optional

from .config import NOT_FOUND, Config, get_logger
from .exceptions import InvariantError, ResourceExhaustedError
from .indexes import QualityIndex, TimeIndex
from .node import AVLNode
from . import rangemin
from . import rank

logger = get_logger(__name__)


class Catalog:
    """
    In-memory record catalog.

    Times are unique integers; qualities are integers that may repeat.
    Rank 1 is the lowest quality, with earlier times first on ties.
    """

    def __init__(self, target_quality: int):
        """
        Initialize an empty catalog.

        Args:
            target_quality: Quality tracked by exists_target()
        """
        self._target_quality = target_quality
        self._target_exists = False
        self.times = TimeIndex()
        self.qualities = QualityIndex()

    def __len__(self) -> int:
        return len(self.times)

    def __contains__(self, time: int) -> bool:
        return self.times.find(time) is not None

    def __repr__(self) -> str:
        return f"Catalog(target_quality={self._target_quality}, records={len(self)})"

    @property
    def target_quality(self) -> int:
        return self._target_quality

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def add(self, time: int, quality: int) -> bool:
        """
        Add a record.

        Args:
            time: Record time, unique within the catalog
            quality: Record quality

        Returns:
            False if a record with this time already exists (nothing changes)

        Raises:
            ResourceExhaustedError: If the record's nodes cannot be allocated
        """
        if time in self:
            logger.debug("add(%d, %d) ignored: time already present", time, quality)
            return False

        try:
            time_node = AVLNode(time, time, quality)
            quality_node = AVLNode(quality, time, quality)
        except MemoryError as exc:
            raise ResourceExhaustedError(
                f"cannot allocate record ({time}, {quality})"
            ) from exc

        self.times.insert(time_node)
        self.qualities.insert(quality_node)
        if quality == self._target_quality:
            self._target_exists = True
        logger.debug("added (%d, %d)", time, quality)
        return True

    def remove_by_time(self, time: int) -> bool:
        """
        Remove the record with the given time.

        Returns:
            False if no such record exists
        """
        node = self.times.find(time)
        if node is None:
            logger.debug("remove_by_time(%d) ignored: no such time", time)
            return False

        quality = node.quality
        self._unlink(time, quality)
        if quality == self._target_quality:
            self._target_exists = self.qualities.find_quality(quality) is not None
        logger.debug("removed (%d, %d)", time, quality)
        return True

    def remove_all_by_quality(self, quality: int) -> int:
        """
        Remove every record with the given quality.

        Returns:
            Number of records removed
        """
        removed = 0
        node = self.qualities.find_quality(quality)
        while node is not None:
            self._unlink(node.time, quality)
            removed += 1
            node = self.qualities.find_quality(quality)

        if removed and quality == self._target_quality:
            self._target_exists = False
        logger.debug("removed %d record(s) with quality %d", removed, quality)
        return removed

    def _unlink(self, time: int, quality: int) -> None:
        self.times.delete(time)
        self.qualities.delete((quality, time))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def exists_target(self) -> bool:
        """Whether some record has the target quality."""
        return self._target_exists

    def quality_of(self, time: int) -> Optional[int]:
        node = self.times.find(time)
        return node.quality if node is not None else None

    def max_quality(self) -> Optional[int]:
        return self.qualities.max_quality()

    def min_quality(self) -> Optional[int]:
        return self.qualities.min_quality()

    def rank_overall(self, i: int) -> Optional[int]:
        """
        Time of the record with the i-th lowest quality.

        Returns:
            The record's time, or NOT_FOUND if i is out of [1, len(self)]
        """
        node = rank.rank_overall(self.qualities.root, i)
        return node.time if node is not None else NOT_FOUND

    def rank_in_window(self, time1: int, time2: int, i: int) -> Optional[int]:
        """
        Time of the record with the i-th lowest quality among times in [time1, time2].

        Bounds need not be present: time1 is moved forward to the next
        existing time and time2 back to the previous one.

        Returns:
            The record's time, or NOT_FOUND if the window holds fewer than
            i records or i is not positive
        """
        if i <= 0:
            return NOT_FOUND
        bounds = self._window(time1, time2)
        if bounds is None:
            return NOT_FOUND

        sentinel = self.qualities.max_quality() + Config.sentinel_step
        node = rank.rank_in_window(self.times, bounds[0], bounds[1], i, sentinel)
        return node.key if node is not None else NOT_FOUND

    def worst_in_window(self, time1: int, time2: int) -> Optional[int]:
        """Time of the lowest-quality record in [time1, time2], or NOT_FOUND."""
        bounds = self._window(time1, time2)
        if bounds is None:
            return NOT_FOUND
        node = rangemin.worst_in_window(self.times.root, *bounds)
        return node.key if node is not None else NOT_FOUND

    def count_in_window(self, time1: int, time2: int) -> int:
        """Number of records with time in [time1, time2]."""
        bounds = self._window(time1, time2)
        if bounds is None:
            return 0
        return rangemin.count_in_window(self.times.root, *bounds)

    def _window(self, time1: int, time2: int) -> Optional[tuple[int, int]]:
        """
        Snap window bounds to existing times.

        Returns:
            (first, last) present times inside the window, or None when the
            window contains no record
        """
        if time1 > time2 or not self.times:
            return None
        if self.times.find(time1) is None:
            node = self.times.successor(time1)
            if node is None:
                return None
            time1 = node.key
        if self.times.find(time2) is None:
            node = self.times.predecessor(time2)
            if node is None:
                return None
            time2 = node.key
        if time1 > time2:
            return None
        return time1, time2

    # ------------------------------------------------------------------
    # Iteration and checks
    # ------------------------------------------------------------------
    def records(self) -> Iterator[tuple[int, int]]:
        """Yield (time, quality) pairs in time order."""
        for node in self.times:
            yield node.record()

    def ranked(self) -> Iterator[tuple[int, int]]:
        """Yield (time, quality) pairs from lowest to highest quality."""
        for node in self.qualities:
            yield node.record()

    def validate(self) -> None:
        """
        Check both indexes, their agreement and the target flag (for testing).

        Raises:
            InvariantError: On the first inconsistency found
        """
        self.times.validate()
        self.qualities.validate()

        by_time = sorted(self.records())
        by_quality = sorted(self.ranked())
        if by_time != by_quality:
            raise InvariantError("time and quality indexes hold different records")

        expected = any(q == self._target_quality for _, q in by_time)
        if expected != self._target_exists:
            raise InvariantError(
                f"target flag is {self._target_exists}, expected {expected}"
            )
