"""
Minimal reference catalog using sortedcontainers.SortedList.

This provides the Catalog query interface with straightforward scans
instead of augmented trees. It is slow for windowed queries but easy to
trust, which makes it the oracle for checking Catalog.
"""

from typing import Iterator, Optional

from sortedcontainers import SortedList

from .config import NOT_FOUND


class ReferenceCatalog:
    """
    Catalog stand-in backed by two SortedLists.

    Rank order is (quality, time), as in Catalog.
    """

    def __init__(self, target_quality: int):
        """
        Initialize an empty reference catalog.

        Args:
            target_quality: Quality tracked by exists_target()
        """
        self.target_quality = target_quality
        self._quality_of: dict[int, int] = {}
        self._times = SortedList()
        self._ranked = SortedList()

    def __len__(self) -> int:
        return len(self._times)

    def __contains__(self, time: int) -> bool:
        return time in self._quality_of

    def add(self, time: int, quality: int) -> bool:
        if time in self._quality_of:
            return False
        self._quality_of[time] = quality
        self._times.add(time)
        self._ranked.add((quality, time))
        return True

    def remove_by_time(self, time: int) -> bool:
        quality = self._quality_of.pop(time, None)
        if quality is None:
            return False
        self._times.remove(time)
        self._ranked.remove((quality, time))
        return True

    def remove_all_by_quality(self, quality: int) -> int:
        doomed = [time for q, time in self._ranked if q == quality]
        for time in doomed:
            self.remove_by_time(time)
        return len(doomed)

    def exists_target(self) -> bool:
        return any(q == self.target_quality for q, _ in self._ranked)

    def quality_of(self, time: int) -> Optional[int]:
        return self._quality_of.get(time)

    def rank_overall(self, i: int) -> Optional[int]:
        if not 1 <= i <= len(self._ranked):
            return NOT_FOUND
        return self._ranked[i - 1][1]

    def _window(self, time1: int, time2: int) -> list[tuple[int, int]]:
        """Records in [time1, time2] in rank order."""
        return [(q, t) for q, t in self._ranked if time1 <= t <= time2]

    def rank_in_window(self, time1: int, time2: int, i: int) -> Optional[int]:
        window = self._window(time1, time2)
        if not 1 <= i <= len(window):
            return NOT_FOUND
        return window[i - 1][1]

    def worst_in_window(self, time1: int, time2: int) -> Optional[int]:
        return self.rank_in_window(time1, time2, 1)

    def count_in_window(self, time1: int, time2: int) -> int:
        if time1 > time2:
            return 0
        return sum(1 for _ in self._times.irange(time1, time2))

    def records(self) -> Iterator[tuple[int, int]]:
        for time in self._times:
            yield time, self._quality_of[time]

    def ranked(self) -> Iterator[tuple[int, int]]:
        for quality, time in self._ranked:
            yield time, quality
