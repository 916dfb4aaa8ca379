"""Tests for the rank engine."""

import random

import pytest
from pyrank import rank
from pyrank.indexes import QualityIndex, TimeIndex
from pyrank.node import AVLNode

SCENARIO = [(4, 11), (6, 12), (2, 13), (1, 14), (3, 15), (5, 17), (7, 17)]


def build(pairs):
    times, qualities = TimeIndex(), QualityIndex()
    for time, quality in pairs:
        times.insert(AVLNode(time, time, quality))
        qualities.insert(AVLNode(quality, time, quality))
    return times, qualities


def snapshot(index):
    """Capture every node's quality and aggregates, keeping worst by identity."""
    return [
        (node, node.quality, node.worst, node.size, node.height) for node in index
    ]


def assert_unchanged(index, before):
    after = snapshot(index)
    assert len(after) == len(before)
    for (n1, q1, w1, s1, h1), (n2, q2, w2, s2, h2) in zip(before, after):
        assert n1 is n2
        assert q1 == q2
        assert w1 is w2
        assert (s1, h1) == (s2, h2)


def sentinel(qualities):
    return qualities.max_quality() + 1


class TestRankOverall:
    """Test global rank."""

    def test_scenario(self):
        """Test the reference scenario ranks."""
        _, qualities = build(SCENARIO)
        ranks = [rank.rank_overall(qualities.root, i).time for i in range(1, 8)]
        assert ranks == [4, 6, 2, 1, 3, 5, 7]

    def test_out_of_range(self):
        """Test ranks outside [1, n] give None."""
        _, qualities = build(SCENARIO)
        assert rank.rank_overall(qualities.root, 0) is None
        assert rank.rank_overall(qualities.root, -3) is None
        assert rank.rank_overall(qualities.root, 8) is None
        assert rank.rank_overall(None, 1) is None

    def test_monotonic_qualities(self):
        """Test qualities never decrease with rank."""
        rng = random.Random(3)
        pairs = [(t, rng.randrange(20)) for t in rng.sample(range(1000), 200)]
        _, qualities = build(pairs)
        found = [rank.rank_overall(qualities.root, i).quality for i in range(1, 201)]
        assert found == sorted(found)


class TestRankInWindow:
    """Test windowed rank with extract-and-restore."""

    def test_scenario(self):
        """Test the third best record between times 2 and 6."""
        times, qualities = build(SCENARIO)
        node = rank.rank_in_window(times, 2, 6, 3, sentinel(qualities))
        assert node.key == 2

    def test_each_rank_of_window(self):
        """Test every rank of a window in order."""
        times, qualities = build(SCENARIO)
        found = [
            rank.rank_in_window(times, 2, 6, i, sentinel(qualities)).key
            for i in range(1, 6)
        ]
        assert found == [4, 6, 2, 3, 5]

    def test_rank_beyond_window(self):
        """Test a rank larger than the window gives None."""
        times, qualities = build(SCENARIO)
        assert rank.rank_in_window(times, 2, 6, 6, sentinel(qualities)) is None
        assert rank.rank_in_window(times, 2, 6, 0, sentinel(qualities)) is None

    def test_restores_state_on_success(self):
        """Test qualities and worst references are put back."""
        times, qualities = build(SCENARIO)
        before = snapshot(times)
        rank.rank_in_window(times, 1, 7, 6, sentinel(qualities))
        assert_unchanged(times, before)
        times.validate()

    def test_restores_state_on_failure(self):
        """Test nothing changes when the rank does not exist."""
        times, qualities = build(SCENARIO)
        before = snapshot(times)
        assert rank.rank_in_window(times, 3, 5, 4, sentinel(qualities)) is None
        assert_unchanged(times, before)

    def test_restores_state_on_error(self, monkeypatch):
        """Test hidden records are restored when an exception escapes."""
        times, qualities = build(SCENARIO)
        before = snapshot(times)
        real = rank.worst_in_window
        calls = []

        def failing(*args):
            calls.append(args)
            if len(calls) == 3:
                raise RuntimeError("boom")
            return real(*args)

        monkeypatch.setattr(rank, "worst_in_window", failing)
        with pytest.raises(RuntimeError):
            rank.rank_in_window(times, 1, 7, 4, sentinel(qualities))
        assert_unchanged(times, before)

    def test_matches_brute_force(self):
        """Test random windows and ranks against sorting."""
        rng = random.Random(11)
        times_list = rng.sample(range(500), 80)
        pairs = [(t, rng.randrange(15)) for t in times_list]
        times, qualities = build(pairs)
        present = sorted(times_list)
        before = snapshot(times)

        for _ in range(150):
            a = rng.randrange(len(present))
            b = rng.randrange(a, len(present))
            t1, t2 = present[a], present[b]
            window = sorted((q, t) for t, q in pairs if t1 <= t <= t2)
            i = rng.randrange(1, len(window) + 2)
            node = rank.rank_in_window(times, t1, t2, i, sentinel(qualities))
            if i > len(window):
                assert node is None
            else:
                assert node.key == window[i - 1][1]

        assert_unchanged(times, before)
