"""
Profiling script for PyRank catalog performance analysis.

This script profiles random catalog workloads to identify bottlenecks.
"""

import cProfile
import pstats
import io
from pstats import SortKey
import time

import numpy as np
from pyrank import Catalog
from pyrank.batch import bulk_add, bulk_remove


def create_records(n_records, n_qualities, seed=42):
    """Create n random records with unique times."""
    rng = np.random.default_rng(seed)
    times = rng.permutation(n_records * 4)[:n_records]
    qualities = rng.integers(0, n_qualities, size=n_records)
    return times, qualities


def profile_inserts():
    """Profile inserting 50k records."""
    times, qualities = create_records(50_000, 1000)
    catalog = Catalog(0)
    bulk_add(catalog, times, qualities)


def profile_mixed_writes():
    """Profile inserts followed by removals by time and by quality."""
    times, qualities = create_records(20_000, 100)
    catalog = Catalog(0)
    bulk_add(catalog, times, qualities)
    bulk_remove(catalog, times[::3])
    for quality in range(0, 100, 10):
        catalog.remove_all_by_quality(quality)


def profile_rank_overall():
    """Profile 100k global rank queries."""
    times, qualities = create_records(20_000, 1000)
    catalog = Catalog(0)
    bulk_add(catalog, times, qualities)
    ranks = np.random.default_rng(1).integers(1, len(catalog) + 1, size=100_000)
    for i in ranks.tolist():
        catalog.rank_overall(i)


def profile_rank_in_window():
    """Profile windowed rank queries with small and large ranks."""
    times, qualities = create_records(20_000, 1000)
    catalog = Catalog(0)
    bulk_add(catalog, times, qualities)
    rng = np.random.default_rng(2)
    bounds = np.sort(rng.integers(0, 80_000, size=(2_000, 2)), axis=1)
    ranks = rng.integers(1, 50, size=2_000)
    for (time1, time2), i in zip(bounds.tolist(), ranks.tolist()):
        catalog.rank_in_window(time1, time2, i)


def benchmark_scenario(name, func):
    """Benchmark a scenario and print timing."""
    print(f"\n{'='*60}")
    print(f"Profiling: {name}")
    print('='*60)

    profiler = cProfile.Profile()

    start_time = time.time()
    profiler.enable()
    func()
    profiler.disable()
    elapsed = time.time() - start_time

    print(f"\nTotal time: {elapsed:.3f}s")

    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats(SortKey.CUMULATIVE)
    ps.print_stats(20)

    print("\nTop 20 functions by cumulative time:")
    print(s.getvalue())

    return profiler


def main():
    """Run all profiling scenarios."""
    print("PyRank Performance Profiling")
    print("=" * 60)

    scenarios = [
        ("Inserts (50k records)", profile_inserts),
        ("Mixed Writes (20k records)", profile_mixed_writes),
        ("Global Rank (100k queries)", profile_rank_overall),
        ("Windowed Rank (2k queries)", profile_rank_in_window),
    ]

    profilers = {}
    for name, func in scenarios:
        profilers[name] = benchmark_scenario(name, func)

    print("\n" + "="*60)
    print("Saving detailed profiles...")
    print("="*60)

    for name, profiler in profilers.items():
        filename = f"profile_{name.lower().replace(' ', '_').replace('(', '').replace(')', '')}.prof"
        profiler.dump_stats(filename)
        print(f"Saved: {filename}")

    print("\nTo view detailed profile, use:")
    print("  python -m pstats <profile_file>")


if __name__ == "__main__":
    main()
