#!/usr/bin/env python3
"""Benchmark MT19937 draw throughput, scalar and numpy batch.

Usage (from the repository root):
    python scripts/bench.py              # default: 3 iterations, 1M draws
    python scripts/bench.py -n 5         # 5 iterations
    python scripts/bench.py -d 100000    # 100k draws per iteration
"""

import argparse
import statistics
import sys
import time
from pathlib import Path

# Add the repository root to path
SCRIPT_DIR = Path(__file__).resolve().parent
ROOT_DIR = SCRIPT_DIR.parent
sys.path.insert(0, str(ROOT_DIR))

from mersenne import batch  # noqa: E402
from mersenne.twister import MT19937  # noqa: E402


def _scalar(draws: int) -> None:
    rng = MT19937(1)
    next_u32 = rng.next_u32
    for _ in range(draws):
        next_u32()


def _batch(draws: int) -> None:
    batch.random_raw(MT19937(1), draws)


def _discard(draws: int) -> None:
    batch.discard(MT19937(1), draws)


def run(name: str, fn, draws: int, iterations: int) -> None:
    print(f"{name}:")
    fn(min(draws, 10000))  # warmup
    times = []
    for i in range(iterations):
        start = time.perf_counter()
        fn(draws)
        elapsed = time.perf_counter() - start
        times.append(elapsed)
        print(f"  Run {i + 1}: {elapsed * 1000:.1f} ms")
    median = statistics.median(times)
    print(f"  Median: {median * 1000:.1f} ms ({draws / median / 1e6:.2f} M/s)")
    if len(times) > 1:
        print(f"  Stdev:  {statistics.stdev(times) * 1000:.1f} ms")
    print()


def main():
    parser = argparse.ArgumentParser(description="Benchmark MT19937")
    parser.add_argument(
        "-n",
        "--iterations",
        type=int,
        default=3,
        help="Number of iterations (default: 3)",
    )
    parser.add_argument(
        "-d",
        "--draws",
        type=int,
        default=1_000_000,
        help="Draws per iteration (default: 1000000)",
    )
    args = parser.parse_args()

    print(f"Benchmark: {args.draws} draws, {args.iterations} iterations\n")
    run("next_u32 (pure Python)", _scalar, args.draws, args.iterations)
    run("batch.random_raw (numpy)", _batch, args.draws, args.iterations)
    run("batch.discard (numpy)", _discard, args.draws, args.iterations)


if __name__ == "__main__":
    main()
