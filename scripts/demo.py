#!/usr/bin/env python3
"""Print MT19937 output and check it against the seed-1 reference tables.

Prints the first 200 outputs (mismatches marked with *), some 64-bit and
closed-interval float values, then checks the outputs at positions 2^k - 1.
Exits with status 1 if anything differs from the reference.

Usage (from the repository root):
    python scripts/demo.py                 # long-run check up to 2^32 - 1
    python scripts/demo.py --max-k 24      # stop the long-run check early
    python scripts/demo.py --slow          # pure-Python skip-ahead
    python scripts/demo.py --noise out.png # also save a noise image
"""

import argparse
import sys
import time
from pathlib import Path

# Add the repository root to path
SCRIPT_DIR = Path(__file__).resolve().parent
ROOT_DIR = SCRIPT_DIR.parent
sys.path.insert(0, str(ROOT_DIR))

from mersenne.noise import NoiseParams, render_params, save_noise_png  # noqa: E402
from mersenne.reference import (  # noqa: E402
    EXPECTED_SEED1,
    check_doubled_reference,
)
from mersenne.twister import MT19937  # noqa: E402


def print_reference_run(seed: int) -> int:
    """Print the first 200 outputs, returning the number of mismatches."""
    print(f"Mersenne Twister -- printing the first 200 numbers seed {seed}\n")
    rng = MT19937(seed)
    errors = 0
    for n, exp in enumerate(EXPECTED_SEED1):
        r = rng.next_u32()
        mark = " "
        if r != exp:
            errors += 1
            mark = "*"
        end = "\n" if n % 5 == 4 else " "
        print(f"{r:10d}{mark}", end=end)
    return errors


def print_samples(rng: MT19937) -> None:
    print("\nGenerating 64-bit pseudo-random numbers\n")
    for n in range(27):
        print(f"{rng.next_u64():20d}", end="\n" if n % 3 == 2 else " ")

    print("\nFloat values in range [0..1]\n")
    for n in range(40):
        print(f"{rng.next_f32_closed():f}", end="\n" if n % 5 == 4 else " ")

    print("\nDouble values in range [0..1]\n")
    for n in range(40):
        print(f"{rng.next_f64_closed():f}", end="\n" if n % 5 == 4 else " ")


def main():
    parser = argparse.ArgumentParser(
        description="MT19937 demonstration and reference validation"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=1,
        help="Seed for the printed output (default: 1; only seed 1 "
        "has reference values)",
    )
    parser.add_argument(
        "--max-k",
        type=int,
        default=32,
        help="Check positions 2^k - 1 for k up to this value (default: 32)",
    )
    parser.add_argument(
        "--slow",
        action="store_true",
        help="Skip ahead with pure Python instead of numpy",
    )
    parser.add_argument(
        "--noise",
        type=Path,
        default=None,
        help="Also save a 256x256 noise image of the stream to this PNG",
    )
    args = parser.parse_args()

    errors = print_reference_run(args.seed)
    rng = MT19937(args.seed)
    rng.discard(len(EXPECTED_SEED1))
    print_samples(rng)

    print("\nChecking reference numbers for seed 1 (may take some time)\n")
    start = time.perf_counter()

    def report(index: int, value: int) -> None:
        elapsed = time.perf_counter() - start
        print(f"  n={index:10d} {value:10d}  ({elapsed:.1f} s)", flush=True)

    try:
        ok, diffs = check_doubled_reference(
            max_k=args.max_k, fast=not args.slow, progress=report
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    for diff in diffs:
        print(f"  mismatch {diff}")

    if args.noise is not None:
        params = NoiseParams(seed=args.seed, width=256, height=256)
        save_noise_png(render_params(params), params, str(args.noise))
        print(f"\nNoise image: {args.noise}")

    print()
    if errors or not ok:
        print(
            f"FAILED: {errors} short-run and {len(diffs)} long-run mismatches",
            file=sys.stderr,
        )
        sys.exit(1)
    print("All reference values match")


if __name__ == "__main__":
    main()
