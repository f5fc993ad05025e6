"""Compare a HyperBitBit estimate with the exact distinct count.

Draws random alphanumeric strings, inserts them into a sketch and into a
set, and prints the actual count, the estimate and the error. With
``--sizes`` several stream lengths are run over multiple seeds, and a chart
of estimate vs actual is written to the output directory.

Usage:
    python examples/simple.py
    python examples/simple.py --items 100000 --length 4
    python examples/simple.py --sizes 1000 10000 100000 --seeds 5 --output output/simple
"""

from __future__ import annotations

import argparse
from pathlib import Path

import hyperbitbit
from hyperbitbit.analysis import plot_accuracy, run_accuracy_study, run_accuracy_trial, summarize_study


def print_trial(num_items: int, seed: int, length: int) -> None:
    trial = run_accuracy_trial(num_items, seed, length)

    print(f"Actuals cardinality:   {trial.actual}")
    print(f"Estimated cardinality: {trial.estimate}")
    print(f"Error % cardinality:   {100 * trial.relative_error:.2f}")


def print_study(sizes: list[int], num_seeds: int, length: int, output_dir: Path | None) -> None:
    results = run_accuracy_study(sizes, range(1, num_seeds + 1), length)
    summary = summarize_study(results)

    print("\n" + "=" * 70)
    print("HYPERBITBIT ACCURACY")
    print("=" * 70)
    print(summary.to_string(float_format=lambda v: f"{v:.3f}"))

    if output_dir is not None:
        path = plot_accuracy(results, output_dir / "accuracy.png")
        print(f"\nSaved: {path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="HyperBitBit vs exact distinct count")
    parser.add_argument("--items", type=int, default=10000, help="Number of strings to draw")
    parser.add_argument("--length", type=int, default=4, help="Length of each random string")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--sizes", type=int, nargs="*", help="Run a study over these stream lengths")
    parser.add_argument("--seeds", type=int, default=5, help="Seeds per size in a study")
    parser.add_argument("--output", type=str, default=None, help="Directory for the study chart")
    parser.add_argument("--verbose", action="store_true", help="Log sketch promotions")
    args = parser.parse_args()

    if args.verbose:
        hyperbitbit.enable_console_logging(level="DEBUG")

    if args.sizes:
        output_dir = Path(args.output) if args.output else None
        print_study(args.sizes, args.seeds, args.length, output_dir)
    else:
        print_trial(args.items, args.seed, args.length)
