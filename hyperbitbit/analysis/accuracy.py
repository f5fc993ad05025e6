"""Empirical accuracy of HyperBitBit against exact distinct counts.

Each trial draws random alphanumeric strings from a seeded generator,
feeds them both to a sketch and to an exact set, and records how far the
estimate is from the true distinct count. Short strings collide often, so
the true distinct count is usually below the number of draws.
"""

from __future__ import annotations

import logging
import random
import string
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from hyperbitbit.sketching.hyperbitbit import HyperBitBit

logger = logging.getLogger(__name__)

ALPHABET = string.ascii_letters + string.digits

DEFAULT_SIZES = (1_000, 10_000, 100_000)
DEFAULT_SEEDS = (1, 2, 3, 4, 5)

COLUMNS = [
    "num_items",
    "seed",
    "item_length",
    "actual",
    "estimate",
    "exponent",
    "relative_error",
]


@dataclass(frozen=True)
class AccuracyTrial:
    """Outcome of one sketch-vs-exact comparison."""

    num_items: int
    seed: int
    item_length: int
    actual: int
    estimate: int
    exponent: int

    @property
    def relative_error(self) -> float:
        """Signed error of the estimate relative to the actual count."""
        if self.actual == 0:
            return 0.0
        return (self.estimate - self.actual) / self.actual

    def to_dict(self) -> dict[str, Any]:
        return {
            "num_items": self.num_items,
            "seed": self.seed,
            "item_length": self.item_length,
            "actual": self.actual,
            "estimate": self.estimate,
            "exponent": self.exponent,
            "relative_error": self.relative_error,
        }


def random_items(num_items: int, seed: int, item_length: int = 3) -> Iterable[str]:
    """Yield ``num_items`` random alphanumeric strings of ``item_length`` chars."""
    rng = random.Random(seed)
    for _ in range(num_items):
        yield "".join(rng.choices(ALPHABET, k=item_length))


def run_accuracy_trial(num_items: int, seed: int, item_length: int = 3) -> AccuracyTrial:
    """Compare one sketch against the exact distinct count.

    Args:
        num_items: Number of strings to draw (duplicates included).
        seed: Seed for both the item generator and the sketch hash.
        item_length: Length of each random string.

    Raises:
        ValueError: If num_items is negative or item_length is not positive.
    """
    if num_items < 0:
        raise ValueError(f"num_items must be non-negative, got {num_items}")
    if item_length < 1:
        raise ValueError(f"item_length must be positive, got {item_length}")

    sketch = HyperBitBit[str](seed=seed)
    seen: set[str] = set()
    for item in random_items(num_items, seed, item_length):
        sketch.insert(item)
        seen.add(item)

    trial = AccuracyTrial(
        num_items=num_items,
        seed=seed,
        item_length=item_length,
        actual=len(seen),
        estimate=sketch.cardinality(),
        exponent=sketch.exponent,
    )
    logger.info(
        "Trial n=%d seed=%d: actual=%d estimate=%d error=%.2f%%",
        num_items,
        seed,
        trial.actual,
        trial.estimate,
        100 * trial.relative_error,
    )
    return trial


def run_accuracy_study(
    sizes: Iterable[int] = DEFAULT_SIZES,
    seeds: Iterable[int] = DEFAULT_SEEDS,
    item_length: int = 3,
) -> pd.DataFrame:
    """Run one trial per (size, seed) pair.

    Returns:
        DataFrame with one row per trial and the columns of
        ``AccuracyTrial.to_dict()``.
    """
    seeds = list(seeds)
    rows = [
        run_accuracy_trial(n, seed, item_length).to_dict()
        for n in sizes
        for seed in seeds
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def summarize_study(results: pd.DataFrame) -> pd.DataFrame:
    """Aggregate absolute relative error per number of draws.

    Returns:
        DataFrame indexed by ``num_items`` with mean actual and estimate
        counts and mean/median/max absolute relative error.
    """
    frame = results.assign(abs_error=results["relative_error"].abs())
    return frame.groupby("num_items").agg(
        trials=("seed", "count"),
        mean_actual=("actual", "mean"),
        mean_estimate=("estimate", "mean"),
        mean_abs_error=("abs_error", "mean"),
        median_abs_error=("abs_error", "median"),
        max_abs_error=("abs_error", "max"),
    )


def plot_accuracy(results: pd.DataFrame, path: str | Path) -> Path:
    """Plot estimates against actual distinct counts on log-log axes.

    Returns:
        Path of the written image.
    """
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))

    ax1.scatter(results["actual"], results["estimate"], alpha=0.7, label="HyperBitBit")
    limits = [results["actual"].min(), results["actual"].max()]
    ax1.plot(limits, limits, "k--", label="exact")
    ax1.set_xscale("log")
    ax1.set_yscale("log")
    ax1.set_xlabel("Actual distinct count")
    ax1.set_ylabel("Estimated distinct count")
    ax1.set_title("Estimate vs actual")
    ax1.legend()

    ax2.scatter(results["actual"], 100 * results["relative_error"], alpha=0.7)
    ax2.axhline(0, color="k", linestyle="--")
    ax2.set_xscale("log")
    ax2.set_xlabel("Actual distinct count")
    ax2.set_ylabel("Relative error (%)")
    ax2.set_title("Relative error")

    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    return path
