"""Accuracy analysis for cardinality sketches."""

from hyperbitbit.analysis.accuracy import (
    AccuracyTrial,
    plot_accuracy,
    random_items,
    run_accuracy_study,
    run_accuracy_trial,
    summarize_study,
)

__all__ = [
    "AccuracyTrial",
    "plot_accuracy",
    "random_items",
    "run_accuracy_study",
    "run_accuracy_trial",
    "summarize_study",
]
