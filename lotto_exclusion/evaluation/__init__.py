"""Evaluation utilities."""

from lotto_exclusion.evaluation.metrics import (
    compute_success_rate,
    compute_aggregate_rate,
    compute_hit_distribution,
    compute_random_baseline,
    compute_significance,
    compute_all_metrics,
)
from lotto_exclusion.evaluation.backtest import (
    BacktestEngine,
    evaluate_draw,
    predict_next,
    replay,
)

__all__ = [
    "compute_success_rate",
    "compute_aggregate_rate",
    "compute_hit_distribution",
    "compute_random_baseline",
    "compute_significance",
    "compute_all_metrics",
    "BacktestEngine",
    "evaluate_draw",
    "predict_next",
    "replay",
]
