"""
Evaluation metrics for exclusion lists.

Includes:
- Accuracy metrics: per-draw success rate, aggregate rates, hit distribution
- Baseline metrics: random exclusion baseline (hypergeometric), significance
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Any, Iterable, Optional, Sequence

import numpy as np
from scipy import stats

from lotto_exclusion.config import Config, DEFAULT_CONFIG
from lotto_exclusion.data.models import BacktestReport, ExclusionResult


def round_rate(value: float) -> float:
    """Round a percentage to one decimal, halves away from zero."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def format_rate(value: float) -> str:
    """Format a percentage as a one-decimal string."""
    return f"{round_rate(value):.1f}"


def compute_success_rate(hit_count: int, config: Optional[Config] = None) -> float:
    """
    Share of winning numbers kept out of the exclusion list, in percent.

    Args:
        hit_count: Winning numbers that were in the exclusion list
        config: Configuration

    Returns:
        Success rate rounded to one decimal (0 hits -> 100.0)
    """
    config = config or DEFAULT_CONFIG
    per_draw = config.numbers_per_draw
    if not 0 <= hit_count <= per_draw:
        raise ValueError(f"hit_count must be in [0, {per_draw}], got {hit_count}")
    return round_rate((per_draw - hit_count) / per_draw * 100)


def compute_aggregate_rate(hit_counts: Iterable[int], config: Optional[Config] = None) -> str:
    """
    Success rate pooled over several draws.

    Args:
        hit_counts: Hit count of each evaluated draw
        config: Configuration

    Returns:
        One-decimal string; "0.0" when there are no draws
    """
    config = config or DEFAULT_CONFIG
    hits = list(hit_counts)
    if not hits:
        return "0.0"
    return format_rate((1 - sum(hits) / (len(hits) * config.numbers_per_draw)) * 100)


def compute_hit_distribution(
    results: Sequence[ExclusionResult],
    config: Optional[Config] = None
) -> Dict[int, Dict[str, Any]]:
    """
    Count evaluated draws by hit count.

    Returns:
        {hits: {"count": int, "pct": float}} for every possible hit count
    """
    config = config or DEFAULT_CONFIG
    hits = [r.hit_count for r in results]
    dist = {}
    for h in range(config.numbers_per_draw + 1):
        count = hits.count(h)
        dist[h] = {"count": count, "pct": 100 * count / len(hits) if hits else 0.0}
    return dist


def compute_random_baseline(config: Optional[Config] = None) -> Dict[str, Any]:
    """
    Expected performance of a uniformly random exclusion list.

    Hits follow a hypergeometric distribution: the exclusion list is drawn
    from the pool, the winning numbers are the "successes".
    """
    config = config or DEFAULT_CONFIG
    dist = stats.hypergeom(config.pool_size, config.numbers_per_draw, config.exclusion_size)

    expected_hits = float(dist.mean())
    return {
        "expected_hits": expected_hits,
        "expected_success_rate": (1 - expected_hits / config.numbers_per_draw) * 100,
        "hit_probabilities": {
            h: float(dist.pmf(h)) for h in range(config.numbers_per_draw + 1)
        },
    }


def compute_significance(
    results: Sequence[ExclusionResult],
    config: Optional[Config] = None
) -> Dict[str, Any]:
    """
    One-sample t-test of hit counts against the random baseline.

    Fewer hits than the baseline means the exclusion list beats chance.
    """
    config = config or DEFAULT_CONFIG
    hits = np.array([r.hit_count for r in results], dtype=float)

    if len(hits) < 2:
        return {"error": "need at least 2 evaluated draws"}
    if np.std(hits) == 0:
        return {"error": "hit counts have zero variance"}

    expected = compute_random_baseline(config)["expected_hits"]
    t_stat, p_value = stats.ttest_1samp(hits, popmean=expected)

    diff = float(hits.mean() - expected)
    se = float(hits.std(ddof=1) / np.sqrt(len(hits)))

    return {
        "t_statistic": round(float(t_stat), 4),
        "p_value": round(float(p_value), 6),
        "mean_hits": float(hits.mean()),
        "mean_diff": round(diff, 4),
        "ci_95": (round(diff - 1.96 * se, 4), round(diff + 1.96 * se, 4)),
        "beats_random": diff < 0,
        "significant_at_005": bool(p_value < 0.05),
    }


def compute_all_metrics(
    report: BacktestReport,
    config: Optional[Config] = None
) -> Dict[str, Any]:
    """
    Compute all metrics in one call.

    Args:
        report: Backtest report
        config: Configuration

    Returns:
        Dict with accuracy, distribution, baseline and significance
    """
    config = config or DEFAULT_CONFIG
    results = list(report.results)

    return {
        "accuracy": {
            "total_draws": report.total_draws,
            "avg_success_rate": report.avg_success_rate,
            "recent10_success_rate": report.recent10_success_rate,
            "total_hits": int(sum(r.hit_count for r in results)),
        },
        "distribution": compute_hit_distribution(results, config),
        "baseline": compute_random_baseline(config),
        "significance": compute_significance(results, config),
    }
