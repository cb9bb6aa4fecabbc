"""
Backtest engine.

Replays the exclusion scoring over historical draws:
1. Validates and orders the draws
2. Locates the first evaluated draw (backtest_start_draw)
3. Scores each draw from its strictly earlier prefix
4. Aggregates success rates (chronological order)
5. Predicts the exclusion list for the next draw
6. Saves artifacts
"""

import os
import json
from datetime import datetime
from typing import Dict, Any, Optional, Iterable

import matplotlib.pyplot as plt

from lotto_exclusion.config import Config, DEFAULT_CONFIG
from lotto_exclusion.data.models import (
    BacktestReport,
    Draw,
    ExclusionResult,
    NextDrawPrediction,
)
from lotto_exclusion.data.validation import DrawValidationError, validate_draws
from lotto_exclusion.evaluation.metrics import (
    compute_aggregate_rate,
    compute_all_metrics,
    compute_success_rate,
)
from lotto_exclusion.scoring.engine import score_exclusions
from lotto_exclusion.scoring.prefix_guard import PrefixGuard


def evaluate_draw(
    current: Draw,
    previous: tuple,
    config: Optional[Config] = None
) -> ExclusionResult:
    """
    Score `previous` and check the exclusion list against `current`.

    Args:
        current: Draw being evaluated
        previous: Draws strictly before `current`, chronological
        config: Configuration

    Returns:
        ExclusionResult for current.draw_no
    """
    config = config or DEFAULT_CONFIG

    exclusion_list = tuple(score_exclusions(previous, config))
    excluded = tuple(n for n in current.numbers if n in exclusion_list)
    hit_count = len(excluded)

    return ExclusionResult(
        draw_no=current.draw_no,
        exclusion_list=exclusion_list,
        actual_numbers=tuple(current.numbers),
        excluded_numbers=excluded,
        hit_count=hit_count,
        success_rate=compute_success_rate(hit_count, config),
    )


def _find_start_index(history: tuple, start_draw: int) -> int:
    """First index with draw_no >= start_draw, or -1."""
    for i, draw in enumerate(history):
        if draw.draw_no >= start_draw:
            return i
    return -1


def replay(
    history: Iterable[Any],
    config: Optional[Config] = None,
    guard: Optional[PrefixGuard] = None,
    verbose: bool = False
) -> BacktestReport:
    """
    Replay the exclusion scoring over historical draws.

    Args:
        history: Draws or {draw_no, numbers} records, any order
        config: Configuration
        guard: Prefix guard to record into (a fresh one if not provided)
        verbose: Print progress

    Returns:
        BacktestReport, results most recent first. Empty when no draw reaches
        backtest_start_draw or fewer than min_lookback draws precede it.

    Raises:
        DrawValidationError: if any record is malformed
    """
    config = config or DEFAULT_CONFIG
    guard = guard or PrefixGuard()

    draws = validate_draws(history, config)

    start_index = _find_start_index(draws, config.backtest_start_draw)
    if start_index == -1 or start_index < config.min_lookback:
        if verbose:
            print(f"⚠️ Insufficient history: start index {start_index} "
                  f"(need draw >= {config.backtest_start_draw} with {config.min_lookback} prior draws)")
        return BacktestReport.empty()

    if verbose:
        print(f"Replaying draws {draws[start_index].draw_no}-{draws[-1].draw_no} "
              f"({len(draws) - start_index} draws, {start_index} prior)")

    results = []
    for i in range(start_index, len(draws)):
        current = draws[i]
        previous = guard.validate("replay", draws[:i], target_draw_no=current.draw_no)
        results.append(evaluate_draw(current, previous, config))

        if verbose and (i - start_index) % 50 == 0:
            print(f"  Draw {current.draw_no}: hits={results[-1].hit_count}")

    hit_counts = [r.hit_count for r in results]
    recent = hit_counts[-min(config.recent_rate_window, len(hit_counts)):]

    report = BacktestReport(
        results=tuple(reversed(results)),
        total_draws=len(results),
        avg_success_rate=compute_aggregate_rate(hit_counts, config),
        recent10_success_rate=compute_aggregate_rate(recent, config),
    )

    if verbose:
        print(f"✓ Evaluated {report.total_draws} draws, "
              f"avg {report.avg_success_rate}%, recent {report.recent10_success_rate}%")

    return report


def predict_next(
    history: Iterable[Any],
    config: Optional[Config] = None
) -> NextDrawPrediction:
    """
    Exclusion list for the draw after the last known one.

    Uses the entire history, with no cutoff.

    Raises:
        DrawValidationError: if any record is malformed or history is empty
    """
    config = config or DEFAULT_CONFIG

    draws = validate_draws(history, config)
    if not draws:
        raise DrawValidationError("cannot predict the next draw from an empty history")

    return NextDrawPrediction(
        draw_no=draws[-1].draw_no + 1,
        exclusion_list=tuple(score_exclusions(draws, config)),
    )


class BacktestEngine:
    """
    Complete backtest pipeline for exclusion lists.

    Example:
        engine = BacktestEngine(draws)
        results = engine.run()
        engine.save_artifacts(results)
    """

    def __init__(
        self,
        draws: Iterable[Any],
        config: Optional[Config] = None,
        verbose: bool = True
    ):
        """
        Initialize backtest engine.

        Args:
            draws: Draws or {draw_no, numbers} records
            config: Configuration (uses defaults if not provided)
            verbose: Print progress
        """
        self.config = config or DEFAULT_CONFIG
        self.verbose = verbose
        self.raw_draws = list(draws)

        # Will be set during run
        self.draws = None
        self.guard = PrefixGuard()

    def _prepare_data(self) -> None:
        """Validate and order draws."""
        if self.verbose:
            print("\n" + "=" * 60)
            print("DATA PREPARATION")
            print("=" * 60)

        self.draws = validate_draws(self.raw_draws, self.config)

        if self.verbose:
            print(f"✓ Draws: {len(self.draws)}")
            if self.draws:
                print(f"✓ Range: {self.draws[0].draw_no}-{self.draws[-1].draw_no}")

    def run(self) -> Dict[str, Any]:
        """
        Run full backtest pipeline.

        Returns:
            Dict with report, prediction, metrics, guard_report, timestamp
        """
        self._prepare_data()
        self.guard.reset()

        if self.verbose:
            print("\n" + "=" * 60)
            print("HISTORICAL REPLAY")
            print("=" * 60)

        report = replay(self.draws, self.config, guard=self.guard, verbose=self.verbose)
        prediction = predict_next(self.draws, self.config) if self.draws else None
        metrics = compute_all_metrics(report, self.config)

        if self.verbose:
            print("\n" + "=" * 60)
            print("AGGREGATE METRICS")
            print("=" * 60)
            print(f"  Evaluated draws: {report.total_draws}")
            print(f"  Average success: {report.avg_success_rate}%")
            print(f"  Recent {self.config.recent_rate_window} success: {report.recent10_success_rate}%")

            baseline = metrics["baseline"]
            print(f"  Random baseline: {baseline['expected_success_rate']:.1f}%")

            sig = metrics["significance"]
            if "p_value" in sig:
                print(f"  t-statistic: {sig['t_statistic']}, p-value: {sig['p_value']}")

            if prediction is not None:
                print(f"\n[NEXT DRAW {prediction.draw_no}]")
                print(f"  Exclusion list: {list(prediction.exclusion_list)}")

        return {
            "report": report,
            "prediction": prediction,
            "metrics": metrics,
            "guard_report": self.guard.report(),
            "timestamp": datetime.now().isoformat()
        }

    def save_artifacts(
        self,
        results: Dict[str, Any],
        save_dir: Optional[str] = None
    ) -> Dict[str, str]:
        """
        Save backtest artifacts.

        Args:
            results: Results from run()
            save_dir: Directory to save to (defaults to config.eval_dir)

        Returns:
            Dict mapping artifact type to file path
        """
        if save_dir is None:
            self.config.ensure_dirs()
            save_dir = self.config.eval_dir
        os.makedirs(save_dir, exist_ok=True)

        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        paths = {}
        report = results["report"]
        prediction = results["prediction"]

        if self.verbose:
            print("\n" + "=" * 60)
            print("SAVING ARTIFACTS")
            print("=" * 60)

        # Per-draw results
        res_path = os.path.join(save_dir, f"results_{ts}.csv")
        report.to_frame().to_csv(res_path, index=False)
        paths["results"] = res_path
        if self.verbose:
            print(f"✓ Results: {res_path}")

        # Summary
        summary = {
            "timestamp": ts,
            "total_draws": report.total_draws,
            "avg_success_rate": report.avg_success_rate,
            "recent10_success_rate": report.recent10_success_rate,
            "next_draw": prediction.to_dict() if prediction is not None else None,
            "metrics": results["metrics"],
            "guard_report": results["guard_report"],
        }

        sum_path = os.path.join(save_dir, f"summary_{ts}.json")
        with open(sum_path, "w") as f:
            json.dump(summary, f, indent=2, default=str)
        paths["summary"] = sum_path
        if self.verbose:
            print(f"✓ Summary: {sum_path}")

        # Success rate plot (chronological)
        if not report.is_empty:
            chrono = list(reversed(report.results))
            baseline = results["metrics"]["baseline"]["expected_success_rate"]

            plt.figure(figsize=(10, 5))
            plt.plot(
                [r.draw_no for r in chrono],
                [r.success_rate for r in chrono],
                marker="o", markersize=3, linewidth=1, label="Exclusion list"
            )
            plt.axhline(baseline, linestyle="--", color="gray", label="Random baseline")
            plt.xlabel("Draw")
            plt.ylabel("Success Rate (%)")
            plt.ylim(-5, 105)
            plt.title("Exclusion Success Rate by Draw")
            plt.legend()
            plt.grid(True, alpha=0.3)

            plot_path = os.path.join(save_dir, f"success_rate_{ts}.png")
            plt.savefig(plot_path, dpi=150, bbox_inches="tight")
            plt.close()
            paths["success_rate_plot"] = plot_path
            if self.verbose:
                print(f"✓ Success rate plot: {plot_path}")

        return paths


def run_quick_backtest(
    draws: Iterable[Any],
    config: Optional[Config] = None
) -> Dict[str, Any]:
    """
    Convenience function for quick backtest.

    Args:
        draws: Draw records
        config: Configuration

    Returns:
        Backtest results
    """
    engine = BacktestEngine(draws, config)
    results = engine.run()
    engine.save_artifacts(results)
    return results
