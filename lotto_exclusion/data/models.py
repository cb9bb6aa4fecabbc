"""
Data model for draws, backtest results and next-draw predictions.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Mapping, Optional, Tuple

import pandas as pd

from lotto_exclusion.config import Config, DEFAULT_CONFIG
from lotto_exclusion.data.fields import (
    DrawValidationError,
    coerce_numbers,
    validate_draw_no,
    validate_numbers,
)


@dataclass(frozen=True)
class Draw:
    """
    One historical draw: a round number and its winning numbers (sorted).

    Construction coerces and checks the numbers are distinct integers;
    range and count depend on the game and are checked by validate_draws().
    """

    draw_no: int
    numbers: Tuple[int, ...]

    def __post_init__(self):
        object.__setattr__(self, "draw_no", validate_draw_no(self.draw_no))
        object.__setattr__(self, "numbers", coerce_numbers(self.numbers, self.draw_no))

    @classmethod
    def from_record(cls, record: Mapping[str, Any], config: Optional[Config] = None) -> "Draw":
        """Build a Draw from a {draw_no, numbers} mapping (e.g. one all.json entry)."""
        config = config or DEFAULT_CONFIG

        missing = {"draw_no", "numbers"} - set(record)
        if missing:
            raise DrawValidationError(f"record missing keys {sorted(missing)}: {dict(record)!r}")

        draw_no = validate_draw_no(record["draw_no"])
        return cls(draw_no=draw_no, numbers=validate_numbers(record["numbers"], config, draw_no))

    def to_dict(self) -> Dict[str, Any]:
        return {"draw_no": self.draw_no, "numbers": list(self.numbers)}


@dataclass(frozen=True)
class ExclusionResult:
    """Outcome of the exclusion list for one evaluated historical draw."""

    draw_no: int
    exclusion_list: Tuple[int, ...]
    actual_numbers: Tuple[int, ...]
    excluded_numbers: Tuple[int, ...]
    hit_count: int
    success_rate: float

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        for key in ("exclusion_list", "actual_numbers", "excluded_numbers"):
            d[key] = list(d[key])
        return d


@dataclass(frozen=True)
class BacktestReport:
    """
    Aggregate result of a historical replay.

    Results are in display order (most recent draw first). The two rates
    are one-decimal strings computed over chronological order.
    """

    results: Tuple[ExclusionResult, ...] = field(default_factory=tuple)
    total_draws: int = 0
    avg_success_rate: str = "0.0"
    recent10_success_rate: str = "0.0"

    @classmethod
    def empty(cls) -> "BacktestReport":
        """Report for a history too short to evaluate."""
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.total_draws == 0

    @property
    def latest(self) -> Optional[ExclusionResult]:
        """Most recent evaluated draw, or None."""
        return self.results[0] if self.results else None

    def find(self, draw_no: int) -> Optional[ExclusionResult]:
        """Look up the result for one draw_no."""
        for result in self.results:
            if result.draw_no == draw_no:
                return result
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "total_draws": self.total_draws,
            "avg_success_rate": self.avg_success_rate,
            "recent10_success_rate": self.recent10_success_rate,
        }

    def to_frame(self) -> pd.DataFrame:
        """Flat table of results (one row per evaluated draw, display order)."""
        columns = [
            "draw_no", "exclusion_list", "actual_numbers",
            "excluded_numbers", "hit_count", "success_rate",
        ]
        rows = []
        for r in self.results:
            rows.append({
                "draw_no": r.draw_no,
                "exclusion_list": ",".join(str(n) for n in r.exclusion_list),
                "actual_numbers": ",".join(str(n) for n in r.actual_numbers),
                "excluded_numbers": ",".join(str(n) for n in r.excluded_numbers),
                "hit_count": r.hit_count,
                "success_rate": r.success_rate,
            })
        return pd.DataFrame(rows, columns=columns)


@dataclass(frozen=True)
class NextDrawPrediction:
    """Exclusion list for the draw after the last known one."""

    draw_no: int
    exclusion_list: Tuple[int, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"draw_no": self.draw_no, "exclusion_list": list(self.exclusion_list)}
