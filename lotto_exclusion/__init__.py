"""
Lotto Exclusion Engine

Ranks the numbers least likely to appear in the next 6/45 draw and
backtests that ranking against historical draws.
"""

__version__ = "1.0.0"

from lotto_exclusion.config import Config
from lotto_exclusion.data.models import Draw, ExclusionResult, BacktestReport, NextDrawPrediction
from lotto_exclusion.data.validation import DrawValidationError
from lotto_exclusion.data.loader import DrawLoader
from lotto_exclusion.scoring.engine import score_exclusions
from lotto_exclusion.evaluation.backtest import BacktestEngine, replay, predict_next

__all__ = [
    "Config",
    "Draw",
    "ExclusionResult",
    "BacktestReport",
    "NextDrawPrediction",
    "DrawValidationError",
    "DrawLoader",
    "score_exclusions",
    "BacktestEngine",
    "replay",
    "predict_next",
]
