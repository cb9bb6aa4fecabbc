"""Draw data model, validation, loading and generation utilities."""

from lotto_exclusion.data.models import Draw, ExclusionResult, BacktestReport, NextDrawPrediction
from lotto_exclusion.data.validation import DrawValidationError, validate_draws, records_from_frame
from lotto_exclusion.data.loader import DrawLoader
from lotto_exclusion.data.sample_data import generate_sample_draws

__all__ = [
    "Draw",
    "ExclusionResult",
    "BacktestReport",
    "NextDrawPrediction",
    "DrawValidationError",
    "validate_draws",
    "records_from_frame",
    "DrawLoader",
    "generate_sample_draws",
]
