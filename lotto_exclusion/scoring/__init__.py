"""Exclusion scoring utilities."""

from lotto_exclusion.scoring.engine import count_occurrences, compute_scores, score_exclusions
from lotto_exclusion.scoring.prefix_guard import PrefixGuard

__all__ = ["count_occurrences", "compute_scores", "score_exclusions", "PrefixGuard"]
