"""
Exclusion scoring.

Ranks every number by long-run frequency plus a heavy penalty for
appearing in the most recent draws, and picks the lowest-scoring numbers
as the exclusion list for the next draw.
"""

from typing import List, Optional, Sequence

import numpy as np

from lotto_exclusion.config import Config, DEFAULT_CONFIG
from lotto_exclusion.data.models import Draw
from lotto_exclusion.data.fields import validate_numbers


def count_occurrences(draws: Sequence[Draw], config: Optional[Config] = None) -> np.ndarray:
    """
    Count how often each number appears.

    Args:
        draws: Draws to count over
        config: Configuration

    Returns:
        Integer array indexed by number (indices below number_min are zero)

    Raises:
        DrawValidationError: if a draw has the wrong count or out-of-range numbers
    """
    config = config or DEFAULT_CONFIG
    flat = np.fromiter(
        (n for draw in draws for n in validate_numbers(draw.numbers, config, draw.draw_no)),
        dtype=np.int64,
    )
    return np.bincount(flat, minlength=config.number_max + 1)


def compute_scores(history: Sequence[Draw], config: Optional[Config] = None) -> np.ndarray:
    """
    Score every number in play; lower means more likely to be excluded.

    score[n] = global_count[n] + recency_multiplier * recent_count[n]

    Args:
        history: Draws in chronological order
        config: Configuration

    Returns:
        Integer array aligned with range(number_min, number_max + 1)
    """
    config = config or DEFAULT_CONFIG

    recent = history[len(history) - min(config.recent_window, len(history)):]

    global_count = count_occurrences(history, config)
    recent_count = count_occurrences(recent, config)

    scores = global_count + config.recency_multiplier * recent_count
    return scores[config.number_min:]


def score_exclusions(history: Sequence[Draw], config: Optional[Config] = None) -> List[int]:
    """
    Pick the exclusion list for the draw following `history`.

    Ties are broken by the smaller number. An empty history scores every
    number zero, so the result is the lowest `exclusion_size` numbers.

    Args:
        history: Draws in chronological order (not modified)
        config: Configuration

    Returns:
        `exclusion_size` distinct numbers, ascending
    """
    config = config or DEFAULT_CONFIG

    scores = compute_scores(history, config)
    candidates = np.arange(config.number_min, config.number_max + 1)

    # lexsort sorts by the last key first: score, then number
    order = np.lexsort((candidates, scores))
    selected = candidates[order[: config.exclusion_size]]

    return sorted(int(n) for n in selected)
