"""
Generate sample draw history for testing.

Creates uniform random draws with consecutive draw numbers, so that a
default backtest (starting at draw 1204) has a few dozen draws to replay.
"""

from typing import Optional

import numpy as np
from scipy import stats

from lotto_exclusion.config import Config, DEFAULT_CONFIG
from lotto_exclusion.data.models import Draw


def generate_sample_draws(
    n_draws: int = 250,
    start_draw_no: int = 1000,
    seed: Optional[int] = None,
    config: Optional[Config] = None
) -> list[Draw]:
    """
    Generate reproducible random draws.

    Args:
        n_draws: Number of draws to generate
        start_draw_no: draw_no of the first draw
        seed: Random seed (defaults to config.sample_seed)
        config: Configuration (number range and count)

    Returns:
        List of Draw in ascending draw_no order
    """
    config = config or DEFAULT_CONFIG
    if seed is None:
        seed = config.sample_seed
    if n_draws < 0:
        raise ValueError(f"n_draws must be non-negative, got {n_draws}")
    if start_draw_no < 1:
        raise ValueError(f"start_draw_no must be positive, got {start_draw_no}")

    rng = np.random.default_rng(seed)
    pool = np.arange(config.number_min, config.number_max + 1)

    draws = []
    for i in range(n_draws):
        numbers = rng.choice(pool, size=config.numbers_per_draw, replace=False)
        draws.append(Draw(draw_no=start_draw_no + i, numbers=tuple(int(n) for n in numbers)))

    return draws


def validate_sample_data(draws: list[Draw], config: Optional[Config] = None) -> dict:
    """
    Validate that sample data has correct properties.

    Returns dict with validation results.
    """
    config = config or DEFAULT_CONFIG
    results = {}

    # Draw numbers should be consecutive
    draw_nos = [d.draw_no for d in draws]
    results["contiguous"] = draw_nos == list(range(draw_nos[0], draw_nos[0] + len(draws))) if draws else True

    # Number frequencies should look uniform
    counts = np.zeros(config.pool_size, dtype=int)
    for d in draws:
        for n in d.numbers:
            counts[n - config.number_min] += 1

    if counts.sum() > 0:
        _, p_value = stats.chisquare(counts)
        results["uniformity_p_value"] = float(p_value)
        results["uniformity_healthy"] = p_value > 0.001
    else:
        results["uniformity_p_value"] = None
        results["uniformity_healthy"] = False

    results["overall_healthy"] = all(
        [
            results["contiguous"],
            results["uniformity_healthy"],
        ]
    )

    return results
