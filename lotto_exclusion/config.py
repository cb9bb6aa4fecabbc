"""
Configuration for the Lotto Exclusion Engine.

Centralizes paths, game shape, scoring constants and backtest settings.
"""

import os
from dataclasses import dataclass, field


@dataclass
class Config:
    """Configuration container for the Lotto Exclusion Engine."""

    # ==========================================================================
    # PATHS
    # ==========================================================================

    # Base directory (env override, else home)
    base_dir: str = field(default_factory=lambda: Config._detect_base_dir())

    @staticmethod
    def _detect_base_dir() -> str:
        """Detect base directory based on environment."""
        env_dir = os.environ.get("LOTTO_EXCLUSION_HOME")
        if env_dir:
            return env_dir
        return os.path.expanduser("~/Lotto_Exclusion")

    @property
    def raw_dir(self) -> str:
        """Raw draw files (all.json exports, CSV, Excel)."""
        return os.path.join(self.base_dir, "raw_data")

    @property
    def eval_dir(self) -> str:
        """Backtest artifacts directory."""
        return os.path.join(self.base_dir, "eval")

    def ensure_dirs(self) -> None:
        """Create all directories if they don't exist."""
        for d in [self.base_dir, self.raw_dir, self.eval_dir]:
            os.makedirs(d, exist_ok=True)

    # ==========================================================================
    # GAME SHAPE
    # ==========================================================================

    number_min: int = 1
    number_max: int = 45
    numbers_per_draw: int = 6

    # ==========================================================================
    # SCORING
    # ==========================================================================

    # Size of every exclusion list
    exclusion_size: int = 10

    # Number of most recent draws that count as "recent"
    recent_window: int = 10

    # Weight of one appearance inside the recent window.
    # Kept as found; no documented derivation.
    recency_multiplier: int = 50

    # ==========================================================================
    # BACKTEST
    # ==========================================================================

    # First draw_no evaluated by replay. Kept as found; no documented derivation.
    backtest_start_draw: int = 1204

    # Minimum draws that must precede the first evaluated draw
    min_lookback: int = 10

    # Trailing evaluated draws in the "recent" success rate
    recent_rate_window: int = 10

    # ==========================================================================
    # SAMPLE DATA
    # ==========================================================================

    # Random seed for reproducibility
    sample_seed: int = 42

    @property
    def pool_size(self) -> int:
        """Count of numbers in play."""
        return self.number_max - self.number_min + 1


# Global default config instance
DEFAULT_CONFIG = Config()
