"""
Draw history loader for the Lotto Exclusion Engine.

Loads an explicit file or searches the raw data directory, validates every
record, and falls back to sample data if nothing is found.
"""

import os
import glob
import json
from datetime import datetime
from typing import Tuple, Dict, Any, Optional, List

import pandas as pd

from lotto_exclusion.config import Config, DEFAULT_CONFIG
from lotto_exclusion.data.models import Draw
from lotto_exclusion.data.sample_data import generate_sample_draws
from lotto_exclusion.data.validation import (
    DrawValidationError,
    records_from_frame,
    validate_draws,
)


class DrawLoader:
    """
    Draw history loader.

    Supported formats:
    - JSON: list of {"draw_no": int, "numbers": [...]} (the all.json export)
    - CSV / XLSX / parquet: draw_no plus a numbers column or num1..num6

    Search order in RAW_DIR follows the `prefer` argument; falls back to
    generated sample data when no file exists.
    """

    EXTENSIONS = ("json", "csv", "xlsx", "parquet")

    def __init__(self, config: Optional[Config] = None):
        self.config = config or DEFAULT_CONFIG

    def load(
        self,
        path: Optional[str] = None,
        prefer: str = "json"
    ) -> Tuple[tuple, Dict[str, Any]]:
        """
        Load draw history.

        Args:
            path: Explicit file to load (skips the directory search)
            prefer: Preferred extension when searching RAW_DIR

        Returns:
            (draws sorted by draw_no, metadata_dict)

        Raises:
            DrawValidationError: if any record is malformed
            FileNotFoundError: if an explicit path does not exist
        """
        meta = {
            "source": None,
            "path": None,
            "notes": [],
            "timestamp": datetime.now().isoformat()
        }

        if path is not None:
            if not os.path.exists(path):
                raise FileNotFoundError(f"Draw file not found: {path}")
            chosen = path
        else:
            self.config.ensure_dirs()
            if prefer not in self.EXTENSIONS:
                raise ValueError(f"prefer must be one of {self.EXTENSIONS}, got {prefer!r}")
            order = [prefer] + [ext for ext in self.EXTENSIONS if ext != prefer]
            chosen = None
            for ext in order:
                chosen = self._find_latest([os.path.join(self.config.raw_dir, f"*.{ext}")])
                if chosen:
                    break

        if chosen:
            draws = self._load_file(chosen)
            meta["source"] = "file"
            meta["path"] = chosen
            meta["notes"].append(f"Loaded: {os.path.basename(chosen)}")
        else:
            draws = validate_draws(generate_sample_draws(config=self.config), self.config)
            meta["source"] = "sample"
            meta["notes"].append("No draw files found - generated sample data")

        meta["n_draws"] = len(draws)
        meta["draw_range"] = (draws[0].draw_no, draws[-1].draw_no) if draws else None
        meta["notes"].append(f"✓ Draws: {len(draws)}")
        if draws:
            meta["notes"].append(f"✓ Draw range: {draws[0].draw_no} to {draws[-1].draw_no}")
            gaps = draws[-1].draw_no - draws[0].draw_no + 1 - len(draws)
            if gaps:
                meta["notes"].append(f"⚠ {gaps} draw numbers missing from the range")

        return draws, meta

    def _find_latest(self, patterns: List[str]) -> Optional[str]:
        """Find the most recently modified file matching any pattern."""
        candidates = []
        for pattern in patterns:
            candidates.extend(glob.glob(pattern))
        if not candidates:
            return None
        return max(candidates, key=lambda p: (os.path.getmtime(p), p))

    def _load_file(self, path: str) -> tuple:
        """Load and validate a single file."""
        if path.endswith(".json"):
            with open(path, encoding="utf-8") as f:
                records = json.load(f)
            if not isinstance(records, list):
                raise DrawValidationError(f"{os.path.basename(path)}: expected a list of draw records")
            return validate_draws(records, self.config)

        if path.endswith(".parquet"):
            df = pd.read_parquet(path)
        elif path.endswith(".xlsx"):
            df = pd.read_excel(path, engine="openpyxl")
        else:
            df = pd.read_csv(path)
        return records_from_frame(df, self.config)

    def save_to_raw(self, draws: List[Draw], prefix: str = "draws") -> str:
        """Save draws to RAW_DIR as timestamped JSON (all.json format)."""
        self.config.ensure_dirs()
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.join(self.config.raw_dir, f"{prefix}_{ts}.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump([d.to_dict() for d in draws], f, indent=2)
        return path
