"""
Draw record validation.

Malformed draws are rejected up front, never coerced, dropped or truncated.
"""

import ast
from typing import Any, Iterable, List, Mapping, Optional

import numpy as np
import pandas as pd

from lotto_exclusion.config import Config, DEFAULT_CONFIG
from lotto_exclusion.data.fields import (
    DrawValidationError,
    coerce_numbers,
    validate_draw_no,
    validate_numbers,
)
from lotto_exclusion.data.models import Draw

__all__ = [
    "DrawValidationError",
    "coerce_numbers",
    "validate_draw_no",
    "validate_numbers",
    "validate_draws",
    "records_from_frame",
]


def validate_draws(records: Iterable[Any], config: Optional[Config] = None) -> tuple:
    """
    Validate a collection of draws and order it by draw_no.

    Args:
        records: Draw objects or {draw_no, numbers} mappings, in any order
        config: Configuration

    Returns:
        Tuple of Draw sorted ascending by draw_no
    """
    config = config or DEFAULT_CONFIG

    draws = []
    for record in records:
        if isinstance(record, Draw):
            validate_numbers(record.numbers, config, record.draw_no)
            draws.append(record)
        elif isinstance(record, Mapping):
            draws.append(Draw.from_record(record, config))
        else:
            raise DrawValidationError(f"unsupported draw record: {record!r}")

    seen = set()
    duplicates = set()
    for draw in draws:
        if draw.draw_no in seen:
            duplicates.add(draw.draw_no)
        seen.add(draw.draw_no)
    if duplicates:
        raise DrawValidationError(f"duplicate draw_no values: {sorted(duplicates)}")

    return tuple(sorted(draws, key=lambda d: d.draw_no))


def _parse_numbers_cell(cell: Any) -> List[Any]:
    """Parse a 'numbers' cell: list, '1,2,3,4,5,6' or '[1, 2, 3, 4, 5, 6]'."""
    if isinstance(cell, (list, tuple, np.ndarray)):
        return list(cell)
    if isinstance(cell, str):
        text = cell.strip()
        if text.startswith("["):
            try:
                return list(ast.literal_eval(text))
            except (ValueError, SyntaxError):
                raise DrawValidationError(f"unparseable numbers cell: {cell!r}")
        return [part for part in text.replace(";", ",").split(",") if part.strip()]
    raise DrawValidationError(f"unparseable numbers cell: {cell!r}")


def records_from_frame(df: pd.DataFrame, config: Optional[Config] = None) -> tuple:
    """
    Convert a DataFrame of draws into validated Draw objects.

    Supported layouts:
        - draw_no + numbers (list or delimited string)
        - draw_no + num1..numN

    Args:
        df: Draw table
        config: Configuration

    Returns:
        Tuple of Draw sorted ascending by draw_no
    """
    config = config or DEFAULT_CONFIG

    if "draw_no" not in df.columns:
        raise DrawValidationError(
            f"draw table missing 'draw_no' column. Available columns: {list(df.columns)[:30]}"
        )

    num_cols = [f"num{i}" for i in range(1, config.numbers_per_draw + 1)]

    if "numbers" in df.columns:
        records = [
            {"draw_no": row["draw_no"], "numbers": _parse_numbers_cell(row["numbers"])}
            for _, row in df.iterrows()
        ]
    elif set(num_cols).issubset(df.columns):
        extra = [c for c in df.columns if c.startswith("num") and c not in num_cols and c[3:].isdigit()]
        if extra:
            raise DrawValidationError(
                f"expected {config.numbers_per_draw} number columns, found extra: {extra}"
            )
        records = [
            {"draw_no": row["draw_no"], "numbers": [row[c] for c in num_cols]}
            for _, row in df.iterrows()
        ]
    else:
        raise DrawValidationError(
            f"draw table needs a 'numbers' column or {num_cols[0]}..{num_cols[-1]} columns. "
            f"Available columns: {list(df.columns)[:30]}"
        )

    return validate_draws(records, config)
