"""
Field-level checks for draw records.

Shared by the Draw model and collection validation.
"""

import numbers as _numbers
from typing import Any, Iterable, Optional, Tuple

import numpy as np

from lotto_exclusion.config import Config, DEFAULT_CONFIG


class DrawValidationError(ValueError):
    """A draw record violates the shape of a valid draw."""

    def __init__(self, message: str, draw_no: Optional[int] = None):
        if draw_no is not None:
            message = f"draw {draw_no}: {message}"
        super().__init__(message)
        self.draw_no = draw_no


def _as_int(value: Any, what: str, draw_no: Optional[int] = None) -> int:
    """Coerce an integral value (int, numpy int, integral float or digit string)."""
    if isinstance(value, (bool, np.bool_)):
        raise DrawValidationError(f"{what} must be an integer, got {value!r}", draw_no)
    if isinstance(value, _numbers.Integral):
        return int(value)
    if isinstance(value, _numbers.Real):
        if float(value).is_integer():
            return int(value)
        raise DrawValidationError(f"{what} must be an integer, got {value!r}", draw_no)
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("+-").isdigit():
            return int(text)
    raise DrawValidationError(f"{what} must be an integer, got {value!r}", draw_no)


def validate_draw_no(value: Any) -> int:
    """Return value as a positive draw number."""
    draw_no = _as_int(value, "draw_no")
    if draw_no < 1:
        raise DrawValidationError(f"draw_no must be positive, got {draw_no}")
    return draw_no


def coerce_numbers(numbers: Iterable[Any], draw_no: Optional[int] = None) -> Tuple[int, ...]:
    """Coerce numbers to a sorted tuple of distinct ints (no range or count check)."""
    if isinstance(numbers, (str, bytes)) or not isinstance(numbers, Iterable):
        raise DrawValidationError(f"numbers must be a sequence, got {numbers!r}", draw_no)

    values = [_as_int(n, "number", draw_no) for n in numbers]
    if len(set(values)) != len(values):
        raise DrawValidationError(f"duplicate numbers: {sorted(values)}", draw_no)

    return tuple(sorted(values))


def validate_numbers(
    numbers: Iterable[Any],
    config: Optional[Config] = None,
    draw_no: Optional[int] = None,
) -> Tuple[int, ...]:
    """
    Validate the winning numbers of one draw.

    Args:
        numbers: Winning numbers (any iterable of integral values)
        config: Configuration (number range and count)
        draw_no: Draw number for error messages

    Returns:
        Numbers as a tuple sorted ascending
    """
    config = config or DEFAULT_CONFIG

    values = coerce_numbers(numbers, draw_no)

    if len(values) != config.numbers_per_draw:
        raise DrawValidationError(
            f"expected {config.numbers_per_draw} numbers, got {len(values)}", draw_no
        )

    out_of_range = [n for n in values if not config.number_min <= n <= config.number_max]
    if out_of_range:
        raise DrawValidationError(
            f"numbers out of range [{config.number_min}, {config.number_max}]: {out_of_range}",
            draw_no,
        )

    return values


