"""
Tests for draw validation.
"""

import numpy as np
import pandas as pd
import pytest

from lotto_exclusion.config import Config
from lotto_exclusion.data.models import Draw
from lotto_exclusion.data.validation import (
    DrawValidationError,
    records_from_frame,
    validate_draws,
    validate_numbers,
)


def test_single_draw_with_seven_numbers():
    """Test that a draw with 7 numbers is rejected."""
    with pytest.raises(DrawValidationError) as exc:
        validate_draws([{"draw_no": 1, "numbers": [1, 2, 3, 4, 5, 6, 7]}])
    assert exc.value.draw_no == 1
    assert "expected 6 numbers" in str(exc.value)


def test_too_few_numbers():
    with pytest.raises(DrawValidationError):
        validate_numbers([1, 2, 3, 4, 5])


def test_out_of_range_numbers():
    """Test both ends of the number range."""
    with pytest.raises(DrawValidationError):
        validate_numbers([0, 2, 3, 4, 5, 6])
    with pytest.raises(DrawValidationError):
        validate_numbers([1, 2, 3, 4, 5, 46])
    assert validate_numbers([45, 1, 2, 3, 4, 5]) == (1, 2, 3, 4, 5, 45)


def test_duplicate_numbers_within_draw():
    with pytest.raises(DrawValidationError):
        validate_numbers([1, 1, 2, 3, 4, 5])
    with pytest.raises(DrawValidationError):
        Draw(draw_no=1, numbers=(1, 1, 2, 3, 4, 5))


def test_non_integer_numbers():
    """Test that non-integral values are rejected rather than coerced."""
    with pytest.raises(DrawValidationError):
        validate_numbers([1, 2, 3, 4, 5, 6.5])
    with pytest.raises(DrawValidationError):
        validate_numbers([True, 2, 3, 4, 5, 6])
    with pytest.raises(DrawValidationError):
        validate_numbers([1, 2, 3, 4, 5, "six"])
    with pytest.raises(DrawValidationError):
        validate_numbers("1,2,3,4,5,6")


def test_integral_values_are_coerced():
    """Test that digit strings, numpy ints and whole floats are accepted."""
    numbers = ["07", np.int64(3), 12.0, 1, " 45 ", 20]
    assert validate_numbers(numbers) == (1, 3, 7, 12, 20, 45)


def test_invalid_draw_no():
    with pytest.raises(DrawValidationError):
        Draw(draw_no=0, numbers=(1, 2, 3, 4, 5, 6))
    with pytest.raises(DrawValidationError):
        Draw(draw_no=-3, numbers=(1, 2, 3, 4, 5, 6))
    with pytest.raises(DrawValidationError):
        validate_draws([{"draw_no": "abc", "numbers": [1, 2, 3, 4, 5, 6]}])


def test_duplicate_draw_no_across_draws():
    records = [
        {"draw_no": 5, "numbers": [1, 2, 3, 4, 5, 6]},
        {"draw_no": 5, "numbers": [7, 8, 9, 10, 11, 12]},
    ]
    with pytest.raises(DrawValidationError) as exc:
        validate_draws(records)
    assert "duplicate draw_no" in str(exc.value)


def test_missing_keys_and_unsupported_records():
    with pytest.raises(DrawValidationError):
        validate_draws([{"draw_no": 1}])
    with pytest.raises(DrawValidationError):
        validate_draws([(1, [1, 2, 3, 4, 5, 6])])


def test_draw_objects_checked_against_config():
    """Test that Draw objects outside the configured range are rejected."""
    draw = Draw(draw_no=1, numbers=(1, 2, 3, 4, 5, 49))
    with pytest.raises(DrawValidationError):
        validate_draws([draw])

    toto = Config(number_max=49)
    assert validate_draws([draw], toto) == (draw,)


def test_validate_draws_sorts_without_mutating():
    """Test the defensive sort by draw_no."""
    records = [
        {"draw_no": 3, "numbers": [1, 2, 3, 4, 5, 6]},
        {"draw_no": 1, "numbers": [6, 5, 4, 3, 2, 1]},
        {"draw_no": 2, "numbers": [10, 20, 30, 40, 41, 42]},
    ]
    before = [dict(r) for r in records]

    draws = validate_draws(records)

    assert [d.draw_no for d in draws] == [1, 2, 3]
    assert draws[0].numbers == (1, 2, 3, 4, 5, 6)
    assert records == before


def test_records_from_frame_numbers_column():
    df = pd.DataFrame({
        "draw_no": [2, 1],
        "numbers": ["1,2,3,4,5,6", "[7, 8, 9, 10, 11, 12]"],
    })

    draws = records_from_frame(df)

    assert [d.draw_no for d in draws] == [1, 2]
    assert draws[0].numbers == (7, 8, 9, 10, 11, 12)


def test_records_from_frame_num_columns():
    df = pd.DataFrame({
        "draw_no": [1],
        "num1": [45], "num2": [3], "num3": [9], "num4": [12], "num5": [30], "num6": [1],
    })

    draws = records_from_frame(df)

    assert draws[0].numbers == (1, 3, 9, 12, 30, 45)


def test_records_from_frame_rejects_bad_layouts():
    with pytest.raises(DrawValidationError):
        records_from_frame(pd.DataFrame({"numbers": ["1,2,3,4,5,6"]}))
    with pytest.raises(DrawValidationError):
        records_from_frame(pd.DataFrame({"draw_no": [1], "num1": [1]}))
    with pytest.raises(DrawValidationError):
        records_from_frame(pd.DataFrame({
            "draw_no": [1],
            "num1": [1], "num2": [2], "num3": [3], "num4": [4],
            "num5": [5], "num6": [6], "num7": [7],
        }))


def test_records_from_frame_rejects_missing_values():
    df = pd.DataFrame({
        "draw_no": [1, 2],
        "num1": [1, 1], "num2": [2, 2], "num3": [3, 3],
        "num4": [4, 4], "num5": [5, 5], "num6": [6, None],
    })
    with pytest.raises(DrawValidationError):
        records_from_frame(df)


def test_field_checks_shared_across_modules():
    """Test that models and validation use the same field checks and error type."""
    from lotto_exclusion.data import fields, models, validation

    assert validation.DrawValidationError is fields.DrawValidationError
    assert models.DrawValidationError is fields.DrawValidationError
    assert validation.validate_numbers is fields.validate_numbers

    with pytest.raises(fields.DrawValidationError):
        Draw(draw_no=1, numbers=(1, 1, 2, 3, 4, 5))
    assert fields.coerce_numbers(["3", 2, np.int64(1)]) == (1, 2, 3)


if __name__ == "__main__":
    print("Running validation tests...")
    test_single_draw_with_seven_numbers()
    print("✓ test_single_draw_with_seven_numbers")

    test_duplicate_draw_no_across_draws()
    print("✓ test_duplicate_draw_no_across_draws")

    test_validate_draws_sorts_without_mutating()
    print("✓ test_validate_draws_sorts_without_mutating")

    print("\nAll validation tests passed!")
