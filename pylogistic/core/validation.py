"""
Argument checks shared by Matrix, the model and fit().

Every check tests a single condition and raises on the first violation;
nothing is clamped, rounded or filled in. Messages start with the
argument name and quote the offending value or shape, e.g.

    y: expected 4x1 column vector, got 3x1
    row: index 5 out of range [0, 3)
"""

from __future__ import annotations

import math
from numbers import Integral, Real
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylogistic.core.exceptions import (
    DimensionMismatch,
    IndexOutOfRange,
    NumericAnomaly,
    ValidationError,
)

if TYPE_CHECKING:
    from pylogistic.matrix import Matrix


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.float64]:
    """
    Validate and convert input to a float64 numpy array.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Reject strings, bytes, datetimes; bool is accepted as 0/1
    if not (np.issubdtype(result.dtype, np.number) or result.dtype == np.bool_):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return result.astype(np.float64, copy=False)


def check_positive_int(value: Any, name: str) -> int:
    """
    Verify value is an integer >= 1.

    Raises:
        ValidationError: If value is not a positive integer
    """
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ValidationError(f"{name}: expected int, got {type(value).__name__}")
    if value < 1:
        raise ValidationError(f"{name}: must be positive, got {value}")
    return int(value)


def check_non_negative_int(value: Any, name: str) -> int:
    """
    Verify value is an integer >= 0.

    Raises:
        ValidationError: If value is not a non-negative integer
    """
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ValidationError(f"{name}: expected int, got {type(value).__name__}")
    if value < 0:
        raise ValidationError(f"{name}: must be non-negative, got {value}")
    return int(value)


def check_finite_scalar(value: Any, name: str) -> float:
    """
    Verify value is a finite real number.

    Raises:
        ValidationError: If value is not real or not finite
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"{name}: expected a real number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise ValidationError(f"{name}: must be finite, got {value}")
    return float(value)


def check_index(index: Any, bound: int, name: str) -> int:
    """
    Verify index is an int in [0, bound).

    Negative indices are rejected; there is no wraparound.

    Raises:
        IndexOutOfRange: If index falls outside [0, bound)
    """
    if isinstance(index, bool) or not isinstance(index, Integral):
        raise TypeError(f"{name}: index must be int, got {type(index).__name__}")
    if not 0 <= index < bound:
        raise IndexOutOfRange(
            f"{name}: index {index} out of range [0, {bound})",
            index=int(index),
            bound=bound,
        )
    return int(index)


def check_column_range(low: Any, high: Any, bound: int, name: str) -> tuple[int, int]:
    """
    Verify a half-open column range satisfies 0 <= low < high <= bound.

    Raises:
        TypeError: If either bound is not an int
        IndexOutOfRange: If the range is empty or exceeds the bounds
    """
    for value in (low, high):
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise TypeError(
                f"{name}: column bounds must be int, got {type(value).__name__}"
            )
    if not 0 <= low < high <= bound:
        raise IndexOutOfRange(
            f"{name}: column range [{low}, {high}) invalid for {bound} columns",
            index=(int(low), int(high)),
            bound=bound,
        )
    return int(low), int(high)


def check_same_shape(a: Matrix, b: Matrix, operation: str) -> None:
    """
    Verify two matrices have identical shapes.

    Raises:
        DimensionMismatch: If the shapes differ
    """
    if a.shape != b.shape:
        raise DimensionMismatch(
            f"Invalid matrix dimensions for {operation}: "
            f"{a.rows}x{a.cols} and {b.rows}x{b.cols}"
        )


def check_column_vector(m: Matrix, rows: int, name: str) -> None:
    """
    Verify m is a rows x 1 column vector.

    Raises:
        DimensionMismatch: If m has more than one column or the wrong length
    """
    if m.cols != 1 or m.rows != rows:
        raise DimensionMismatch(
            f"{name}: expected {rows}x1 column vector, got {m.rows}x{m.cols}"
        )


def check_binary(m: Matrix, name: str) -> None:
    """
    Verify every entry of m is exactly 0.0 or 1.0.

    Raises:
        ValidationError: If any entry is not a binary label
    """
    values = m.data
    bad = np.flatnonzero((values != 0.0) & (values != 1.0))
    if bad.size:
        first = int(bad[0])
        raise ValidationError(
            f"{name}: expected binary labels (0.0 or 1.0), found {bad.size} other "
            f"value(s), first {values[first]!r} at row {first // m.cols}"
        )


def check_finite(m: Matrix, name: str) -> None:
    """
    Verify a matrix contains no NaN or Inf values.

    Args:
        m: Matrix to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If the matrix contains non-finite values
    """
    values = m.data
    if not np.all(np.isfinite(values)):
        n_nan = int(np.sum(np.isnan(values)))
        n_inf = int(np.sum(np.isinf(values)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_finite_trace(trace: list[float], name: str) -> None:
    """
    Verify a sequence of computed values contains no NaN or Inf.

    Unlike check_finite, which guards inputs, this inspects outputs and
    reports the first step at which the sequence went non-finite.

    Raises:
        NumericAnomaly: If any value is non-finite
    """
    values = np.asarray(trace, dtype=np.float64)
    bad = np.flatnonzero(~np.isfinite(values))
    if bad.size:
        n_nan = int(np.sum(np.isnan(values)))
        n_inf = int(np.sum(np.isinf(values)))
        raise NumericAnomaly(
            f"{name}: non-finite values from step {int(bad[0])} "
            f"({n_nan} NaN, {n_inf} Inf)",
            n_nan=n_nan,
            n_inf=n_inf,
            step=int(bad[0]),
        )
