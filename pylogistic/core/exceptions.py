"""
Exception hierarchy for pylogistic.

All exceptions inherit from PyLogisticError to allow catching any
library-specific error. Structural problems (shapes, indices, input files)
derive from ValidationError; problems in computed values derive from
NumericalError.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""

from __future__ import annotations

from pathlib import Path


class PyLogisticError(Exception):
    """Base exception for all pylogistic errors."""
    pass


class ValidationError(PyLogisticError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionMismatch(ValidationError):
    """
    Matrix shapes are incompatible with the requested operation.

    Raised before any computation happens, e.g. when the inner dimensions
    of a product disagree or two operands of an elementwise operation have
    different shapes.
    """
    pass


class IndexOutOfRange(ValidationError, IndexError):
    """
    Indexed or sliced access outside the valid bounds of a matrix.

    Attributes:
        index: The offending index (or (low, high) range)
        bound: The exclusive upper bound that was violated
    """

    def __init__(
        self,
        message: str,
        index: int | tuple[int, int] | None = None,
        bound: int | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.bound = bound


class InvalidInput(ValidationError):
    """
    A data file is missing, unreadable or malformed.

    Attributes:
        path: File the problem was found in
        line: 1-based line number, if the problem is tied to a line
    """

    def __init__(
        self,
        message: str,
        path: str | Path | None = None,
        line: int | None = None,
    ):
        super().__init__(message)
        self.path = str(path) if path is not None else None
        self.line = line


class NumericalError(PyLogisticError):
    """
    Numerical computation produced an unusable result.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class NumericAnomaly(NumericalError):
    """
    A computed quantity contains NaN or Inf.

    The log-likelihood is evaluated without clipping, so extreme linear
    scores overflow. This is reported, not corrected.

    Attributes:
        n_nan: Number of NaN values found
        n_inf: Number of infinite values found
        step: Training step at which the anomaly first appeared, if known
    """

    def __init__(
        self,
        message: str,
        n_nan: int = 0,
        n_inf: int = 0,
        step: int | None = None,
    ):
        super().__init__(message)
        self.n_nan = n_nan
        self.n_inf = n_inf
        self.step = step
