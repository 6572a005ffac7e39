"""
Core infrastructure for pylogistic.

This module provides shared abstractions used by the matrix library and
the logistic regression model.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    datasource: Delimited-text reader and DataSource container
    compute: Timing and tolerance tiers
"""

from pylogistic.core.result import Result
from pylogistic.core.exceptions import (
    PyLogisticError,
    ValidationError,
    DimensionMismatch,
    IndexOutOfRange,
    InvalidInput,
    NumericalError,
    NumericAnomaly,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PyLogisticError",
    "ValidationError",
    "DimensionMismatch",
    "IndexOutOfRange",
    "InvalidInput",
    "NumericalError",
    "NumericAnomaly",
]
