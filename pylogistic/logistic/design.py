"""
Logistic regression design.

Design pairs a feature matrix X with a binary label column y and validates
them once. It knows it is building a classifier; DataSource doesn't.
"""

from __future__ import annotations

from dataclasses import dataclass

from pylogistic.core.datasource import DataSource
from pylogistic.core.exceptions import DimensionMismatch
from pylogistic.core.validation import check_binary, check_column_vector, check_finite
from pylogistic.matrix import Matrix


@dataclass(frozen=True)
class LogisticDesign:
    """
    Validated (X, y) pair for binary classification.

    Construction:
        LogisticDesign.from_matrices(X, y)
        LogisticDesign.from_dataset(data)      # last column is the label
        LogisticDesign.from_datasource(ds)     # ds['X'], ds['y'] or ds['data']
    """
    _X: Matrix
    _y: Matrix

    @classmethod
    def from_matrices(cls, X: Matrix, y: Matrix) -> LogisticDesign:
        """Build Design from a feature matrix and a label column."""
        check_finite(X, 'X')
        check_column_vector(y, X.rows, 'y')
        check_binary(y, 'y')
        return cls(_X=X.copy(), _y=y.copy())

    @classmethod
    def from_dataset(cls, data: Matrix) -> LogisticDesign:
        """Split a data matrix into features (all but last column) and label."""
        if data.cols < 2:
            raise DimensionMismatch(
                f"data: need at least one feature column and a label column, "
                f"got {data.cols} column(s)"
            )
        X = data.columns(0, data.cols - 1)
        y = data.column(data.cols - 1)
        return cls.from_matrices(X, y)

    @classmethod
    def from_datasource(cls, source: DataSource) -> LogisticDesign:
        """Build Design from a DataSource."""
        if 'X' in source and 'y' in source:
            return cls.from_matrices(source['X'], source['y'])
        if 'data' in source:
            return cls.from_dataset(source['data'])
        raise ValueError("DataSource must have 'X' and 'y' or 'data'")

    # === Properties ===

    @property
    def X(self) -> Matrix:
        """Feature matrix (n x p)."""
        return self._X

    @property
    def y(self) -> Matrix:
        """Label column (n x 1)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of samples."""
        return self._X.rows

    @property
    def p(self) -> int:
        """Number of features."""
        return self._X.cols

    @property
    def positive_rate(self) -> float:
        """Fraction of samples labelled 1."""
        return self._y.sum() / self.n
