"""
Logistic regression trained by batch gradient ascent.

The model holds a column vector of coefficients and a scalar intercept and
computes everything through Matrix:

    z = X @ coefficients + intercept
    p = sigmoid(z)
    loglik = sum(y * log(sigmoid(z)) + (1 - y) * log(sigmoid(-z)))

The gradient of the log-likelihood with respect to the parameters is

    r = y - p
    d_coefficients = sum over rows of diag(r) @ X, transposed, / n
    d_intercept = sum(r) / n

and fit() steps in the ascent direction a fixed number of times. The
log-likelihood is not clipped; for very large |z| it can be -inf or NaN.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from pylogistic.core.compute.tolerances import LABEL_TOLERANCE
from pylogistic.core.exceptions import DimensionMismatch
from pylogistic.core.validation import (
    check_binary,
    check_column_vector,
    check_finite_scalar,
    check_non_negative_int,
    check_positive_int,
)
from pylogistic.matrix import Matrix, diagonal_scale


class Gradient(NamedTuple):
    """Gradient of the log-likelihood."""
    coefficients: Matrix
    intercept: float


@dataclass(frozen=True)
class Evaluation:
    """
    Model quality on a labelled dataset.

    Attributes:
        predictions: n x 1 matrix of P(y=1|x)
        loss: Negative log-likelihood
        accuracy: Fraction of samples classified correctly
    """
    predictions: Matrix
    loss: float
    accuracy: float


class LogisticRegression:
    """
    Binary logistic regression with in-place parameter updates.

    The model owns its parameters: `coefficients` returns a copy, and only
    fit() changes the stored values. Calling fit() again resumes from the
    current parameters.

    Example:
        >>> X = Matrix.from_rows([[1, 0], [0, 1], [1, 1], [0, 0]])
        >>> y = Matrix.from_rows([[1], [0], [1], [0]])
        >>> model = LogisticRegression(n_features=2)
        >>> trace = model.fit(X, y, steps=2000, learning_rate=0.5)
        >>> model.evaluate(X, y).accuracy
        1.0
    """

    def __init__(
        self,
        n_features: int,
        *,
        initial_coefficient: float = 1.0,
        initial_intercept: float = 0.5,
    ):
        n_features = check_positive_int(n_features, 'n_features')
        self._coefficients = Matrix(
            n_features, 1, check_finite_scalar(initial_coefficient, 'initial_coefficient')
        )
        self._intercept = check_finite_scalar(initial_intercept, 'initial_intercept')

    # === Parameters ===

    @property
    def n_features(self) -> int:
        return self._coefficients.rows

    @property
    def coefficients(self) -> Matrix:
        """n_features x 1 column vector (a copy)."""
        return self._coefficients.copy()

    @property
    def intercept(self) -> float:
        return self._intercept

    # === Forward ===

    def affine_transform(self, X: Matrix) -> Matrix:
        """Computes X @ coefficients + intercept."""
        self._check_features(X)
        return self._affine(X)

    def predict(self, X: Matrix) -> Matrix:
        """Computes P(y=1|x) for each row of X."""
        return self.affine_transform(X).sigmoid()

    # === Objective ===

    def log_likelihood(self, X: Matrix, y: Matrix) -> float:
        """Evaluates the log-likelihood for a pair of inputs and outputs."""
        self._check_pair(X, y)
        return self._log_likelihood(X, y)

    def gradient(self, X: Matrix, y: Matrix) -> Gradient:
        """Computes the gradient of the log-likelihood with respect to the parameters."""
        self._check_pair(X, y)
        return self._gradient(X, y)

    # === Training ===

    def fit(self, X: Matrix, y: Matrix, steps: int, learning_rate: float) -> list[float]:
        """
        Estimate the coefficients by gradient ascent on the log-likelihood.

        Every step records the current log-likelihood, then moves the
        parameters by learning_rate times the gradient. There is no stopping
        criterion besides `steps`.

        Args:
            X: n x n_features inputs
            y: n x 1 binary labels
            steps: Number of gradient steps
            learning_rate: Step size

        Returns:
            Log-likelihood before each step, in order (length `steps`)
        """
        self._check_pair(X, y)
        steps = check_non_negative_int(steps, 'steps')
        learning_rate = check_finite_scalar(learning_rate, 'learning_rate')

        trace: list[float] = []
        for _ in range(steps):
            trace.append(self._log_likelihood(X, y))
            grad = self._gradient(X, y)

            # maximize likelihood
            self._coefficients = self._coefficients + learning_rate * grad.coefficients
            self._intercept = self._intercept + learning_rate * grad.intercept

        return trace

    def evaluate(self, X: Matrix, y: Matrix, threshold: float = 0.5) -> Evaluation:
        """Compute loss and accuracy for a pair of inputs and targets."""
        self._check_pair(X, y)
        threshold = check_finite_scalar(threshold, 'threshold')

        predictions = self._affine(X).sigmoid()
        positive = np.abs(y.data - 1.0) < LABEL_TOLERANCE
        n_correct = int(np.count_nonzero(positive == (predictions.data > threshold)))
        loss = -self._log_likelihood(X, y)
        return Evaluation(
            predictions=predictions,
            loss=loss,
            accuracy=n_correct / X.rows,
        )

    # === Internals (inputs already validated) ===

    def _affine(self, X: Matrix) -> Matrix:
        return X @ self._coefficients + self._intercept

    def _log_likelihood(self, X: Matrix, y: Matrix) -> float:
        z = self._affine(X)
        logl = y.multiply(z.sigmoid().log()) + (1.0 - y).multiply((-z).sigmoid().log())
        return logl.sum()

    def _gradient(self, X: Matrix, y: Matrix) -> Gradient:
        n = X.rows
        residual = y - self._affine(X).sigmoid()
        d_coefficients = diagonal_scale(residual, X).sum_columns().transpose() / n
        return Gradient(coefficients=d_coefficients, intercept=residual.sum() / n)

    def _check_features(self, X: Matrix) -> None:
        if X.cols != self.n_features:
            raise DimensionMismatch(
                f"X: expected {self.n_features} feature columns, got {X.cols}"
            )

    def _check_pair(self, X: Matrix, y: Matrix) -> None:
        self._check_features(X)
        check_column_vector(y, X.rows, 'y')
        check_binary(y, 'y')

    def __repr__(self) -> str:
        return f"LogisticRegression(n_features={self.n_features}, intercept={self._intercept:.6g})"
