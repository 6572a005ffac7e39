"""
Logistic regression solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np

from pylogistic.core.result import Result
from pylogistic.matrix import Matrix

if TYPE_CHECKING:
    from pylogistic.logistic.design import LogisticDesign
    from pylogistic.logistic.model import Evaluation, LogisticRegression


@dataclass(frozen=True)
class LogisticParams:
    """
    Parameter payload for logistic regression.

    Snapshot of the model after training plus the evaluation on the
    training data.
    """
    coefficients: Matrix
    intercept: float
    log_likelihood_trace: tuple[float, ...]
    evaluation: 'Evaluation'


@dataclass
class LogisticSolution:
    """
    User-facing training results.

    Wraps the Result envelope and keeps a handle on the trained model so
    it can keep predicting or be trained further.
    """
    _result: Result[LogisticParams]
    _design: 'LogisticDesign'
    _model: 'LogisticRegression'

    @property
    def coefficients(self) -> Matrix:
        return self._result.params.coefficients

    @property
    def intercept(self) -> float:
        return self._result.params.intercept

    @property
    def log_likelihood_trace(self) -> tuple[float, ...]:
        return self._result.params.log_likelihood_trace

    @property
    def final_log_likelihood(self) -> float:
        """Log-likelihood recorded at the last gradient step (NaN if no steps)."""
        trace = self.log_likelihood_trace
        return trace[-1] if trace else float('nan')

    @property
    def predictions(self) -> Matrix:
        return self._result.params.evaluation.predictions

    @property
    def loss(self) -> float:
        return self._result.params.evaluation.loss

    @property
    def accuracy(self) -> float:
        return self._result.params.evaluation.accuracy

    @property
    def model(self) -> 'LogisticRegression':
        return self._model

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Generate a plain-text training report."""
        lines = [
            "Logistic Regression Results",
            "=" * 60,
            f"Observations: {self._design.n}",
            f"Features: {self._design.p}",
            f"Steps: {self.info.get('steps', len(self.log_likelihood_trace))}",
            f"Learning rate: {self.info.get('learning_rate', float('nan')):g}",
            f"Final log-likelihood: {self.final_log_likelihood:.6f}",
            f"Loss: {self.loss:.6f}",
            f"Accuracy: {self.accuracy:.4f}",
            "",
            "Coefficients:",
            "-" * 60,
        ]

        for i, coef in enumerate(self.coefficients.data):
            if np.isfinite(coef):
                lines.append(f"  β[{i}]: {coef:14.6f}")
            else:
                lines.append(f"  β[{i}]: {'NA':>14}")
        lines.append(f"  intercept: {self.intercept:10.6f}")

        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for warning in self.warnings:
            lines.append(f"Warning: {warning}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LogisticSolution(n={self._design.n}, p={self._design.p}, "
            f"accuracy={self.accuracy:.4f}, loss={self.loss:.4f})"
        )
