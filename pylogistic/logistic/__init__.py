"""
Binary logistic regression.

Public API:
    fit(X, y, ...) -> LogisticSolution
    LogisticRegression: the model itself (affine transform, log-likelihood,
        gradient, fit, predict, evaluate)

fit() handles:
    - Input conversion and validation
    - Design construction
    - Timing, logging and numeric anomaly reporting
    - Result wrapping

Example:
    >>> from pylogistic.logistic import fit
    >>> result = fit(X, y, steps=2000, learning_rate=0.5)
    >>> print(result.coefficients)
    >>> print(result.summary())
"""

from pylogistic.logistic.design import LogisticDesign
from pylogistic.logistic.model import Evaluation, Gradient, LogisticRegression
from pylogistic.logistic.solution import LogisticParams, LogisticSolution
from pylogistic.logistic.solvers import fit

__all__ = [
    "fit",
    "LogisticRegression",
    "LogisticDesign",
    "LogisticSolution",
    "LogisticParams",
    "Evaluation",
    "Gradient",
]
