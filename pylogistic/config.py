"""Training defaults."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from pylogistic.core.validation import (
    check_finite_scalar,
    check_non_negative_int,
    check_positive_int,
)


@dataclass(frozen=True)
class TrainingConfig:
    """
    Hyperparameters for a gradient ascent run.

    Attributes:
        steps: Number of gradient steps (no early stopping)
        learning_rate: Step size applied to every gradient
        threshold: Probability above which a sample is classified positive
        initial_coefficient: Starting value of every coefficient
        initial_intercept: Starting value of the intercept
        log_every: Emit a debug line every this many steps
    """
    steps: int = 2000
    learning_rate: float = 0.5
    threshold: float = 0.5
    initial_coefficient: float = 1.0
    initial_intercept: float = 0.5
    log_every: int = 500

    def __post_init__(self) -> None:
        check_non_negative_int(self.steps, 'steps')
        check_finite_scalar(self.learning_rate, 'learning_rate')
        check_finite_scalar(self.threshold, 'threshold')
        check_finite_scalar(self.initial_coefficient, 'initial_coefficient')
        check_finite_scalar(self.initial_intercept, 'initial_intercept')
        check_positive_int(self.log_every, 'log_every')

    def with_overrides(self, **overrides: Any) -> TrainingConfig:
        """Copy with the non-None overrides applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        return replace(self, **changes)


DEFAULT_CONFIG = TrainingConfig()
