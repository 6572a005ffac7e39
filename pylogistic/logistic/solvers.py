"""
Training entry point for logistic regression.

This module provides the fit() function (public API): input conversion,
design construction, the gradient ascent run and result wrapping.
"""

from __future__ import annotations

import warnings

from numpy.typing import ArrayLike

from pylogistic.config import DEFAULT_CONFIG, TrainingConfig
from pylogistic.core.compute.timing import Timer
from pylogistic.core.exceptions import DimensionMismatch, NumericAnomaly
from pylogistic.core.result import Result
from pylogistic.core.validation import check_array, check_finite_trace
from pylogistic.logistic.design import LogisticDesign
from pylogistic.logistic.model import LogisticRegression
from pylogistic.logistic.solution import LogisticParams, LogisticSolution
from pylogistic.matrix import Matrix
from pylogistic.utils.logging import get_logger, json_log

log = get_logger(__name__)


def fit(
    X: Matrix | ArrayLike,
    y: Matrix | ArrayLike,
    *,
    steps: int | None = None,
    learning_rate: float | None = None,
    threshold: float | None = None,
    config: TrainingConfig | None = None,
    model: LogisticRegression | None = None,
    strict: bool = False,
) -> LogisticSolution:
    """
    Fit a logistic regression model by batch gradient ascent.

    Maximizes the log-likelihood
        sum_i y_i log σ(x_i·β + b) + (1 - y_i) log σ(-(x_i·β + b))
    with a fixed number of steps of size `learning_rate`.

    Args:
        X: Feature matrix (n x p). Matrix or any 2-D array-like.
        y: Binary labels, n x 1 Matrix or array-like of length n.
        steps: Number of gradient steps. Default from config (2000).
        learning_rate: Step size. Default from config (0.5).
        threshold: Classification threshold for the final evaluation.
        config: Base TrainingConfig; explicit keywords override it.
        model: Existing model to keep training. It is mutated in place.
            When None a fresh model is built from the config's initial
            values.
        strict: If True, a non-finite log-likelihood raises NumericAnomaly
            instead of producing a warning.

    Returns:
        LogisticSolution with coefficients, trace, evaluation and timing

    Raises:
        ValidationError: If inputs are invalid (non-numeric, non-binary y)
        DimensionMismatch: If X, y and model disagree on shapes
        NumericAnomaly: If strict and the log-likelihood went non-finite

    Example:
        >>> result = fit([[1, 0], [0, 1], [1, 1], [0, 0]], [1, 0, 1, 0])
        >>> result.accuracy
        1.0
        >>> print(result.summary())
    """
    config = (config or DEFAULT_CONFIG).with_overrides(
        steps=steps, learning_rate=learning_rate, threshold=threshold,
    )

    # === Input Validation ===
    # This is the boundary - validate here, trust everywhere else
    design = LogisticDesign.from_matrices(_as_matrix(X, 'X'), _as_matrix(y, 'y'))

    if model is None:
        model = LogisticRegression(
            design.p,
            initial_coefficient=config.initial_coefficient,
            initial_intercept=config.initial_intercept,
        )
    elif model.n_features != design.p:
        raise DimensionMismatch(
            f"model: has {model.n_features} features, X has {design.p} columns"
        )

    timer = Timer()
    timer.start()

    log.info(json_log(
        'training started',
        n=design.n, p=design.p, steps=config.steps, learning_rate=config.learning_rate,
    ))

    # === Gradient Ascent ===
    trace: list[float] = []
    with timer.section('training'):
        remaining = config.steps
        while remaining > 0:
            chunk = min(config.log_every, remaining)
            trace.extend(model.fit(design.X, design.y, chunk, config.learning_rate))
            remaining -= chunk
            log.debug(json_log(
                'training progress', step=len(trace), log_likelihood=trace[-1],
            ))

    with timer.section('evaluation'):
        evaluation = model.evaluate(design.X, design.y, threshold=config.threshold)

    timer.stop()

    # === Diagnostics ===
    warn_list: list[str] = []
    try:
        check_finite_trace(trace, 'log_likelihood')
    except NumericAnomaly as anomaly:
        if strict:
            raise
        warnings.warn(str(anomaly), RuntimeWarning, stacklevel=2)
        warn_list.append(str(anomaly))

    log.info(json_log(
        'training finished',
        accuracy=evaluation.accuracy,
        loss=evaluation.loss,
        seconds=round(timer.result()['total_seconds'], 6),
    ))

    # === Wrap and Return ===
    params = LogisticParams(
        coefficients=model.coefficients,
        intercept=model.intercept,
        log_likelihood_trace=tuple(trace),
        evaluation=evaluation,
    )
    result = Result(
        params=params,
        info={
            'method': 'gradient_ascent',
            'steps': config.steps,
            'learning_rate': config.learning_rate,
            'threshold': config.threshold,
        },
        timing=timer.result(),
        backend_name='cpu_gradient_ascent',
        warnings=tuple(warn_list),
    )
    return LogisticSolution(_result=result, _design=design, _model=model)


def _as_matrix(value: Matrix | ArrayLike, name: str) -> Matrix:
    if isinstance(value, Matrix):
        return value
    array = check_array(value, name)
    if array.ndim == 1:
        array = array.reshape(-1, 1)
    return Matrix.from_array(array)
