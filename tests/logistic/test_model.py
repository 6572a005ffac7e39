"""
Tests for LogisticRegression.

The log-likelihood is checked against an independent scipy formulation,
the gradient against central finite differences of that formulation.
"""

import warnings

import numpy as np
import pytest
from scipy.special import log_expit

from pylogistic.core.compute.tolerances import EXACT_FP64, FINITE_DIFFERENCE
from pylogistic.core.exceptions import DimensionMismatch, ValidationError
from pylogistic.logistic import Evaluation, Gradient, LogisticRegression
from pylogistic.matrix import Matrix


def reference_log_likelihood(X, y, beta, intercept):
    """sum(y log σ(z) + (1 - y) log σ(-z)) in plain numpy/scipy."""
    z = X @ beta + intercept
    return float(np.sum(y * log_expit(z) + (1.0 - y) * log_expit(-z)))


def central_difference(f, x, h=1e-6):
    grad = np.empty_like(x)
    for i in range(x.size):
        step = np.zeros_like(x)
        step[i] = h
        grad[i] = (f(x + step) - f(x - step)) / (2 * h)
    return grad


# ═══════════════════════════════════════════════════════════════════════
# Construction and forward pass
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:

    def test_initial_parameters(self):
        model = LogisticRegression(3)
        assert model.n_features == 3
        assert model.coefficients.to_list() == [[1.0], [1.0], [1.0]]
        assert model.intercept == 0.5

    def test_custom_initial_parameters(self):
        model = LogisticRegression(2, initial_coefficient=0.0, initial_intercept=-1.0)
        assert model.coefficients == Matrix(2, 1)
        assert model.intercept == -1.0

    @pytest.mark.parametrize("n", [0, -2, 1.5])
    def test_invalid_feature_count(self, n):
        with pytest.raises(ValidationError):
            LogisticRegression(n)

    def test_coefficients_is_a_copy(self):
        model = LogisticRegression(2)
        coefs = model.coefficients
        coefs[0, 0] = 42.0
        assert model.coefficients[0, 0] == 1.0


class TestForward:

    def test_affine_transform(self, axis_separable_data):
        X, _ = axis_separable_data
        z = LogisticRegression(2).affine_transform(X)
        assert z.to_list() == [[1.5], [1.5], [2.5], [0.5]]

    def test_predict_is_sigmoid_of_affine(self, axis_separable_data):
        X, _ = axis_separable_data
        model = LogisticRegression(2)
        assert model.predict(X) == model.affine_transform(X).sigmoid()

    def test_predict_in_unit_interval(self, separable_data):
        X, _ = separable_data
        p = LogisticRegression(3).predict(X).data
        assert np.all((p > 0.0) & (p < 1.0))

    def test_feature_count_checked(self):
        with pytest.raises(DimensionMismatch, match="expected 2 feature columns, got 3"):
            LogisticRegression(2).affine_transform(Matrix(4, 3))


# ═══════════════════════════════════════════════════════════════════════
# Objective and gradient
# ═══════════════════════════════════════════════════════════════════════


class TestObjective:

    def test_log_likelihood_matches_reference(self, separable_data):
        X, y = separable_data
        model = LogisticRegression(3)
        expected = reference_log_likelihood(X.to_numpy(), y.to_numpy(), np.ones((3, 1)), 0.5)
        np.testing.assert_allclose(
            model.log_likelihood(X, y), expected, rtol=1e-10
        )

    def test_log_likelihood_is_non_positive(self, separable_data):
        X, y = separable_data
        assert LogisticRegression(3).log_likelihood(X, y) <= 0.0

    def test_saturated_sample_is_silent(self):
        X = Matrix.from_rows([[1000.0]])
        y = Matrix.from_rows([[1.0]])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            value = LogisticRegression(1).log_likelihood(X, y)
        # 0 * log(σ(-z)) with σ(-z) == 0 is 0 * -inf
        assert np.isnan(value)

    def test_gradient_type(self, axis_separable_data):
        X, y = axis_separable_data
        grad = LogisticRegression(2).gradient(X, y)
        assert isinstance(grad, Gradient)
        assert grad.coefficients.shape == (2, 1)
        assert isinstance(grad.intercept, float)

    def test_gradient_matches_finite_differences(self, separable_data):
        X, y = separable_data
        model = LogisticRegression(3)
        model.fit(X, y, steps=5, learning_rate=0.1)

        Xa, ya = X.to_numpy(), y.to_numpy()
        params = np.append(model.coefficients.data, model.intercept)

        def objective(theta):
            return reference_log_likelihood(Xa, ya, theta[:-1].reshape(-1, 1), theta[-1])

        numeric = central_difference(objective, params) / X.rows
        grad = model.gradient(X, y)
        analytic = np.append(grad.coefficients.data, grad.intercept)
        np.testing.assert_allclose(
            analytic, numeric, rtol=FINITE_DIFFERENCE.rtol, atol=FINITE_DIFFERENCE.atol
        )

    def test_gradient_intercept_is_mean_residual(self, axis_separable_data):
        X, y = axis_separable_data
        model = LogisticRegression(2)
        residual = y - model.predict(X)
        np.testing.assert_allclose(
            model.gradient(X, y).intercept, residual.sum() / 4, rtol=EXACT_FP64.rtol
        )

    def test_label_shape_checked(self, axis_separable_data):
        X, _ = axis_separable_data
        with pytest.raises(DimensionMismatch, match="y: expected 4x1"):
            LogisticRegression(2).log_likelihood(X, Matrix(3, 1))

    def test_labels_must_be_binary(self, axis_separable_data):
        X, _ = axis_separable_data
        y = Matrix.from_rows([[1], [0], [2], [0]])
        with pytest.raises(ValidationError, match="at row 2"):
            LogisticRegression(2).gradient(X, y)


# ═══════════════════════════════════════════════════════════════════════
# Training
# ═══════════════════════════════════════════════════════════════════════


class TestFit:

    def test_axis_separable_reaches_full_accuracy(self, axis_separable_data):
        X, y = axis_separable_data
        model = LogisticRegression(2)
        assert model.evaluate(X, y).accuracy == 0.5

        model.fit(X, y, steps=2000, learning_rate=0.5)
        result = model.evaluate(X, y)
        assert result.accuracy == 1.0
        assert model.coefficients[0, 0] > 0.0
        assert model.predict(X).to_list()[3][0] < 0.5

    def test_trace_length(self, axis_separable_data):
        X, y = axis_separable_data
        trace = LogisticRegression(2).fit(X, y, steps=17, learning_rate=0.5)
        assert len(trace) == 17

    def test_trace_starts_at_initial_log_likelihood(self, axis_separable_data):
        X, y = axis_separable_data
        model = LogisticRegression(2)
        initial = model.log_likelihood(X, y)
        trace = model.fit(X, y, steps=3, learning_rate=0.5)
        assert trace[0] == initial

    def test_zero_steps_leaves_parameters(self, axis_separable_data):
        X, y = axis_separable_data
        model = LogisticRegression(2)
        assert model.fit(X, y, steps=0, learning_rate=0.5) == []
        assert model.coefficients == Matrix(2, 1, 1.0)
        assert model.intercept == 0.5

    def test_log_likelihood_increases_with_small_rate(self, separable_data):
        X, y = separable_data
        trace = LogisticRegression(3).fit(X, y, steps=100, learning_rate=0.1)
        assert np.all(np.diff(trace) >= -1e-12)
        assert trace[-1] > trace[0]

    def test_fit_resumes(self, separable_data):
        X, y = separable_data
        once = LogisticRegression(3)
        once.fit(X, y, steps=20, learning_rate=0.2)

        twice = LogisticRegression(3)
        twice.fit(X, y, steps=10, learning_rate=0.2)
        twice.fit(X, y, steps=10, learning_rate=0.2)

        assert twice.coefficients.allclose(once.coefficients, rtol=EXACT_FP64.rtol)
        np.testing.assert_allclose(twice.intercept, once.intercept, rtol=EXACT_FP64.rtol)

    def test_recovers_direction_of_true_weights(self, separable_data):
        X, y = separable_data
        model = LogisticRegression(3)
        model.fit(X, y, steps=500, learning_rate=0.5)
        assert model.evaluate(X, y).accuracy > 0.95
        coefs = model.coefficients.data
        assert coefs[0] > 0.0
        assert coefs[1] < 0.0

    def test_negative_steps_rejected(self, axis_separable_data):
        X, y = axis_separable_data
        with pytest.raises(ValidationError, match="non-negative"):
            LogisticRegression(2).fit(X, y, steps=-1, learning_rate=0.5)

    def test_non_finite_learning_rate_rejected(self, axis_separable_data):
        X, y = axis_separable_data
        with pytest.raises(ValidationError, match="finite"):
            LogisticRegression(2).fit(X, y, steps=1, learning_rate=float("inf"))


# ═══════════════════════════════════════════════════════════════════════
# Evaluation
# ═══════════════════════════════════════════════════════════════════════


class TestEvaluate:

    def test_loss_is_negative_log_likelihood(self, separable_data):
        X, y = separable_data
        model = LogisticRegression(3)
        result = model.evaluate(X, y)
        assert isinstance(result, Evaluation)
        assert result.loss == -model.log_likelihood(X, y)
        assert result.loss >= 0.0

    def test_predictions_shape(self, axis_separable_data):
        X, y = axis_separable_data
        result = LogisticRegression(2).evaluate(X, y)
        assert result.predictions.shape == (4, 1)

    def test_threshold_moves_decisions(self, axis_separable_data):
        X, y = axis_separable_data
        model = LogisticRegression(2)
        # initial probabilities: σ(1.5), σ(1.5), σ(2.5), σ(0.5)
        assert model.evaluate(X, y, threshold=0.5).accuracy == 0.5
        assert model.evaluate(X, y, threshold=0.99).accuracy == 0.5
        assert model.evaluate(X, y, threshold=0.85).accuracy == 0.75

    def test_evaluate_does_not_train(self, axis_separable_data):
        X, y = axis_separable_data
        model = LogisticRegression(2)
        model.evaluate(X, y)
        assert model.intercept == 0.5

    def test_accuracy_matches_elementwise_count(self, separable_data):
        X, y = separable_data
        model = LogisticRegression(3, initial_coefficient=0.3, initial_intercept=-0.2)
        result = model.evaluate(X, y, threshold=0.6)
        labels = y.to_numpy().ravel()
        decisions = result.predictions.to_numpy().ravel() > 0.6
        expected = np.mean(decisions == (labels == 1.0))
        assert result.accuracy == pytest.approx(expected)
