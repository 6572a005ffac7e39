"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pylogistic.matrix import Matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def axis_separable_data():
    """Four samples separable along the first feature."""
    X = Matrix.from_rows([[1, 0], [0, 1], [1, 1], [0, 0]])
    y = Matrix.from_rows([[1], [0], [1], [0]])
    return X, y


@pytest.fixture
def separable_data(rng):
    """Linearly separable synthetic dataset with a margin."""
    n, p = 200, 3
    X = rng.standard_normal((n, p))
    w = np.array([1.5, -2.0, 0.5])
    score = X @ w
    keep = np.abs(score) > 0.5
    X, score = X[keep], score[keep]
    y = (score > 0).astype(np.float64).reshape(-1, 1)
    return Matrix.from_array(X), Matrix.from_array(y)


@pytest.fixture
def write_csv(tmp_path):
    """Write text to a file under tmp_path and return its path."""
    def _write(text, name="data.csv"):
        path = tmp_path / name
        path.write_text(text)
        return path
    return _write
