"""
pylogistic: dense matrices and logistic regression by gradient ascent.

Submodules:
    matrix: Row-major dense matrix with BLAS-style operations
    logistic: Binary logistic regression trained by batch gradient ascent
    core: Exceptions, validation, result envelope, data loading
"""

__version__ = "0.1.0"

from pylogistic import matrix
from pylogistic import logistic
from pylogistic.core.datasource import DataSource, read_matrix
from pylogistic.matrix import Matrix

__all__ = [
    "__version__",
    "matrix",
    "logistic",
    "DataSource",
    "Matrix",
    "read_matrix",
]
