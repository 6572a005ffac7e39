"""
Dense matrix library.

Public API:
    Matrix: row-major float64 matrix with BLAS-style operations
    diagonal_scale(vector, matrix): diag(vector) @ matrix in linear time

Example:
    >>> from pylogistic.matrix import Matrix
    >>> a = Matrix.from_rows([[1, 2], [3, 4]])
    >>> print(a @ a.T)
    [5.0, 11.0
     11.0, 25.0]
"""

from pylogistic.matrix.dense import Matrix, diagonal_scale

__all__ = [
    "Matrix",
    "diagonal_scale",
]
