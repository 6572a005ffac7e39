"""
Dense row-major matrix.

A Matrix owns a flat float64 buffer of exactly rows*cols values laid out
row by row. Every operation validates shapes up front and returns a fresh
Matrix; only indexed and sliced assignment mutate in place.

Kernels are numpy ufuncs over the flat buffer. Floating-point exceptions
follow IEEE semantics silently: log(0) is -inf, log(-1) is NaN, exp of a
large value is inf. Nothing is clipped.
"""

from __future__ import annotations

from numbers import Real
from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylogistic.core.exceptions import DimensionMismatch, ValidationError
from pylogistic.core.validation import (
    check_array,
    check_column_range,
    check_column_vector,
    check_index,
    check_positive_int,
    check_same_shape,
)


class Matrix:
    """
    Row-major dense matrix of float64 values.

    Construction:
        Matrix(2, 3)                          # 2x3 of zeros
        Matrix(2, 3, 1.0)                     # 2x3 of ones
        Matrix(2, 2, data=[1, 2, 3, 4])       # from a flat row-major sequence
        Matrix.from_rows([[1, 2], [3, 4]])
        Matrix.from_columns([[1, 3], [2, 4]])
        Matrix.from_array(np.eye(3))

    Indexing:
        m[r, c]          element
        m[:, c]          column c as a rows x 1 vector
        m[:, lo:hi]      columns lo..hi-1 as a rows x (hi-lo) matrix

    Arithmetic:
        a @ b            matrix product
        a + b, a - b     same-shape elementwise
        m * s, m / s     scalar scaling (s * m, s + m, s - m also work)
        a.multiply(b)    Hadamard product
    """

    __slots__ = ('_rows', '_cols', '_data')

    # Arrays would otherwise claim the reflected operators (s * m)
    __array_ufunc__ = None

    def __init__(
        self,
        rows: int,
        cols: int,
        fill: float = 0.0,
        *,
        data: ArrayLike | None = None,
    ):
        self._rows = check_positive_int(rows, 'rows')
        self._cols = check_positive_int(cols, 'cols')
        size = self._rows * self._cols

        if data is None:
            if isinstance(fill, bool) or not isinstance(fill, Real):
                raise ValidationError(
                    f"fill: expected a real number, got {type(fill).__name__}"
                )
            self._data = np.full(size, float(fill), dtype=np.float64)
            return

        # Always copy: a Matrix never shares its buffer with the caller
        values = np.array(check_array(data, 'data'), dtype=np.float64, copy=True)
        if values.ndim != 1:
            raise DimensionMismatch(
                f"data: expected a flat sequence, got {values.ndim}D with shape {values.shape}"
            )
        if values.size != size:
            raise DimensionMismatch(
                f"Invalid number of elements for matrix dimensions: "
                f"{rows}x{cols} needs {size}, got {values.size}"
            )
        self._data = values

    @classmethod
    def _wrap(cls, rows: int, cols: int, values: NDArray[np.float64]) -> Matrix:
        """Adopt a freshly computed buffer without copying."""
        if values.size != rows * cols:
            raise DimensionMismatch(
                f"Invalid number of elements for matrix dimensions: "
                f"{rows}x{cols} needs {rows * cols}, got {values.size}"
            )
        result = cls.__new__(cls)
        result._rows = rows
        result._cols = cols
        result._data = values
        return result

    # === Factory Methods ===

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> Matrix:
        """Build a matrix from a sequence of equally long rows."""
        rows = list(rows)
        if not rows:
            raise ValidationError("rows: need at least one row")
        width = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != width:
                raise DimensionMismatch(
                    f"rows: row {i} has {len(row)} values, row 0 has {width}"
                )
        flat = [value for row in rows for value in row]
        return cls(len(rows), width, data=flat)

    @classmethod
    def from_columns(cls, columns: Sequence[Sequence[float]]) -> Matrix:
        """Build a matrix from a sequence of equally long columns."""
        return cls.from_rows(columns).transpose()

    @classmethod
    def from_array(cls, array: ArrayLike) -> Matrix:
        """Build a matrix from a 2-D array-like (copied)."""
        values = check_array(array, 'array')
        if values.ndim != 2:
            raise DimensionMismatch(
                f"array: expected 2D array, got {values.ndim}D with shape {values.shape}"
            )
        rows, cols = values.shape
        return cls(rows, cols, data=values.ravel())

    @classmethod
    def diagonal(cls, vector: Matrix) -> Matrix:
        """
        Materialize diag(vector) as an explicit n x n matrix.

        Quadratic in memory; use diagonal_scale() to scale rows instead.
        """
        _check_vector(vector, 'vector')
        n = vector.size
        return cls._wrap(n, n, np.diag(vector._data).ravel())

    # === Properties ===

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._cols)

    @property
    def size(self) -> int:
        return self._data.size

    @property
    def data(self) -> NDArray[np.float64]:
        """Read-only view of the row-major buffer."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    @property
    def is_vector(self) -> bool:
        """True for row and column vectors."""
        return self._rows == 1 or self._cols == 1

    def _grid(self) -> NDArray[np.float64]:
        """rows x cols view sharing this matrix's buffer."""
        return self._data.reshape(self._rows, self._cols)

    # === Indexing ===

    def get(self, row: int, col: int) -> float:
        """Element at (row, col)."""
        r = check_index(row, self._rows, 'row')
        c = check_index(col, self._cols, 'col')
        return float(self._data[r * self._cols + c])

    def set(self, row: int, col: int, value: float) -> None:
        """Overwrite the element at (row, col) in place."""
        r = check_index(row, self._rows, 'row')
        c = check_index(col, self._cols, 'col')
        self._data[r * self._cols + c] = value

    def column(self, index: int) -> Matrix:
        """Column `index` as a rows x 1 vector."""
        c = check_index(index, self._cols, 'column')
        return Matrix._wrap(self._rows, 1, self._grid()[:, c].copy())

    def set_column(self, index: int, vector: Matrix) -> None:
        """Overwrite column `index` in place with a rows x 1 vector."""
        c = check_index(index, self._cols, 'column')
        check_column_vector(vector, self._rows, 'vector')
        self._grid()[:, c] = vector._data

    def columns(self, low: int, high: int) -> Matrix:
        """Columns low..high-1 as a rows x (high-low) matrix."""
        low, high = check_column_range(low, high, self._cols, 'columns')
        block = self._grid()[:, low:high]
        return Matrix._wrap(self._rows, high - low, block.flatten())

    def set_columns(self, low: int, high: int, block: Matrix) -> None:
        """Overwrite columns low..high-1 in place."""
        low, high = check_column_range(low, high, self._cols, 'columns')
        if block.shape != (self._rows, high - low):
            raise DimensionMismatch(
                f"block: expected {self._rows}x{high - low}, got {block.rows}x{block.cols}"
            )
        self._grid()[:, low:high] = block._grid()

    def __getitem__(self, key: Any) -> float | Matrix:
        row, col = _split_key(key)
        if isinstance(row, slice):
            if isinstance(col, slice):
                low, high = _slice_bounds(col, self._cols)
                return self.columns(low, high)
            return self.column(col)
        return self.get(row, col)

    def __setitem__(self, key: Any, value: float | Matrix) -> None:
        row, col = _split_key(key)
        if isinstance(row, slice):
            if not isinstance(value, Matrix):
                raise TypeError(
                    f"column assignment needs a Matrix, got {type(value).__name__}"
                )
            if isinstance(col, slice):
                low, high = _slice_bounds(col, self._cols)
                self.set_columns(low, high, value)
            else:
                self.set_column(col, value)
            return
        self.set(row, col, value)

    # === Transpose ===

    def transpose(self) -> Matrix:
        """Return the transpose of the matrix."""
        return Matrix._wrap(self._cols, self._rows, self._grid().T.flatten())

    @property
    def T(self) -> Matrix:
        return self.transpose()

    # === Summation ===

    def sum(self) -> float:
        """Sum of all elements."""
        with np.errstate(all='ignore'):
            return float(np.sum(self._data))

    def sum_columns(self) -> Matrix:
        """Sum of each column, as a 1 x cols matrix."""
        with np.errstate(all='ignore'):
            totals = np.sum(self._grid(), axis=0)
        return Matrix._wrap(1, self._cols, totals)

    # === Elementwise Functions ===

    def _map(self, func) -> Matrix:
        with np.errstate(all='ignore'):
            values = func(self._data)
        return Matrix._wrap(self._rows, self._cols, values)

    def _zip(self, other: Matrix, func) -> Matrix:
        # shapes already checked by the caller
        with np.errstate(all='ignore'):
            values = func(self._data, other._data)
        return Matrix._wrap(self._rows, self._cols, values)

    def exp(self) -> Matrix:
        """e^x elementwise."""
        return self._map(np.exp)

    def log(self) -> Matrix:
        """Natural logarithm elementwise."""
        return self._map(np.log)

    def reciprocal(self) -> Matrix:
        """1/x elementwise."""
        return self._map(np.reciprocal)

    def sigmoid(self) -> Matrix:
        """1/(1 + e^(-x)) elementwise."""
        return ((-self).exp() + 1.0).reciprocal()

    # === Operators ===

    def __matmul__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self._cols != other._rows:
            raise DimensionMismatch(
                f"Invalid matrix dimensions for product: "
                f"{self._rows}x{self._cols} @ {other._rows}x{other._cols}"
            )
        with np.errstate(all='ignore'):
            product = self._grid() @ other._grid()
        return Matrix._wrap(self._rows, other._cols, product.ravel())

    def __mul__(self, other: float) -> Matrix:
        if not _is_scalar(other):
            return NotImplemented
        return self._map(lambda values: values * float(other))

    def __rmul__(self, other: float) -> Matrix:
        return self.__mul__(other)

    def __truediv__(self, other: float) -> Matrix:
        if not _is_scalar(other):
            return NotImplemented
        return self._map(lambda values: values / float(other))

    def __neg__(self) -> Matrix:
        return self * -1.0

    def __add__(self, other: Matrix | float) -> Matrix:
        if isinstance(other, Matrix):
            check_same_shape(self, other, 'add')
            return self._zip(other, np.add)
        if not _is_scalar(other):
            return NotImplemented
        return self._map(lambda values: values + float(other))

    def __radd__(self, other: float) -> Matrix:
        return self.__add__(other)

    def __sub__(self, other: Matrix | float) -> Matrix:
        if isinstance(other, Matrix):
            check_same_shape(self, other, 'sub')
            return self._zip(other, np.subtract)
        if not _is_scalar(other):
            return NotImplemented
        return self + (-float(other))

    def __rsub__(self, other: float) -> Matrix:
        if not _is_scalar(other):
            return NotImplemented
        return (-self) + float(other)

    # === Other Multiplication ===

    def multiply(self, other: Matrix) -> Matrix:
        """Elementwise (Hadamard) product of two same-shape matrices."""
        check_same_shape(self, other, 'elementwise product')
        return self._zip(other, np.multiply)

    def diagonal_scale(self, matrix: Matrix) -> Matrix:
        """Computes diag(self) @ matrix, treating self as the diagonal."""
        return diagonal_scale(self, matrix)

    # === Comparison ===

    __hash__ = None  # mutable

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    def allclose(self, other: Matrix, rtol: float = 1e-9, atol: float = 0.0) -> bool:
        """Same shape and elementwise equal within tolerance."""
        return self.shape == other.shape and bool(
            np.allclose(self._data, other._data, rtol=rtol, atol=atol)
        )

    def is_finite(self) -> bool:
        """True if no element is NaN or infinite."""
        return bool(np.all(np.isfinite(self._data)))

    # === Conversion ===

    def copy(self) -> Matrix:
        return Matrix._wrap(self._rows, self._cols, self._data.copy())

    def to_numpy(self) -> NDArray[np.float64]:
        """rows x cols array (copied)."""
        return self._grid().copy()

    def to_list(self) -> list[list[float]]:
        return self._grid().tolist()

    # === String Representation ===

    def __str__(self) -> str:
        lines = []
        for r, row in enumerate(self._grid()):
            prefix = "[" if r == 0 else " "
            lines.append(prefix + ", ".join(str(float(v)) for v in row))
        return "\n".join(lines) + "]"

    def __repr__(self) -> str:
        return f"Matrix(rows={self._rows}, cols={self._cols})"


def diagonal_scale(vector: Matrix, matrix: Matrix) -> Matrix:
    """
    Compute diag(vector) @ matrix without forming the diagonal matrix.

    Row i of `matrix` is multiplied by vector[i]. Runs in time linear in the
    number of entries of `matrix`; the explicit product would need an n x n
    diagonal and quadratic work.

    Args:
        vector: Row or column vector with matrix.rows elements
        matrix: Matrix whose rows are scaled

    Returns:
        New matrix with the shape of `matrix`

    Raises:
        DimensionMismatch: If vector is not a vector or its length is wrong
    """
    _check_vector(vector, 'vector')
    if vector.size != matrix.rows:
        raise DimensionMismatch(
            f"Incompatible dimensions for diagonal scale: vector has "
            f"{vector.size} elements, matrix has {matrix.rows} rows"
        )
    with np.errstate(all='ignore'):
        scaled = matrix._grid() * vector._data[:, np.newaxis]
    return Matrix._wrap(matrix.rows, matrix.cols, scaled.ravel())


def _check_vector(m: Matrix, name: str) -> None:
    if not m.is_vector:
        raise DimensionMismatch(
            f"{name}: cannot convert non-vector {m.rows}x{m.cols} to diagonal matrix"
        )


def _is_scalar(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _split_key(key: Any) -> tuple[Any, Any]:
    if not isinstance(key, tuple) or len(key) != 2:
        raise TypeError(
            "Matrix indices must be (row, col), (:, col) or (:, low:high)"
        )
    row, col = key
    if isinstance(row, slice) and row != slice(None):
        raise TypeError("only the full row slice ':' is supported")
    return row, col


def _slice_bounds(col: slice, bound: int) -> tuple[int, int]:
    if col.step not in (None, 1):
        raise TypeError("column slices must have step 1")
    low = 0 if col.start is None else col.start
    high = bound if col.stop is None else col.stop
    return low, high
