"""
Data loading for pylogistic.

DataSource is the "I have data" abstraction. It holds named matrices and
knows nothing about which model consumes them; LogisticDesign decides
which columns are features and which is the label.

Usage:
    from pylogistic.core.datasource import DataSource, read_matrix

    m = read_matrix("data.csv")
    ds = DataSource.from_file("data.csv")
    ds = DataSource.from_matrix(m)
    ds = DataSource.from_arrays(X=X, y=y)

    ds.keys()      # frozenset({'data'})
    data = ds['data']
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd
from numpy.typing import ArrayLike

from pylogistic.core.exceptions import InvalidInput
from pylogistic.core.validation import check_array
from pylogistic.matrix import Matrix

# Suffixes accepted by DataSource.from_file and the CLI
DATA_SUFFIXES = ('.csv', '.txt')

# pandas reports ragged rows as "Expected 2 fields in line 3, saw 3"
_PARSER_LINE = re.compile(r'line (\d+)')


def read_matrix(path: str | Path) -> Matrix:
    """
    Read a comma-separated text file into a Matrix.

    One sample per non-empty line, every field a floating-point number.
    Blank lines are skipped. Nothing is substituted for a bad field: the
    first missing or non-numeric value aborts the read.

    Args:
        path: File to read

    Returns:
        Matrix with one row per non-empty line

    Raises:
        InvalidInput: If the file is missing, unreadable, empty, ragged or
            contains a non-numeric token (with path and 1-based line)
    """
    path = Path(path)
    try:
        frame = pd.read_csv(
            path,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
        )
    except FileNotFoundError as e:
        raise InvalidInput(f"{path}: file not found", path=path) from e
    except pd.errors.EmptyDataError as e:
        raise InvalidInput(f"{path}: file contains no data", path=path) from e
    except pd.errors.ParserError as e:
        match = _PARSER_LINE.search(str(e))
        line = int(match.group(1)) if match else None
        where = f", line {line}" if line is not None else ""
        raise InvalidInput(
            f"{path}{where}: malformed file: {str(e).strip()}", path=path, line=line,
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidInput(f"{path}: cannot read file: {e}", path=path) from e

    # Row label i is line i + 1 because blank lines were kept
    text = frame.fillna('').astype(str).apply(lambda col: col.str.strip())
    text = text[~(text == '').all(axis=1)]
    if text.empty:
        raise InvalidInput(f"{path}: file contains no data", path=path)

    values = text.apply(pd.to_numeric, errors='coerce')
    bad_rows, bad_cols = np.nonzero(values.isna().to_numpy())
    if bad_rows.size:
        label = text.index[bad_rows[0]]
        col = int(bad_cols[0])
        line = int(label) + 1
        token = text.iat[int(bad_rows[0]), col]
        problem = "missing value" if token == '' else f"non-numeric token {token!r}"
        raise InvalidInput(
            f"{path}, line {line}, column {col + 1}: {problem}",
            path=path,
            line=line,
        )

    return Matrix.from_array(values.to_numpy(dtype=np.float64))


@dataclass
class DataSource:
    """
    Named-matrix container. Model-agnostic.

    Construct via factory classmethods, not directly.
    """
    _data: dict[str, Matrix]
    _metadata: dict[str, Any] = field(default_factory=dict)

    # === Matrix Access ===

    def keys(self) -> frozenset[str]:
        """Return the names of all available matrices."""
        return frozenset(self._data.keys())

    def __getitem__(self, key: str) -> Matrix:
        """
        Access a named matrix.

        Raises:
            KeyError: If key not found, with message listing available keys
        """
        if key not in self._data:
            raise KeyError(
                f"DataSource has no matrix '{key}'. Available: {set(self.keys())}"
            )
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    # === Properties ===

    @property
    def n_observations(self) -> int:
        """Number of samples (rows)."""
        return self._metadata.get('n_observations', 0)

    @property
    def metadata(self) -> dict[str, Any]:
        return self._metadata.copy()

    # === Factory Methods ===

    @classmethod
    def from_file(cls, path: str | Path) -> DataSource:
        """Construct from a comma-separated text file."""
        path = Path(path)
        suffix = path.suffix.lower()
        if suffix not in DATA_SUFFIXES:
            raise InvalidInput(
                f"{path}: unknown file format {suffix or '(none)'!r}, "
                f"expected one of {', '.join(DATA_SUFFIXES)}",
                path=path,
            )
        data = read_matrix(path)
        return cls(
            _data={'data': data},
            _metadata={
                'n_observations': data.rows,
                'n_columns': data.cols,
                'source': 'file',
                'source_path': str(path),
            },
        )

    @classmethod
    def from_matrix(cls, data: Matrix) -> DataSource:
        """Construct from a full data matrix (features then label)."""
        return cls(
            _data={'data': data.copy()},
            _metadata={
                'n_observations': data.rows,
                'n_columns': data.cols,
                'source': 'matrix',
            },
        )

    @classmethod
    def from_arrays(cls, *, X: ArrayLike, y: ArrayLike) -> DataSource:
        """Construct from separate feature and label arrays."""
        X_arr = check_array(X, 'X')
        if X_arr.ndim == 1:
            X_arr = X_arr.reshape(-1, 1)
        y_arr = check_array(y, 'y')
        if y_arr.ndim == 1:
            y_arr = y_arr.reshape(-1, 1)
        return cls(
            _data={'X': Matrix.from_array(X_arr), 'y': Matrix.from_array(y_arr)},
            _metadata={'n_observations': X_arr.shape[0], 'source': 'arrays'},
        )
