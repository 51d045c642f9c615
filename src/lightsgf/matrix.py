from __future__ import annotations

from typing import Generic, Sequence, TypeVar

import numpy as np

from .errors import DimensionMismatchError, MatrixIndexError
from .field import Field

E = TypeVar("E")


class Matrix(Generic[E]):
    """Mutable rectangular grid of elements of a single field.

    Storage is a row-major list of rows. Row operations mutate in place;
    everything else (product, transpose, augment) returns a new matrix.
    Nothing is shared between matrices: constructors copy their input and
    row()/column() hand out copies, so any in-place reduction of a matrix
    that must survive needs an explicit copy() first.
    """

    def __init__(self, rows: int, cols: int, field: Field[E]):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"invalid matrix shape ({rows}, {cols})")
        self.field = field
        self.n_rows = int(rows)
        self.n_cols = int(cols)
        self._values: list[list[E]] = [
            [field.zero() for _ in range(cols)] for _ in range(rows)
        ]

    # construction

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[E]], field: Field[E]) -> "Matrix[E]":
        if len(rows) == 0 or len(rows[0]) == 0:
            raise ValueError("matrix needs at least one row and one column")
        width = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != width:
                raise DimensionMismatchError(
                    f"row {i} has length {len(row)}, expected {width}"
                )
        m = cls(len(rows), width, field)
        m._values = [[field.validate(v) for v in row] for row in rows]
        return m

    @classmethod
    def from_array(cls, array: np.ndarray, field: Field[E]) -> "Matrix[E]":
        array = np.asarray(array)
        if array.dtype == bool:
            array = array.astype(np.uint8)
        if array.ndim != 2:
            raise DimensionMismatchError(
                f"expected a 2-D array, got shape {array.shape}"
            )
        return cls.from_rows([[v.item() for v in row] for row in array], field)

    @classmethod
    def identity(cls, size: int, field: Field[E]) -> "Matrix[E]":
        m = cls(size, size, field)
        for i in range(size):
            m._values[i][i] = field.one()
        return m

    def copy(self) -> "Matrix[E]":
        m = Matrix(self.n_rows, self.n_cols, self.field)
        m._values = [list(row) for row in self._values]
        return m

    # access

    @property
    def shape(self) -> tuple[int, int]:
        return self.n_rows, self.n_cols

    def _check_row(self, row: int) -> None:
        if not 0 <= row < self.n_rows:
            raise MatrixIndexError(
                f"row {row} out of range for {self.n_rows} rows"
            )

    def _check_index(self, row: int, col: int) -> None:
        self._check_row(row)
        if not 0 <= col < self.n_cols:
            raise MatrixIndexError(
                f"column {col} out of range for {self.n_cols} columns"
            )

    def get(self, row: int, col: int) -> E:
        self._check_index(row, col)
        return self._values[row][col]

    def set(self, row: int, col: int, value: E) -> None:
        self._check_index(row, col)
        self._values[row][col] = self.field.validate(value)

    def __getitem__(self, key: tuple[int, int]) -> E:
        row, col = key
        return self.get(row, col)

    def __setitem__(self, key: tuple[int, int], value: E) -> None:
        row, col = key
        self.set(row, col, value)

    def row(self, row: int) -> list[E]:
        self._check_row(row)
        return list(self._values[row])

    def column(self, col: int) -> list[E]:
        self._check_index(0, col)
        return [r[col] for r in self._values]

    def to_lists(self) -> list[list[E]]:
        return [list(r) for r in self._values]

    def to_array(self, dtype=np.uint8) -> np.ndarray:
        return np.array(self._values, dtype=dtype)

    # elementary row operations

    def swap_rows(self, a: int, b: int) -> None:
        self._check_row(a)
        self._check_row(b)
        self._values[a], self._values[b] = self._values[b], self._values[a]

    def multiply_row(self, row: int, factor: E) -> None:
        self._check_row(row)
        f = self.field
        self._values[row] = [f.multiply(v, factor) for v in self._values[row]]

    def add_rows(self, src: int, dest: int, factor: E) -> None:
        """dest += src * factor"""
        self._check_row(src)
        self._check_row(dest)
        f = self.field
        src_row = self._values[src]
        self._values[dest] = [
            f.add(d, f.multiply(s, factor))
            for d, s in zip(self._values[dest], src_row)
        ]

    # whole-matrix operations

    def multiply(self, other: "Matrix[E]") -> "Matrix[E]":
        if self.n_cols != other.n_rows:
            raise DimensionMismatchError(
                f"cannot multiply {self.shape} by {other.shape}"
            )
        if self.field != other.field:
            raise DimensionMismatchError("matrices are over different fields")
        f = self.field
        result = Matrix(self.n_rows, other.n_cols, f)
        for i in range(self.n_rows):
            row = self._values[i]
            for j in range(other.n_cols):
                acc = f.zero()
                for k in range(self.n_cols):
                    acc = f.add(acc, f.multiply(row[k], other._values[k][j]))
                result._values[i][j] = acc
        return result

    def __matmul__(self, other: "Matrix[E]") -> "Matrix[E]":
        return self.multiply(other)

    def multiply_vector(self, vector: Sequence[E]) -> list[E]:
        if len(vector) != self.n_cols:
            raise DimensionMismatchError(
                f"cannot multiply {self.shape} by vector of length {len(vector)}"
            )
        f = self.field
        out = []
        for row in self._values:
            acc = f.zero()
            for a, x in zip(row, vector):
                acc = f.add(acc, f.multiply(a, x))
            out.append(acc)
        return out

    def transpose(self) -> "Matrix[E]":
        result = Matrix(self.n_cols, self.n_rows, self.field)
        result._values = [list(col) for col in zip(*self._values)]
        return result

    def augment(self, column: Sequence[E]) -> "Matrix[E]":
        """Return [self | column] as a new matrix."""
        if len(column) != self.n_rows:
            raise DimensionMismatchError(
                f"column of length {len(column)} does not fit {self.n_rows} rows"
            )
        return Matrix.from_rows(
            [row + [v] for row, v in zip(self._values, column)], self.field
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.shape != other.shape or self.field != other.field:
            return False
        f = self.field
        return all(
            f.equals(a, b)
            for ra, rb in zip(self._values, other._values)
            for a, b in zip(ra, rb)
        )

    __hash__ = None

    def __repr__(self):
        return f"Matrix(shape={self.shape}, field={self.field!r})"

    def __str__(self) -> str:
        return "\n".join(" ".join(str(v) for v in row) for row in self._values)
