"""Dense row-major matrix over real or complex floating point scalars."""

from __future__ import annotations

import numbers
from typing import Callable, Iterable, Sequence

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from matrixqr.core.exceptions import (
    DimensionMismatchError,
    ElementTypeError,
    OutOfBoundsError,
)

ROUND_ZERO_TOLERANCE = 1e-12

Range = tuple[int, int]


def _resolve_dtype(dtype: DTypeLike | None, values: Iterable = ()) -> np.dtype:
    """Pick the element dtype, rejecting anything but float or complex."""
    if dtype is None:
        is_complex = any(
            isinstance(v, (complex, np.complexfloating)) for v in values
        )
        return np.dtype(np.complex128 if is_complex else np.float64)

    resolved = np.dtype(dtype)
    if resolved.kind not in ("f", "c"):
        raise ElementTypeError(
            f"Matrix elements must be real or complex floating point, "
            f"got dtype '{resolved}'",
            dtype=resolved,
        )
    return resolved


def _check_size(value: object, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise DimensionMismatchError(
            f"{what} must be an integer, got {type(value).__name__}",
            actual=value,
        )
    if value <= 0:
        raise DimensionMismatchError(
            f"{what} must be greater than zero, got {value}",
            expected="> 0",
            actual=value,
        )
    return int(value)


def _is_scalar(value: object) -> bool:
    return isinstance(value, (numbers.Number, np.number)) and not isinstance(
        value, bool
    )


class Matrix:
    """
    Dense matrix owning a flat row-major buffer.

    The number of columns is not stored: it is derived as
    ``buffer.size // rows`` and is zero for the empty matrix. Every Matrix
    exclusively owns its buffer; copies are deep and results of arithmetic
    are fresh matrices.

    Construction forms:
        Matrix()                   empty matrix (rows == 0)
        Matrix(n)                  n x n zero matrix
        Matrix(rows, columns, v)   rows x columns matrix filled with v
        Matrix.from_diagonal(seq)  square diagonal matrix
        Matrix.from_rows(rows)     literal nested rows
        Matrix.identity(n, v=1)    diagonal matrix with v on the diagonal
    """

    # Make numpy scalars defer to Matrix.__rmul__ instead of broadcasting.
    __array_ufunc__ = None
    __hash__ = None

    def __init__(
        self,
        rows: int | None = None,
        columns: int | None = None,
        value: complex = 0.0,
        dtype: DTypeLike | None = None,
    ):
        resolved = _resolve_dtype(dtype, (value,))

        if rows is None:
            if columns is not None:
                raise DimensionMismatchError(
                    "Number of rows is required when columns are given",
                    actual=(rows, columns),
                )
            self._rows = 0
            self._buffer = np.empty(0, dtype=resolved)
            return

        rows = _check_size(rows, "Number of matrix rows")
        if columns is None:
            columns = rows
            if value != 0:
                raise DimensionMismatchError(
                    "A fill value needs an explicit column count",
                    actual=(rows, columns),
                )
        else:
            columns = _check_size(columns, "Number of matrix columns")

        self._rows = rows
        self._buffer = np.full(rows * columns, value, dtype=resolved)

    @classmethod
    def _from_buffer(cls, rows: int, buffer: NDArray) -> Matrix:
        """Wrap an already owned flat buffer without copying."""
        matrix = cls.__new__(cls)
        matrix._rows = rows
        matrix._buffer = buffer
        return matrix

    @classmethod
    def from_diagonal(
        cls, values: Sequence[complex], dtype: DTypeLike | None = None
    ) -> Matrix:
        """Square matrix with `values` on the diagonal and zeros elsewhere."""
        values = list(values)
        if not values:
            raise DimensionMismatchError(
                "List to create a diagonal matrix must not be empty",
                expected="non-empty sequence",
                actual=0,
            )
        resolved = _resolve_dtype(dtype, values)

        size = len(values)
        buffer = np.zeros(size * size, dtype=resolved)
        buffer[:: size + 1] = values
        return cls._from_buffer(size, buffer)

    @classmethod
    def from_rows(
        cls, rows: Sequence[Sequence[complex]], dtype: DTypeLike | None = None
    ) -> Matrix:
        """
        Build a matrix from literal nested rows.

        Args:
            rows: Non-empty sequence of equally long, non-empty rows
            dtype: Element dtype; inferred from the values if omitted

        Returns:
            Matrix with ``len(rows)`` rows

        Raises:
            DimensionMismatchError: If there are no rows, the first row is
                empty, or the rows differ in length
        """
        rows = [list(row) for row in rows]
        if not rows:
            raise DimensionMismatchError(
                "Number of matrix rows must be greater than zero",
                expected="> 0",
                actual=0,
            )

        columns = len(rows[0])
        if columns == 0:
            raise DimensionMismatchError(
                "Number of matrix columns must be greater than zero",
                expected="> 0",
                actual=0,
            )
        for idx, row in enumerate(rows):
            if len(row) != columns:
                raise DimensionMismatchError(
                    f"Row {idx} has {len(row)} elements, expected {columns}",
                    expected=columns,
                    actual=len(row),
                )

        flat = [value for row in rows for value in row]
        resolved = _resolve_dtype(dtype, flat)
        return cls._from_buffer(len(rows), np.array(flat, dtype=resolved))

    @classmethod
    def from_array(cls, array: ArrayLike, dtype: DTypeLike | None = None) -> Matrix:
        """Copy a 2-D array into a new Matrix."""
        arr = np.asarray(array)
        if arr.ndim != 2 or arr.shape[0] == 0 or arr.shape[1] == 0:
            raise DimensionMismatchError(
                f"Expected a non-empty 2-D array, got shape {arr.shape}",
                expected="(rows > 0, columns > 0)",
                actual=arr.shape,
            )
        if dtype is None:
            dtype = np.complex128 if np.iscomplexobj(arr) else np.float64
        resolved = _resolve_dtype(dtype)
        return cls._from_buffer(arr.shape[0], arr.astype(resolved).reshape(-1))

    @classmethod
    def identity(
        cls, size: int, value: complex = 1.0, dtype: DTypeLike | None = None
    ) -> Matrix:
        """Diagonal matrix of the given size with `value` on the diagonal."""
        size = _check_size(size, "Size of an identity matrix")
        return cls.from_diagonal([value] * size, dtype=dtype)

    @staticmethod
    def transposed(matrix: Matrix) -> Matrix:
        res = matrix.copy()
        res.transpose()
        return res

    @staticmethod
    def conjugated(matrix: Matrix) -> Matrix:
        res = matrix.copy()
        res.conjugate()
        return res

    # Shape

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return 0 if self._rows == 0 else self._buffer.size // self._rows

    @property
    def size(self) -> int:
        return self._buffer.size

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.columns

    @property
    def dtype(self) -> np.dtype:
        return self._buffer.dtype

    @property
    def is_complex(self) -> bool:
        return self._buffer.dtype.kind == "c"

    # Ownership

    def copy(self) -> Matrix:
        """Independent deep copy."""
        return Matrix._from_buffer(self._rows, self._buffer.copy())

    def __copy__(self) -> Matrix:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> Matrix:
        return self.copy()

    def move(self) -> Matrix:
        """
        Transfer the buffer to a new Matrix and reset this one to empty.

        After the move this matrix has ``rows == 0`` and an empty buffer. It
        must only be used as the target of `assign` afterwards.
        """
        moved = Matrix._from_buffer(self._rows, self._buffer)
        self._rows = 0
        self._buffer = np.empty(0, dtype=moved.dtype)
        return moved

    def assign(self, other: Matrix) -> Matrix:
        """Replace the contents of this matrix with a deep copy of `other`."""
        self._rows = other._rows
        self._buffer = other._buffer.copy()
        return self

    def to_array(self) -> NDArray:
        """Return a 2-D copy of the data."""
        return self._view().copy()

    def _view(self) -> NDArray:
        return self._buffer.reshape(self.rows, self.columns)

    # Element access

    def _flat_index(self, key: tuple[int, int]) -> int:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError("Matrix indices must be a (row, column) pair")

        row_idx, col_idx = key
        if row_idx < 0 or col_idx < 0:
            raise OutOfBoundsError(
                f"Requested indexes ({row_idx}, {col_idx}) are negative",
                index=key,
                bounds=self.shape,
            )

        flat = self.columns * row_idx + col_idx
        if flat >= self._buffer.size:
            raise OutOfBoundsError(
                f"Requested indexes ({row_idx}, {col_idx}) are outside the "
                f"{self.rows}x{self.columns} matrix boundaries",
                index=key,
                bounds=self.shape,
            )
        return flat

    def __getitem__(self, key: tuple[int, int]):
        return self._buffer[self._flat_index(key)]

    def __setitem__(self, key: tuple[int, int], value: complex) -> None:
        self._buffer[self._flat_index(key)] = value

    # Arithmetic

    def _check_same_shape(self, other: Matrix, operation: str) -> None:
        if self.shape != other.shape:
            raise DimensionMismatchError(
                f"Matrix shapes must be equal for {operation}: "
                f"{self.rows}x{self.columns} vs {other.rows}x{other.columns}",
                expected=self.shape,
                actual=other.shape,
            )

    def _product(self, other: Matrix) -> Matrix:
        if self.columns != other.rows:
            raise DimensionMismatchError(
                f"Matrix dimension mismatch for multiplication: "
                f"{self.rows}x{self.columns} * {other.rows}x{other.columns}",
                expected=self.columns,
                actual=other.rows,
            )
        result = self._view() @ other._view()
        return Matrix._from_buffer(self.rows, result.reshape(-1))

    def __add__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "addition")
        return Matrix._from_buffer(self._rows, self._buffer + other._buffer)

    def __iadd__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "addition")
        self._buffer = self._buffer + other._buffer
        return self

    def __sub__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "subtraction")
        return Matrix._from_buffer(self._rows, self._buffer - other._buffer)

    def __isub__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "subtraction")
        self._buffer = self._buffer - other._buffer
        return self

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return self._product(other)
        if _is_scalar(other):
            return Matrix._from_buffer(self._rows, self._buffer * other)
        return NotImplemented

    def __rmul__(self, other):
        if _is_scalar(other):
            return Matrix._from_buffer(self._rows, other * self._buffer)
        return NotImplemented

    def __imul__(self, other):
        if isinstance(other, Matrix):
            product = self._product(other)
            self._rows, self._buffer = product._rows, product._buffer
            return self
        if _is_scalar(other):
            self._buffer = self._buffer * other
            return self
        return NotImplemented

    def __matmul__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._product(other)

    def __imatmul__(self, other: Matrix) -> Matrix:
        return self.__imul__(other) if isinstance(other, Matrix) else NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(
            np.array_equal(self._buffer, other._buffer)
        )

    def allclose(
        self, other: Matrix, rtol: float = 1e-9, atol: float = 1e-12
    ) -> bool:
        """Tolerance-based comparison for results of numeric algorithms."""
        self._check_same_shape(other, "comparison")
        return bool(np.allclose(self._buffer, other._buffer, rtol=rtol, atol=atol))

    # Element-wise transforms

    def apply_to_each(self, func: Callable) -> None:
        """Replace every element, in buffer order, by ``func(value)``."""
        for i in range(self._buffer.size):
            self._buffer[i] = func(self._buffer[i])

    def apply_to_each_indexed(self, func: Callable) -> None:
        """
        Replace every element by ``func(value, row, column)``.

        The position is derived from the flat index ``i`` as
        ``(i // rows, i % rows)``: the divisor is the row count, so for
        non-square matrices the reported position differs from the
        row-major position of the element.
        """
        rows = self.rows
        for i in range(self._buffer.size):
            self._buffer[i] = func(self._buffer[i], i // rows, i % rows)

    def round_zeroes(self, tolerance: float = ROUND_ZERO_TOLERANCE) -> None:
        """Set elements with magnitude below `tolerance` to exactly zero."""
        self._buffer[np.abs(self._buffer) < tolerance] = 0

    # Extraction

    def get_diag(self, transpose: bool = False) -> Matrix:
        """Leading diagonal as a column vector, or a row vector if transposed."""
        size = min(self.rows, self.columns)
        if size == 0:
            raise DimensionMismatchError(
                "Cannot take the diagonal of an empty matrix", actual=self.shape
            )

        res = Matrix._from_buffer(size, self._view().diagonal().copy())
        if transpose:
            res.transpose()
        return res

    def get_row(self, index: int) -> Matrix:
        if not 0 <= index < self.rows:
            raise OutOfBoundsError(
                f"Row index {index} must be less than the number of matrix "
                f"rows ({self.rows})",
                index=index,
                bounds=self.rows,
            )
        return Matrix._from_buffer(1, self._view()[index, :].copy())

    def get_column(self, index: int) -> Matrix:
        if not 0 <= index < self.columns:
            raise OutOfBoundsError(
                f"Column index {index} must be less than the number of matrix "
                f"columns ({self.columns})",
                index=index,
                bounds=self.columns,
            )
        return Matrix._from_buffer(self.rows, self._view()[:, index].copy())

    def get_submatrix(self, row_range: Range, column_range: Range) -> Matrix:
        """
        Copy a rectangular block given half-open ``(start, end)`` bounds.

        Args:
            row_range: Rows ``start .. end - 1``
            column_range: Columns ``start .. end - 1``

        Returns:
            Matrix of shape ``(row_end - row_start, column_end - column_start)``
        """
        for (start, end), limit, axis in (
            (row_range, self.rows, "row"),
            (column_range, self.columns, "column"),
        ):
            if not 0 <= start < end <= limit:
                raise OutOfBoundsError(
                    f"Submatrix {axis} range [{start}, {end}) is outside "
                    f"[0, {limit})",
                    index=(start, end),
                    bounds=limit,
                )

        (r0, r1), (c0, c1) = row_range, column_range
        block = self._view()[r0:r1, c0:c1]
        return Matrix._from_buffer(r1 - r0, block.reshape(-1).copy())

    # Transposition

    def transpose(self) -> None:
        """
        Transpose in place by following permutation cycles of the buffer.

        The element at flat index ``k`` moves to ``(rows * k) mod (size - 1)``;
        the last index stays fixed. Each cycle is walked once, swapping
        along it, so only a visited marker is needed besides the buffer.
        """
        buffer = self._buffer
        size = buffer.size
        columns = self.columns

        if size > 1:
            last_idx = size - 1
            visited = np.zeros(size, dtype=bool)

            for i in range(1, size):
                if visited[i]:
                    continue

                swap_idx = i
                while True:
                    if swap_idx != last_idx:
                        swap_idx = (self._rows * swap_idx) % last_idx
                    buffer[swap_idx], buffer[i] = buffer[i], buffer[swap_idx]
                    visited[swap_idx] = True
                    if swap_idx == i:
                        break

        self._rows = columns

    def conjugate(self) -> None:
        """Conjugate transpose in place; same as `transpose` for real data."""
        self.transpose()
        if self.is_complex:
            np.conjugate(self._buffer, out=self._buffer)

    # Formatting

    def __str__(self) -> str:
        lines = []
        for i in range(self.rows):
            row = self._buffer[i * self.columns:(i + 1) * self.columns]
            lines.append("[" + " ".join(str(value) for value in row) + "]")
        return "[" + "\n".join(lines) + "]"

    def __repr__(self) -> str:
        return f"Matrix(rows={self.rows}, columns={self.columns}, dtype={self.dtype})"
