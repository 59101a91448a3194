# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Dense matrix container and the algebra defined on it.
"""

import numbers
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import DimensionMismatchError, DomainError, OutOfRangeError
from .utils import EIGEN_STEPS, kronecker

# Cell generator: (row, col) -> value
BinaryDual = Callable[[int, int], Any]


class Matrix:
    """
    An m by n grid of numbers backed by a 2-D ndarray.

    The element type is the array dtype (float by default). Apart from
    the explicitly named in-place mutators, every operation returns a
    new Matrix and leaves its operands untouched.

    Parameters
    ----------
    m, n : int
        Number of rows and columns.
    val_map : callable (i, j) -> value
        Evaluated once per cell, row-major, to fill the matrix.
        Defaults to the Kronecker delta (identity).
    dtype : numpy dtype
        Element type.
    """

    # make ndarray and numpy scalar operators defer to ours
    __array_ufunc__ = None

    def __init__(
        self,
        m: int = 3,
        n: int = 3,
        val_map: BinaryDual = kronecker,
        *,
        dtype=float,
    ):
        if m < 0 or n < 0:
            raise DimensionMismatchError(
                f"Matrix dimensions must be non-negative, got {m}x{n}."
            )
        self._m = int(m)
        self._n = int(n)
        self._data = np.zeros((self._m, self._n), dtype=dtype)
        self.fill_with(val_map)

    # ------------------------------------------------------------------
    # Alternate constructors
    # ------------------------------------------------------------------
    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]], dtype=float) -> "Matrix":
        """Build a matrix from a literal, rectangular nested sequence."""
        grid = [list(row) for row in rows]
        if not grid:
            return cls(0, 0, dtype=dtype)
        width = len(grid[0])
        for row in grid:
            if len(row) != width:
                raise DimensionMismatchError("2D array must be rectangular.")
        return cls(len(grid), width, lambda i, j: grid[i][j], dtype=dtype)

    @classmethod
    def from_array(cls, array) -> "Matrix":
        """Copy a 1-D (treated as a column) or 2-D array-like."""
        arr = np.array(array, copy=True)
        if arr.ndim == 1:
            arr = arr[:, None]
        if arr.ndim != 2:
            raise DimensionMismatchError(
                f"Expected a 1-D or 2-D array, got {arr.ndim} dimensions."
            )
        out = cls(0, 0, dtype=arr.dtype)
        out._m, out._n = arr.shape
        out._data = arr
        return out

    @classmethod
    def convert(cls, another: "Matrix", dtype=float) -> "Matrix":
        """Element-wise numeric conversion of `another` to `dtype`."""
        m, n = another.get_size()
        return cls(m, n, lambda a, b: another.get_val(a, b), dtype=dtype)

    @classmethod
    def diagonal(cls, values: Sequence[Any], dtype=float) -> "Matrix":
        values = list(values)
        return cls(
            len(values),
            len(values),
            lambda a, b: values[a] if a == b else 0,
            dtype=dtype,
        )

    @classmethod
    def identity(cls, m: int, dtype=float) -> "Matrix":
        return cls.diagonal([1] * m, dtype=dtype)

    @classmethod
    def zeros(cls, m: int, n: int, dtype=float) -> "Matrix":
        return cls(m, n, lambda a, b: 0, dtype=dtype)

    @classmethod
    def column(cls, values: Iterable[Any], dtype=float) -> "Matrix":
        values = list(values)
        return cls(len(values), 1, lambda a, b: values[a], dtype=dtype)

    def astype(self, dtype) -> "Matrix":
        return Matrix.convert(self, dtype)

    def copy(self) -> "Matrix":
        return Matrix.from_array(self._data)

    # ------------------------------------------------------------------
    # Size and element access
    # ------------------------------------------------------------------
    def get_size(self) -> Tuple[int, int]:
        return self._m, self._n

    @property
    def shape(self) -> Tuple[int, int]:
        return self._m, self._n

    @property
    def rows(self) -> int:
        return self._m

    @property
    def cols(self) -> int:
        return self._n

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def is_in_bounds(self, i: int, j: int) -> bool:
        return 0 <= i < self._m and 0 <= j < self._n

    def get_val(self, i: int, j: int):
        if not self.is_in_bounds(i, j):
            raise OutOfRangeError(
                f"Matrix index ({i}, {j}) out of range for {self._m}x{self._n}."
            )
        return self._data[i, j]

    def set_val(self, i: int, j: int, val) -> None:
        if not self.is_in_bounds(i, j):
            raise OutOfRangeError(
                f"Matrix index ({i}, {j}) out of range for {self._m}x{self._n}."
            )
        self._data[i, j] = val

    def __getitem__(self, key):
        i, j = key
        return self.get_val(i, j)

    def __setitem__(self, key, val):
        i, j = key
        self.set_val(i, j, val)

    def fill_with(self, val_map: BinaryDual) -> None:
        """Reassign every cell to val_map(i, j), row-major."""
        for i in range(self._m):
            for j in range(self._n):
                self._data[i, j] = val_map(i, j)

    def to_numpy(self) -> np.ndarray:
        return self._data.copy()

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self._data.copy()
        return self._data.astype(dtype)

    # ------------------------------------------------------------------
    # Structural queries
    # ------------------------------------------------------------------
    def is_square(self) -> bool:
        return self._m == self._n

    def is_diagonal(self) -> bool:
        for i in range(self._m):
            for j in range(self._n):
                if i != j and self._data[i, j] != 0:
                    return False
        return True

    def is_diag_dom(self) -> bool:
        """
        Classical (weak) row diagonal dominance:
        |a_ii| >= sum_{j != i} |a_ij| for every row i.

        Non-square matrices are never diagonally dominant.
        """
        if not self.is_square():
            return False
        for i in range(self._m):
            off = 0
            for j in range(self._n):
                if i != j:
                    off += abs(self._data[i, j])
            if abs(self._data[i, i]) < off:
                return False
        return True

    def is_n_diagonal(self, n: int) -> bool:
        """
        True when every non-zero entry lies within the band of width n
        centred on the main diagonal (n = 3 means tridiagonal).
        """
        if n < 1 or n % 2 == 0:
            raise DomainError(f"Band width must be a positive odd number, got {n}.")
        if not self.is_square():
            raise DomainError("Matrix must be square to test for bandedness.")
        half = (n - 1) // 2
        size = self._m
        for i in range(size):
            lo = max(0, i - half)
            hi = min(size - 1, i + half)
            for j in range(size):
                if (j < lo or j > hi) and self._data[i, j] != 0:
                    return False
        return True

    def get_diag(self) -> List[Any]:
        if not self.is_square():
            raise DomainError("Cannot get diagonal of non-square matrix.")
        return [self._data[i, i] for i in range(self._m)]

    def trace(self):
        if not self.is_square():
            raise DomainError("Matrix must be square to find trace.")
        total = self._data.dtype.type(0)
        for i in range(self._m):
            total += self._data[i, i]
        return total

    def get_min(self):
        if self._data.size == 0:
            raise DomainError("Empty matrix has no minimum.")
        return self._data.min()

    def get_max(self):
        if self._data.size == 0:
            raise DomainError("Empty matrix has no maximum.")
        return self._data.max()

    def l_triangular(self) -> "Matrix":
        """Entries strictly below the diagonal, zero elsewhere."""
        return Matrix(
            self._m,
            self._n,
            lambda a, b: self._data[a, b] if a > b else 0,
            dtype=self.dtype,
        )

    def u_triangular(self) -> "Matrix":
        """Entries strictly above the diagonal, zero elsewhere."""
        return Matrix(
            self._m,
            self._n,
            lambda a, b: self._data[a, b] if a < b else 0,
            dtype=self.dtype,
        )

    # ------------------------------------------------------------------
    # Elementary row / column operations (in place)
    # ------------------------------------------------------------------
    def _check_row(self, i: int) -> None:
        if not 0 <= i < self._m:
            raise OutOfRangeError(f"Row {i} out of range for {self._m} rows.")

    def _check_col(self, j: int) -> None:
        if not 0 <= j < self._n:
            raise OutOfRangeError(f"Column {j} out of range for {self._n} columns.")

    def swap_rows(self, i: int, k: int) -> None:
        self._check_row(i)
        self._check_row(k)
        if i != k:
            self._data[[i, k]] = self._data[[k, i]]

    def swap_cols(self, j: int, k: int) -> None:
        self._check_col(j)
        self._check_col(k)
        if j != k:
            self._data[:, [j, k]] = self._data[:, [k, j]]

    def multiply_row(self, i: int, scalar) -> None:
        self._check_row(i)
        self._data[i, :] *= self._cast(scalar)

    def multiply_col(self, j: int, scalar) -> None:
        self._check_col(j)
        self._data[:, j] *= self._cast(scalar)

    def add_row(self, dst: int, src: int, scale=1) -> None:
        """row[dst] += scale * row[src]"""
        self._check_row(dst)
        self._check_row(src)
        self._data[dst, :] += self._cast(scale) * self._data[src, :]

    def add_col(self, dst: int, src: int, scale=1) -> None:
        """col[dst] += scale * col[src]"""
        self._check_col(dst)
        self._check_col(src)
        self._data[:, dst] += self._cast(scale) * self._data[:, src]

    def transpose(self) -> None:
        """Transpose in place; rectangular matrices are reallocated."""
        self._data = np.ascontiguousarray(self._data.T)
        self._m, self._n = self._n, self._m

    def transposed(self) -> "Matrix":
        out = self.copy()
        out.transpose()
        return out

    # ------------------------------------------------------------------
    # Reshaping
    # ------------------------------------------------------------------
    def flatten(self) -> "Matrix":
        """Reshape into an (m*n) by 1 column, row-major."""
        n = self._n
        return Matrix(
            self._m * self._n,
            1,
            lambda a, b: self._data[a // n, a % n],
            dtype=self.dtype,
        )

    def square_up(self, m: int, n: int) -> "Matrix":
        """Inverse of flatten(): fold an (m*n) by 1 column into m by n."""
        if self._n != 1:
            raise DomainError("Only a column vector can be squared up.")
        if self._m != m * n:
            raise DomainError(
                f"Cannot fold {self._m} entries into a {m}x{n} matrix."
            )
        return Matrix(m, n, lambda a, b: self._data[a * n + b, 0], dtype=self.dtype)

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------
    def _cast(self, scalar):
        """Convert a scalar to this matrix's element type."""
        return self._data.dtype.type(scalar)

    def add(self, another: "Matrix") -> "Matrix":
        if self.get_size() != another.get_size():
            raise DimensionMismatchError(
                f"Can not be added, wrong dimensions: {self.shape} and {another.shape}."
            )
        return Matrix.from_array(self._data + another._data)

    def subtract(self, another: "Matrix") -> "Matrix":
        if self.get_size() != another.get_size():
            raise DimensionMismatchError(
                f"Can not be subtracted, wrong dimensions: {self.shape} and {another.shape}."
            )
        return Matrix.from_array(self._data - another._data)

    def scalar_mult(self, scalar) -> "Matrix":
        s = self._cast(scalar)
        return Matrix(
            self._m, self._n, lambda a, b: s * self._data[a, b], dtype=self.dtype
        )

    def multiply(self, another: "Matrix") -> "Matrix":
        m, n = self.get_size()
        M, N = another.get_size()
        if n != M:
            raise DimensionMismatchError(
                f"Matrices can not be multiplied: {m}x{n} by {M}x{N}."
            )
        return Matrix.from_array(self._data @ another._data)

    def is_equal_to(self, another: "Matrix") -> bool:
        if self.get_size() != another.get_size():
            return False
        return bool(np.all(self._data == another._data))

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self):
        return self.scalar_mult(-1)

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return self.multiply(other)
        if isinstance(other, numbers.Number):
            return self.scalar_mult(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, numbers.Number):
            return self.scalar_mult(other)
        return NotImplemented

    def __matmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.multiply(other)

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.is_equal_to(other)

    def __ne__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return not self.is_equal_to(other)

    __hash__ = None

    # ------------------------------------------------------------------
    # Spectral helpers (see densemat.eigen)
    # ------------------------------------------------------------------
    def largest_eigenpair(self, n_iter: int = EIGEN_STEPS, x0: Optional["Matrix"] = None):
        from .eigen import largest_eigenpair

        return largest_eigenpair(self, n_iter=n_iter, x0=x0)

    def smallest_eigenpair(self, n_iter: int = EIGEN_STEPS, x0: Optional["Matrix"] = None):
        from .eigen import smallest_eigenpair

        return smallest_eigenpair(self, n_iter=n_iter, x0=x0)

    def condition_number(self, n_iter: int = EIGEN_STEPS, x0: Optional["Matrix"] = None):
        from .eigen import condition_number

        return condition_number(self, n_iter=n_iter, x0=x0)

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        return "\n".join(
            " ".join(str(v) for v in self._data[i]) for i in range(self._m)
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._m}x{self._n}, dtype={self.dtype})"


def as_matrix(obj, dtype=None) -> Matrix:
    """
    Coerce a Matrix, ndarray or nested list into a Matrix.

    1-D input becomes a column vector. Matrices are returned as-is
    unless a different dtype is requested.
    """
    if isinstance(obj, Matrix):
        if dtype is None or np.dtype(dtype) == obj.dtype:
            return obj
        return obj.astype(dtype)
    arr = np.asarray(obj) if dtype is None else np.asarray(obj, dtype=dtype)
    return Matrix.from_array(arr)
