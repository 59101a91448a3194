# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import Tuple

import numpy as np

from .errors import DimensionMismatchError, DomainError, SingularMatrixError
from .matrix import Matrix
from .utils import working_dtype

logger = logging.getLogger(__name__)


def lu_factorize(A: Matrix) -> Tuple[Matrix, Matrix, Matrix]:
    """
    LU factorization with partial pivoting on an n by n matrix A.

    Parameters
    ----------
    A : Matrix                   (n, n)
        Coefficient matrix, left untouched.

    Returns
    -------
    P : Matrix                   (n, n)
        Permutation matrix (identity with rows swapped alongside U).
    L : Matrix                   (n, n)
        Unit lower-triangular multipliers.
    U : Matrix                   (n, n)
        Upper-triangular factor, P A = L U.

    Raises
    ------
    DomainError : A is not square.
    SingularMatrixError : a column has no non-zero pivot candidate.
    """
    if not A.is_square():
        raise DomainError("Matrix must be square to LU factorize.")

    n = A.rows
    dtype = working_dtype(A.dtype)
    U = A.astype(dtype)
    P = Matrix.identity(n, dtype=dtype)
    lower = np.zeros((n, n), dtype=dtype)

    for col in range(n):
        # The computation we perform will be more stable if we
        # pick the largest possible number for the pivot column,
        # taken from the current row and below.
        candidates = [abs(U.get_val(row, col)) for row in range(col, n)]
        pivot_row = col + int(np.argmax(candidates))

        # Record the swap in P, and carry along the multipliers
        # already stored for earlier columns
        if pivot_row != col:
            logger.debug(f"LU: swapping rows {col} and {pivot_row}")
            U.swap_rows(col, pivot_row)
            P.swap_rows(col, pivot_row)
            lower[[col, pivot_row], :col] = lower[[pivot_row, col], :col]

        pivot = U.get_val(col, col)
        if pivot == 0:
            raise SingularMatrixError(f"Zero pivot in column {col}; matrix is singular.")

        # Eliminate entries below the pivot
        for row in range(col + 1, n):
            factor = U.get_val(row, col) / pivot
            if factor != 0:
                U.add_row(row, col, -factor)
                U.set_val(row, col, 0)
            lower[row, col] = factor

    lower[np.diag_indices(n)] = 1
    return P, Matrix.from_array(lower), U


def forward_substitute(L: Matrix, b: Matrix) -> Matrix:
    """
    Solve L y = b for lower-triangular L.

    Parameters
    ----------
    L : (n, n) Matrix
    b : (n, k) Matrix

    Returns
    -------
    y : (n, k) Matrix
    """
    if not L.is_square():
        raise DomainError("Triangular solve needs a square matrix.")
    if b.rows != L.rows:
        raise DimensionMismatchError(
            f"Right-hand side has {b.rows} rows, expected {L.rows}."
        )
    lo = np.asarray(L)
    c = np.asarray(b)
    n, k = c.shape
    y = np.zeros((n, k), dtype=np.result_type(working_dtype(lo.dtype), c.dtype))

    for i in range(n):
        pivot = lo[i, i]
        if pivot == 0:
            raise SingularMatrixError(f"Zero on the diagonal at row {i}.")
        y[i] = (c[i] - lo[i, :i] @ y[:i]) / pivot

    return Matrix.from_array(y)


def back_substitute(U: Matrix, c: Matrix) -> Matrix:
    """
    Solve U x = c for upper-triangular U.

    Parameters
    ----------
    U : (n, n) Matrix
        Upper-triangular matrix (output of lu_factorize).
    c : (n, k) Matrix
        RHS after the same row operations.

    Returns
    -------
    x : (n, k) Matrix
    """
    if not U.is_square():
        raise DomainError("Triangular solve needs a square matrix.")
    if c.rows != U.rows:
        raise DimensionMismatchError(
            f"Right-hand side has {c.rows} rows, expected {U.rows}."
        )
    up = np.asarray(U)
    rhs = np.asarray(c)
    n, k = rhs.shape
    x = np.zeros((n, k), dtype=np.result_type(working_dtype(up.dtype), rhs.dtype))

    for i in reversed(range(n)):
        pivot = up[i, i]
        if pivot == 0:
            raise SingularMatrixError(f"Zero on the diagonal at row {i}.")
        x[i] = (rhs[i] - up[i, i + 1 :] @ x[i + 1 :]) / pivot

    return Matrix.from_array(x)


def lu_solve(A: Matrix, b: Matrix) -> Matrix:
    """Solve A x = b through P A = L U: L y = P b, then U x = y."""
    P, L, U = lu_factorize(A)
    y = forward_substitute(L, P * b)
    return back_substitute(U, y)
