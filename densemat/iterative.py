# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Stationary and Krylov iterative solvers: Jacobi, Gauss-Seidel and
Conjugate Gradient.

Jacobi and Gauss-Seidel run a fixed number of sweeps by default; pass
`tol` to stop early once successive iterates agree to within `tol`.
"""

import logging
from typing import Optional

import numpy as np

from .errors import DimensionMismatchError, DomainError, SingularMatrixError
from .matrix import Matrix
from .norms import inner_product, v_norm
from .utils import CG_TOLERANCE, ITERATIVE_STEPS, working_dtype

logger = logging.getLogger(__name__)


def _check_system(A: Matrix, b: Matrix, x0: Optional[Matrix] = None) -> None:
    if not A.is_square():
        raise DomainError("Matrix must be square to solve.")
    if b.get_size() != (A.rows, 1):
        raise DimensionMismatchError(
            f"Right-hand side must be a {A.rows}x1 column, got {b.shape}."
        )
    if x0 is not None and x0.get_size() != (A.rows, 1):
        raise DimensionMismatchError(
            f"x0 must be a {A.rows}x1 column, got {x0.shape}."
        )


def _check_diag_dom(A: Matrix, name: str) -> None:
    if not A.is_diag_dom():
        raise DomainError(f"{name} requires a diagonally dominant matrix.")
    for i, a_ii in enumerate(A.get_diag()):
        if a_ii == 0:
            raise SingularMatrixError(f"{name}: zero on the diagonal at row {i}.")


def jacobi(
    A: Matrix,
    b: Matrix,
    n_iter: int = ITERATIVE_STEPS,
    tol: Optional[float] = None,
    x0: Optional[Matrix] = None,
) -> Matrix:
    """
    Jacobi iteration x <- D^-1 (b - R x) with A = D + R.

    Parameters
    ----------
    A : (n, n) Matrix, diagonally dominant
    b : (n, 1) Matrix
    n_iter : int
        Number of iterations to run.
    tol : float | None
        If given, stop once ||x_new - x||_2 < tol.
    x0 : (n, 1) Matrix | None
        Starting guess, b when omitted.
    """
    _check_system(A, b, x0)
    _check_diag_dom(A, "Jacobi")

    n = A.rows
    dtype = np.result_type(working_dtype(A.dtype), b.dtype)
    inv_d = Matrix(n, n, lambda i, j: 1 / A.get_val(i, j) if i == j else 0, dtype=dtype)
    R = A.l_triangular() + A.u_triangular()
    x = (b if x0 is None else x0).astype(dtype)

    for k in range(n_iter):
        x_new = inv_d * (b - R * x)
        if tol is not None and v_norm(x_new - x, 2) < tol:
            logger.debug(f"Jacobi converged after {k + 1} iterations")
            return x_new
        x = x_new

    return x


def gauss_seidel(
    A: Matrix,
    b: Matrix,
    n_iter: int = ITERATIVE_STEPS,
    tol: Optional[float] = None,
    x0: Optional[Matrix] = None,
) -> Matrix:
    """
    Gauss-Seidel sweeps: like Jacobi, but each x_i is overwritten as
    soon as it is computed and reused within the same sweep.

    Parameters are as for `jacobi`.
    """
    _check_system(A, b, x0)
    _check_diag_dom(A, "Gauss-Seidel")

    a = np.asarray(A)
    rhs = np.asarray(b).ravel()
    dtype = np.result_type(working_dtype(a.dtype), rhs.dtype)
    x = np.asarray(b if x0 is None else x0, dtype=dtype).ravel()
    n = a.shape[0]

    for k in range(n_iter):
        previous = x.copy()
        for i in range(n):
            s = a[i, :i] @ x[:i] + a[i, i + 1 :] @ x[i + 1 :]
            x[i] = (rhs[i] - s) / a[i, i]
        if tol is not None and np.linalg.norm((x - previous).astype(float)) < tol:
            logger.debug(f"Gauss-Seidel converged after {k + 1} sweeps")
            break

    return Matrix.from_array(x)


def conjugate_gradient(
    A: Matrix,
    b: Matrix,
    n_iter: int = ITERATIVE_STEPS,
    tol: float = CG_TOLERANCE,
) -> Matrix:
    """
    Conjugate Gradient from a zero starting vector.

    Stops after `n_iter` steps or once two successive residual vectors
    differ by less than `tol` in the 2-norm. Meaningful for symmetric
    positive definite A.

    Raises
    ------
    DomainError : a search direction has p^T A p == 0.
    """
    _check_system(A, b)

    dtype = np.result_type(working_dtype(A.dtype), b.dtype)
    x = Matrix.zeros(A.rows, 1, dtype=dtype)
    r = b.astype(dtype)
    p = r.copy()
    rs_old = inner_product(r, r)

    for k in range(n_iter):
        if rs_old == 0:
            logger.debug(f"CG: exact solution after {k} iterations")
            break
        Ap = A * p
        curvature = inner_product(p, Ap)
        if curvature == 0:
            raise DomainError("Conjugate gradient requires a positive definite matrix.")
        alpha = rs_old / curvature
        x = x + alpha * p
        r_new = r - alpha * Ap
        if v_norm(r_new - r, 2) < tol:
            logger.debug(f"CG converged after {k + 1} iterations")
            break
        rs_new = inner_product(r_new, r_new)
        p = r_new + (rs_new / rs_old) * p
        r, rs_old = r_new, rs_new

    return x
