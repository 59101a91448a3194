# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import enum
import logging

from .elimination import lu_solve
from .errors import DimensionMismatchError, DomainError
from .iterative import conjugate_gradient, gauss_seidel, jacobi
from .matrix import Matrix, as_matrix
from .tridiagonal import thomas_solve
from .utils import working_dtype

logger = logging.getLogger(__name__)


class Method(enum.Enum):
    """Algorithm used by `solve`."""

    LU = "lu"
    JACOBI = "jacobi"
    THOMPSON = "thompson"  # Thomas tridiagonal elimination
    GAUSS_SEIDEL = "gauss_seidel"
    CONJUGATE_GRADIENT = "conjugate_gradient"


_SOLVERS = {
    Method.LU: lu_solve,
    Method.JACOBI: jacobi,
    Method.THOMPSON: thomas_solve,
    Method.GAUSS_SEIDEL: gauss_seidel,
    Method.CONJUGATE_GRADIENT: conjugate_gradient,
}


def solve(A, b, method: Method = Method.LU) -> Matrix:
    """
    Solve A x = b with the requested algorithm.

    Every precondition (squareness, right-hand side shape, and the
    structure the chosen method needs) is checked before any numeric
    work; nothing is retried with a different method on failure.

    Parameters
    ----------
    A : (n, n) Matrix or array-like
    b : (n, 1) Matrix, or array-like of length n
    method : Method

    Returns
    -------
    x : (n, 1) Matrix
    """
    A = as_matrix(A)
    b = as_matrix(b)
    method = Method(method)

    if not A.is_square():
        raise DomainError(f"Matrix must be square to solve, got {A.shape}.")
    if b.get_size() != (A.rows, 1):
        raise DimensionMismatchError(
            f"Right-hand side must be a {A.rows}x1 column, got {b.shape}."
        )
    if A.rows == 0:
        return Matrix.zeros(0, 1, dtype=working_dtype(A.dtype))

    logger.debug(f"solve: {A.rows}x{A.cols} system with {method.name}")
    return _SOLVERS[method](A, b)
