# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Thomas algorithm for tridiagonal systems
"""

import logging
from typing import List, Tuple

import numpy as np

from .errors import DimensionMismatchError, DomainError, SingularMatrixError
from .matrix import Matrix
from .utils import working_dtype

logger = logging.getLogger(__name__)


def tridiagonal_bands(A: Matrix) -> Tuple[List, List, List]:
    """
    Split a tridiagonal matrix into its three diagonals.

    Returns
    -------
    sub  : list, length n, sub[0] = 0
    main : list, length n
    sup  : list, length n, sup[n-1] = 0
    """
    if not A.is_n_diagonal(3):
        raise DomainError("Thomas algorithm requires a tridiagonal matrix.")
    n = A.rows
    main = A.get_diag()
    sub = [0] + [A.get_val(i, i - 1) for i in range(1, n)]
    sup = [A.get_val(i, i + 1) for i in range(n - 1)] + [0]
    return sub, main, sup


def thomas_solve(A: Matrix, d: Matrix) -> Matrix:
    """
    Solve A x = d for tridiagonal A in O(n).

    No pivoting is done, so this is only numerically sound for
    diagonally dominant (or otherwise well-behaved) systems.

    Parameters
    ----------
    A : (n, n) Matrix, tridiagonal
    d : (n, 1) Matrix

    Returns
    -------
    x : (n, 1) Matrix
    """
    sub, main, sup = tridiagonal_bands(A)
    n = A.rows
    if d.get_size() != (n, 1):
        raise DimensionMismatchError(
            f"Right-hand side must be a {n}x1 column, got {d.shape}."
        )
    if n == 0:
        return Matrix.zeros(0, 1)

    dtype = np.result_type(working_dtype(A.dtype), d.dtype)
    # Make copies to avoid modifying the caller's data
    b_c = np.array(main, dtype=dtype)
    d_c = np.asarray(d, dtype=dtype).ravel()
    x = np.zeros(n, dtype=dtype)

    # Forward elimination
    if b_c[0] == 0:
        raise SingularMatrixError("Zero pivot at row 0 of tridiagonal system.")
    for i in range(1, n):
        factor = sub[i] / b_c[i - 1]
        b_c[i] = b_c[i] - factor * sup[i - 1]
        d_c[i] = d_c[i] - factor * d_c[i - 1]
        if b_c[i] == 0:
            raise SingularMatrixError(f"Zero pivot at row {i} of tridiagonal system.")

    # Back substitution
    x[n - 1] = d_c[n - 1] / b_c[n - 1]
    for i in range(n - 2, -1, -1):
        x[i] = (d_c[i] - sup[i] * x[i + 1]) / b_c[i]

    logger.debug(f"Thomas: solved {n}x{n} tridiagonal system")
    return Matrix.from_array(x)
