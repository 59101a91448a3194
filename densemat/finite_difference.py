# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Finite-difference coefficients from a Taylor-expansion (Vandermonde)
system, and the banded operator matrices built from them.
"""

import logging
import math
from typing import List

from .errors import DomainError
from .matrix import Matrix
from .solve import Method, solve

logger = logging.getLogger(__name__)


def stencil_width(order: int, accuracy: int) -> int:
    """Minimum number of points for the given derivative and accuracy order."""
    return 2 * ((order + 1) // 2) - 1 + accuracy


def gen_fd_coeff(order: int, accuracy: int = 2) -> List[float]:
    """
    Weights c_j such that

        sum_j c_j f(x + (j - p) h) = h^order f^(order)(x) + O(h^(order + accuracy))

    with p = (width - 1) // 2 the centre of the stencil.

    Row i of the Vandermonde system matches the i-th Taylor term,
    sum_j c_j (j - p)^i = order! * delta(i, order).

    Parameters
    ----------
    order : int
        Derivative order, >= 0.
    accuracy : int
        Accuracy order, >= 1.

    Returns
    -------
    coeffs : list[float], length stencil_width(order, accuracy)
        Divide by h**order to apply on a mesh of spacing h.
    """
    if order < 0:
        raise DomainError(f"Derivative order must be non-negative, got {order}.")
    if accuracy < 1:
        raise DomainError(f"Accuracy order must be positive, got {accuracy}.")

    size = stencil_width(order, accuracy)
    if size <= order:
        raise DomainError(
            f"A {size}-point stencil cannot resolve a derivative of order {order}."
        )
    p = (size - 1) // 2

    V = Matrix(size, size, lambda i, j: float(j - p) ** i)
    rhs = Matrix(size, 1, lambda i, j: math.factorial(order) if i == order else 0)
    coeffs = solve(V, rhs, Method.LU)

    logger.debug(f"FD coefficients (order={order}, accuracy={accuracy}): {size} points")
    return [float(coeffs.get_val(i, 0)) for i in range(size)]


def gen_fd_matrix(size: int, order: int, accuracy: int = 2) -> Matrix:
    """
    Banded size by size operator with the coefficient stencil slid
    along each row (centre on the diagonal).

    Rows near either end simply drop the stencil entries that fall
    outside the matrix; callers account for the missing boundary terms,
    e.g. by subtracting known boundary values from the right-hand side.
    """
    coeffs = gen_fd_coeff(order, accuracy)
    width = len(coeffs)
    p = (width - 1) // 2

    D = Matrix.zeros(size, size)
    for i in range(size):
        lo = max(0, i - p)
        hi = min(size - 1, i + width - 1 - p)
        for j in range(lo, hi + 1):
            D.set_val(i, j, coeffs[j - i + p])
    return D
