# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import Optional, Tuple

import numpy as np

from .errors import DimensionMismatchError, DomainError
from .matrix import Matrix
from .norms import inner_product, v_norm
from .solve import Method, solve
from .utils import EIGEN_STEPS

logger = logging.getLogger(__name__)


def _start_vector(A: Matrix, x0: Optional[Matrix]) -> Matrix:
    m, n = A.get_size()
    if m != n:
        raise DomainError("Eigenpair iteration requires a square matrix.")
    if n == 0:
        raise DomainError("An empty matrix has no eigenpairs.")
    if x0 is None:
        return Matrix(n, 1, lambda a, b: 1.0)
    if x0.get_size() != (n, 1):
        raise DimensionMismatchError(f"x0 must be shape ({n}, 1), got {x0.shape}.")
    if not np.any(np.asarray(x0)):
        raise DomainError("Start vector x0 must be non-zero.")
    return x0.astype(float)


def _rayleigh(v: Matrix, Av: Matrix) -> float:
    return inner_product(v, Av) / inner_product(v, v)


def largest_eigenpair(
    A: Matrix,
    n_iter: int = EIGEN_STEPS,
    x0: Optional[Matrix] = None,
) -> Tuple[float, Matrix]:
    """
    Estimate the dominant eigenvalue (by magnitude) of A using the
    Power Iteration method.

    Runs exactly `n_iter` steps of b <- A b / ||A b||_2; there is no
    tolerance-based early exit.

    Parameters
    ----------
    A : (n,n) Matrix
        Real square matrix.
    n_iter : int
        Number of iterations.
    x0 : (n,1) Matrix or None
        Optional initial guess. If None, the all-ones vector is used.
        A start vector orthogonal to the dominant eigenvector converges
        (in exact arithmetic) to the next eigenpair instead.

    Returns
    -------
    lam : float
        Rayleigh quotient of the final iterate.
    Ab : (n,1) Matrix
        A times the final (unit-norm) iterate, i.e. lam times the
        eigenvector estimate.
    """
    b = _start_vector(A, x0)
    for k in range(n_iter):
        w = A * b
        norm_w = v_norm(w, 2)
        if norm_w == 0:
            # A maps current b to 0; matrix is singular.
            logger.debug(f"Power iteration: A b vanished at step {k}")
            return 0.0, w
        b = (1.0 / norm_w) * w

    Ab = A * b
    return _rayleigh(b, Ab), Ab


def smallest_eigenpair(
    A: Matrix,
    n_iter: int = EIGEN_STEPS,
    x0: Optional[Matrix] = None,
    method: Method = Method.LU,
) -> Tuple[float, Matrix]:
    """
    Estimate the eigenvalue of smallest magnitude by inverse iteration:
    b <- A^-1 b / ||A^-1 b||_2, each step a call to `solve`.

    Returns the same (Rayleigh quotient, A b) pair as
    `largest_eigenpair`. A singular A raises SingularMatrixError.
    """
    b = _start_vector(A, x0)
    for _ in range(n_iter):
        w = solve(A, b, method)
        b = (1.0 / v_norm(w, 2)) * w

    Ab = A * b
    return _rayleigh(b, Ab), Ab


def condition_number(
    A: Matrix,
    n_iter: int = EIGEN_STEPS,
    x0: Optional[Matrix] = None,
) -> float:
    """
    |lambda_max| / |lambda_min| from power and inverse iteration.

    `x0` seeds both iterations. The all-ones default is orthogonal to
    every antisymmetric eigenvector, e.g. the dominant mode of an
    even-sized `gen_fd_matrix(n, 2)`; pass a generic vector there.
    """
    big, _ = largest_eigenpair(A, n_iter=n_iter, x0=x0)
    small, _ = smallest_eigenpair(A, n_iter=n_iter, x0=x0)
    return abs(big) / abs(small)
