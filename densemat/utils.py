# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np

# Fixed iteration budgets (Jacobi / Gauss-Seidel / CG and power iteration)
ITERATIVE_STEPS: int = 500
EIGEN_STEPS: int = 100

# CG stops once successive residuals differ by less than this (2-norm)
CG_TOLERANCE: float = 1e-3


def kronecker(i: int, j: int) -> int:
    """Kronecker delta, the default cell generator (identity matrix)."""
    return 1 if i == j else 0


def zero(*_args) -> int:
    return 0


def working_dtype(dtype) -> np.dtype:
    """
    Smallest dtype able to hold quotients of `dtype` values.

    int -> float64, complex stays complex, object (e.g. Fraction) stays object.
    """
    return np.result_type(dtype, np.float64)


def permutation_sign(perm: list[int]) -> float:
    """Return +1 or -1 depending on permutation parity."""
    visited = [False] * len(perm)
    cycles = 0
    for i in range(len(perm)):
        if not visited[i]:
            cycles += 1
            j = i
            while not visited[j]:
                visited[j] = True
                j = perm[j]
    swaps = len(perm) - cycles  # n - #cycles
    return -1.0 if swaps & 1 else 1.0


def random_diag_dom(n: int, seed=None) -> np.ndarray:
    """
    Build a random n-by-n matrix whose diagonal strictly dominates
    each row (classical definition).

    Returns
    -------
    ndarray, float64, shape (n, n)
    """
    rng = np.random.default_rng(seed)
    A = rng.uniform(-1.0, 1.0, size=(n, n))
    off = np.sum(np.abs(A), axis=1) - np.abs(np.diag(A))
    # push every diagonal entry past its row's off-diagonal mass
    signs = np.where(rng.random(n) < 0.5, -1.0, 1.0)
    A[np.diag_indices(n)] = signs * (off + rng.uniform(1.0, 2.0, size=n))
    return np.asarray(A)
