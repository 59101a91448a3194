# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Inner products and norms for Matrix vectors and matrices
"""

import math

import numpy as np

from .errors import DomainError
from .matrix import Matrix


def _is_vector(v: Matrix) -> bool:
    m, n = v.get_size()
    return m == 1 or n == 1


def inner_product(u: Matrix, v: Matrix):
    """
    Sum of element-wise products of two row vectors or two column
    vectors of the same shape.
    """
    if not (_is_vector(u) and u.get_size() == v.get_size()):
        raise DomainError(
            f"Inner product needs two vectors of matching shape, got {u.shape} and {v.shape}."
        )
    total = np.sum(np.asarray(u) * np.asarray(v))
    return total.item() if isinstance(total, np.generic) else total


def v_norm(v: Matrix, p=2) -> float:
    """
    p-norm of a row or column vector.

    p may be 1, 2, math.inf or any real p >= 1.
    """
    if not _is_vector(v):
        raise DomainError(f"Vector norm needs a row or column vector, got {v.shape}.")
    if p != math.inf and p < 1:
        raise DomainError(f"Vector p-norm requires p >= 1, got {p}.")
    x = np.asarray(v, dtype=float).ravel()
    if x.size == 0:
        return 0.0
    return float(np.linalg.norm(x, ord=p))


def m_norm(A: Matrix, p=1) -> float:
    """
    Induced matrix norm.

    p = 1       -> largest absolute column sum
    p = math.inf -> largest absolute row sum
    """
    a = np.abs(np.asarray(A, dtype=float))
    if a.size == 0:
        return 0.0
    if p == 1:
        return float(a.sum(axis=0).max())
    if p == math.inf:
        return float(a.sum(axis=1).max())
    raise DomainError(f"Only the 1- and infinity-norms are supported, got {p}.")


def residual_norm(A: Matrix, x: Matrix, b: Matrix, p=math.inf) -> float:
    """Return the p-norm of the residual r = A x - b."""
    return v_norm(A * x - b, p)
