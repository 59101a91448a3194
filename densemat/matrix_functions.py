# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np

from .elimination import lu_factorize
from .errors import DomainError, SingularMatrixError
from .matrix import Matrix
from .utils import permutation_sign

logger = logging.getLogger(__name__)


def det(A: Matrix) -> float:
    """
    Calculate the determinant of n-by-n matrix A using LU factorization
    """
    if not A.is_square():
        raise DomainError("The determinant is undefined for non-square matrices.")
    try:
        P, _L, U = lu_factorize(A)
    except SingularMatrixError:
        logger.debug("det(): zero pivot, matrix is singular")
        return 0.0
    # row i of P A is row perm[i] of A
    perm = [int(np.argmax(np.asarray(P)[i])) for i in range(P.rows)]
    sign = permutation_sign(perm)
    diag_prod = float(np.prod(np.asarray(U.get_diag(), dtype=float)))
    return sign * diag_prod
