# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np
import pytest

from densemat.elimination import (
    back_substitute,
    forward_substitute,
    lu_factorize,
    lu_solve,
)
from densemat.errors import DomainError, SingularMatrixError
from densemat.matrix import Matrix
from densemat.norms import residual_norm

TEST_ITERATIONS = 20
logger = logging.getLogger(__name__)


def _check_permutation(P: Matrix):
    p = np.asarray(P)
    assert set(np.unique(p)) <= {0.0, 1.0}
    np.testing.assert_array_equal(p.sum(axis=0), np.ones(p.shape[0]))
    np.testing.assert_array_equal(p.sum(axis=1), np.ones(p.shape[0]))


def test_lu_known_system():
    A = Matrix.from_rows(
        [
            [0, -2, 3, 4],
            [2, 4, 1, 9],
            [-3, 2, 0, 2],
            [3, 2, 1, 2],
        ]
    )
    x_true = Matrix.column([1, 2, 3, 4])
    b = A * x_true

    x = lu_solve(A, b)
    np.testing.assert_allclose(np.asarray(x), np.asarray(x_true), rtol=0, atol=1e-9)


def test_lu_factors_reconstruct():
    for i in range(TEST_ITERATIONS):
        rng = np.random.default_rng(seed=i)
        n = int(rng.integers(1, 12))
        A = Matrix.from_array(rng.normal(size=(n, n)))
        logger.debug(f"\nRunning Test\n{A}\n")

        P, L, U = lu_factorize(A)

        _check_permutation(P)
        l, u = np.asarray(L), np.asarray(U)
        # L unit lower-triangular, U upper-triangular
        np.testing.assert_array_equal(np.diag(l), np.ones(n))
        np.testing.assert_array_equal(np.triu(l, 1), np.zeros((n, n)))
        np.testing.assert_array_equal(np.tril(u, -1), np.zeros((n, n)))
        # partial pivoting keeps every multiplier at most 1 in magnitude
        assert np.all(np.abs(l) <= 1.0 + 1e-12)

        np.testing.assert_allclose(
            np.asarray(P * A), np.asarray(L * U), rtol=1e-10, atol=1e-10
        )


def test_lu_does_not_mutate_input():
    A = Matrix.from_rows([[0, 1], [1, 0]])
    before = A.to_numpy()
    lu_factorize(A)
    np.testing.assert_array_equal(np.asarray(A), before)


def test_lu_pivot_swaps_zero_leading_entry():
    A = Matrix.from_rows([[0, 1], [2, 3]])
    P, L, U = lu_factorize(A)
    np.testing.assert_array_equal(np.asarray(P), [[0, 1], [1, 0]])
    np.testing.assert_array_equal(np.asarray(U), [[2, 3], [0, 1]])


def test_lu_matches_numpy_random():
    for i in range(TEST_ITERATIONS):
        rng = np.random.default_rng(seed=100 + i)
        n = 30
        a = rng.normal(size=(n, n))
        x_true = rng.random(n)
        b = a @ x_true

        x_np = np.linalg.solve(a, b)
        x_lu = lu_solve(Matrix.from_array(a), Matrix.from_array(b))

        # Compare the residual (r = b - Ax), this judges numerical
        # correctness independently of conditioning
        res_np = np.linalg.norm(a @ x_np - b, ord=np.inf)
        res_lu = residual_norm(Matrix.from_array(a), x_lu, Matrix.from_array(b))
        assert res_lu < max(1e3 * res_np, 1e-10)


def test_lu_singular_raises():
    A = Matrix.from_rows([[1, 2, 3], [2, 4, 6], [1, 1, 1]])
    with pytest.raises(SingularMatrixError):
        lu_factorize(A)
    with pytest.raises(SingularMatrixError):
        lu_factorize(Matrix.zeros(3, 3))


def test_lu_non_square_raises():
    with pytest.raises(DomainError):
        lu_factorize(Matrix(2, 3))


def test_forward_and_back_substitution():
    L = Matrix.from_rows([[2, 0, 0], [1, 1, 0], [-1, 3, 4]])
    U = L.transposed()
    y_true = Matrix.column([1.0, -2.0, 0.5])

    y = forward_substitute(L, L * y_true)
    np.testing.assert_allclose(np.asarray(y), np.asarray(y_true), atol=1e-14)

    x = back_substitute(U, U * y_true)
    np.testing.assert_allclose(np.asarray(x), np.asarray(y_true), atol=1e-14)


def test_back_substitute_zero_diagonal_raises():
    U = Matrix.from_rows([[1, 2], [0, 0]])
    with pytest.raises(SingularMatrixError):
        back_substitute(U, Matrix.column([1, 1]))


def test_lu_solve_integer_matrix_returns_floats():
    A = Matrix.from_rows([[2, 1], [1, 3]], dtype=int)
    b = Matrix.column([3, 5], dtype=int)
    x = lu_solve(A, b)
    assert x.dtype == np.float64
    np.testing.assert_allclose(np.asarray(x).ravel(), [0.8, 1.4])
