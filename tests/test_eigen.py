# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import math

import numpy as np
import pytest

from densemat.eigen import condition_number, largest_eigenpair, smallest_eigenpair
from densemat.errors import DimensionMismatchError, DomainError, SingularMatrixError
from densemat.finite_difference import gen_fd_matrix
from densemat.matrix import Matrix
from densemat.norms import v_norm

# -2 on the diagonal, 1 beside it
A4 = Matrix.from_rows(
    [
        [-2, 1, 0, 0],
        [1, -2, 1, 0],
        [0, 1, -2, 1],
        [0, 0, 1, -2],
    ]
)


def _tridiag_eigenvalues(n):
    return [-2 + 2 * math.cos(k * math.pi / (n + 1)) for k in range(1, n + 1)]


def test_power_iteration_known_tridiagonal():
    # the all-ones vector is orthogonal to this matrix's dominant
    # (antisymmetric) eigenvector, so start from a generic vector
    lam_true = -2 + 2 * math.cos(4 * math.pi / 5)
    lam, Ab = largest_eigenpair(A4, x0=Matrix.column([1, 2, 3, 4]))
    assert abs(lam - lam_true) < 1e-3

    # A b is lam times the unit eigenvector estimate
    v = (1.0 / lam) * Ab
    assert math.isclose(v_norm(v, 2), 1.0, rel_tol=1e-6)
    resid = A4 * v - lam * v
    assert v_norm(resid, 2) < 1e-6


def test_power_iteration_diagonal():
    A = Matrix.diagonal([5.0, 2.0, -1.0])
    lam, Ab = largest_eigenpair(A)
    # true dominant eigenvalue magnitude is 5, sign is +5
    assert math.isclose(lam, 5.0, abs_tol=1e-9)
    # eigenvector should align with e1
    np.testing.assert_allclose(np.asarray(Ab).ravel(), [5.0, 0.0, 0.0], atol=1e-9)


def test_power_iteration_fixed_budget():
    A = Matrix.diagonal([3.0, 1.0])
    # after one step from (1, 1): b = (3, 1) / sqrt(10)
    lam, _ = largest_eigenpair(A, n_iter=1)
    assert math.isclose(lam, (27 + 1) / (9 + 1), rel_tol=1e-12)
    # zero steps: Rayleigh quotient of the all-ones start
    lam0, Ab0 = largest_eigenpair(A, n_iter=0)
    assert math.isclose(lam0, 2.0)
    np.testing.assert_allclose(np.asarray(Ab0).ravel(), [3.0, 1.0])


def test_power_iteration_zero_matrix():
    lam, Ab = largest_eigenpair(Matrix.zeros(3, 3))
    assert lam == 0.0
    np.testing.assert_array_equal(np.asarray(Ab), np.zeros((3, 1)))


def test_inverse_iteration_fd_matrix():
    n = 10
    A = gen_fd_matrix(n, 2)
    lam, Ab = smallest_eigenpair(A)
    expected = min(_tridiag_eigenvalues(n), key=abs)
    assert math.isclose(lam, expected, rel_tol=1e-9)
    # the slowest mode is a half sine: single-signed
    ab = np.asarray(Ab).ravel()
    assert np.all(ab < 0) or np.all(ab > 0)


def test_matrix_methods_delegate():
    A = Matrix.diagonal([4.0, 2.0, 0.5])
    lam_big, _ = A.largest_eigenpair()
    lam_small, _ = A.smallest_eigenpair()
    assert math.isclose(lam_big, 4.0, rel_tol=1e-9)
    assert math.isclose(lam_small, 0.5, rel_tol=1e-9)
    assert math.isclose(A.condition_number(), 8.0, rel_tol=1e-9)
    assert math.isclose(condition_number(A), 8.0, rel_tol=1e-9)


def test_eigen_does_not_mutate():
    before = A4.to_numpy()
    largest_eigenpair(A4)
    smallest_eigenpair(A4)
    np.testing.assert_array_equal(np.asarray(A4), before)


def test_non_square_raises():
    with pytest.raises(DomainError):
        largest_eigenpair(Matrix(3, 4))
    with pytest.raises(DomainError):
        smallest_eigenpair(Matrix(3, 4))


def test_start_vector_shape():
    with pytest.raises(DimensionMismatchError):
        largest_eigenpair(A4, x0=Matrix.column([1, 2]))


def test_inverse_iteration_singular_raises():
    with pytest.raises(SingularMatrixError):
        smallest_eigenpair(Matrix.zeros(2, 2))


def test_condition_number_even_fd_matrix():
    # the dominant mode of an even-sized FD operator is antisymmetric,
    # so seed both iterations with a generic vector
    n = 10
    A = gen_fd_matrix(n, 2)
    eig = np.linalg.eigvalsh(np.asarray(A))
    expected = np.max(np.abs(eig)) / np.min(np.abs(eig))

    x0 = Matrix.column(range(1, n + 1))
    assert math.isclose(condition_number(A, x0=x0), expected, rel_tol=1e-3)
    assert math.isclose(A.condition_number(x0=x0), expected, rel_tol=1e-3)


@pytest.mark.parametrize("solver", [largest_eigenpair, smallest_eigenpair])
def test_zero_start_vector_raises(solver):
    with pytest.raises(DomainError):
        solver(A4, x0=Matrix.zeros(4, 1))
