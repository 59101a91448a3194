# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np
import pytest

from densemat.errors import DomainError
from densemat.finite_difference import gen_fd_coeff, gen_fd_matrix, stencil_width


@pytest.mark.parametrize(
    "order, accuracy, expected",
    [
        (1, 2, [-0.5, 0.0, 0.5]),
        (2, 2, [1.0, -2.0, 1.0]),
        (2, 4, [-1 / 12, 4 / 3, -5 / 2, 4 / 3, -1 / 12]),
        (3, 2, [-0.5, 1.0, 0.0, -1.0, 0.5]),
        (4, 2, [1.0, -4.0, 6.0, -4.0, 1.0]),
        (0, 2, [1.0]),
    ],
)
def test_known_coefficients(order, accuracy, expected):
    coeffs = gen_fd_coeff(order, accuracy)
    assert len(coeffs) == stencil_width(order, accuracy)
    np.testing.assert_allclose(coeffs, expected, rtol=1e-9, atol=1e-12)


def test_coefficients_differentiate_polynomials():
    # a 4th-accuracy second derivative is exact on quartics
    h = 0.1
    x0 = 0.3
    coeffs = gen_fd_coeff(2, 4)
    p = (len(coeffs) - 1) // 2
    f = lambda x: 3 * x**4 - x**3 + 2 * x  # noqa: E731
    approx = sum(c * f(x0 + (j - p) * h) for j, c in enumerate(coeffs)) / h**2
    assert approx == pytest.approx(36 * x0**2 - 6 * x0, rel=1e-9)


@pytest.mark.parametrize("order, accuracy", [(-1, 2), (2, 0), (0, 1)])
def test_invalid_orders(order, accuracy):
    with pytest.raises(DomainError):
        gen_fd_coeff(order, accuracy)


def test_second_derivative_matrix():
    D = gen_fd_matrix(5, 2)
    expected = np.diag([-2.0] * 5) + np.diag([1.0] * 4, 1) + np.diag([1.0] * 4, -1)
    np.testing.assert_allclose(np.asarray(D), expected, atol=1e-12)
    assert D.is_n_diagonal(3)


def test_wide_stencil_matrix_is_pentadiagonal():
    D = gen_fd_matrix(6, 2, accuracy=4)
    assert D.is_n_diagonal(5)
    assert not D.is_n_diagonal(3)
    # interior rows carry the full stencil
    np.testing.assert_allclose(
        np.asarray(D)[2, 0:5], [-1 / 12, 4 / 3, -5 / 2, 4 / 3, -1 / 12], atol=1e-12
    )
    # the first row has lost its two left-hand entries
    np.testing.assert_allclose(
        np.asarray(D)[0, 0:3], [-5 / 2, 4 / 3, -1 / 12], atol=1e-12
    )


def test_one_by_one_matrix():
    D = gen_fd_matrix(1, 2)
    assert D.get_size() == (1, 1)
    assert D.get_val(0, 0) == pytest.approx(-2.0)
