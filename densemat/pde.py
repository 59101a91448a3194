# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Finite-difference drivers for elliptic problems

- `solve_poisson`  : del^2 u = f on a square with Dirichlet data,
                     discretised by a pluggable stencil
- `solve_elliptic` : u'' = f on an interval with Dirichlet data
"""

import logging
from typing import Callable, List, Tuple, Union

from .errors import DimensionMismatchError, DomainError
from .finite_difference import gen_fd_matrix
from .matrix import Matrix
from .solve import Method, solve
from .utils import zero

logger = logging.getLogger(__name__)

Coord = Tuple[float, float]
# (multiplier, sample point) pairs
Stencil = List[Tuple[float, Coord]]
StencilGen = Callable[[Coord, float], Stencil]
PlaneToScalar = Callable[[float, float], float]


def five_point(center: Coord, h: float) -> Stencil:
    """Standard 5-point Laplacian."""
    x, y = center
    mult = 1.0 / (h * h)
    return [
        (-4 * mult, (x, y)),
        (mult, (x + h, y)),
        (mult, (x - h, y)),
        (mult, (x, y + h)),
        (mult, (x, y - h)),
    ]


def nine_point(center: Coord, h: float) -> Stencil:
    """Compact 9-point Laplacian: (4 * edges + corners - 20 * centre) / 6h^2."""
    x, y = center
    mult = 1.0 / (6 * h * h)
    return [
        (-20 * mult, (x, y)),
        (4 * mult, (x + h, y)),
        (4 * mult, (x - h, y)),
        (4 * mult, (x, y + h)),
        (4 * mult, (x, y - h)),
        (mult, (x + h, y + h)),
        (mult, (x + h, y - h)),
        (mult, (x - h, y + h)),
        (mult, (x - h, y - h)),
    ]


def solve_poisson(
    size: int,
    domain: Tuple[float, float],
    driver: PlaneToScalar,
    make_stencil: StencilGen = five_point,
    dirichlet: PlaneToScalar = zero,
    method: Method = Method.LU,
) -> Matrix:
    """
    Solve del^2 u(x, y) = f(x, y) on [a, b] x [a, b].

    Parameters
    ----------
    size : int
        Mesh points per side, boundary included (>= 3).
    domain : (a, b)
        Lower and upper coordinate, shared by both axes.
    driver : f(x, y)
    make_stencil : ((x, y), h) -> [(multiplier, (x', y')), ...]
        Sample points must lie on the mesh (integer multiples of h away).
    dirichlet : g(x, y)
        Known u along the boundary.
    method : Method
        Solver for the assembled system.

    Returns
    -------
    u : (size - 2, size - 2) Matrix
        Interior solution; row r is y = a + (r + 1) h, column c is
        x = a + (c + 1) h.
    """
    if size < 3:
        raise DomainError(f"Poisson mesh needs at least 3 points per side, got {size}.")

    a, b = domain
    h = (b - a) / (size - 1)
    interior = size - 2
    unknowns = interior * interior

    def index(coord: float) -> int:
        # interior mesh index of a coordinate, -1 / interior on the boundary
        return int(round((coord - a) / h)) - 1

    lap = Matrix.zeros(unknowns, unknowns)
    rhs = Matrix.zeros(unknowns, 1)

    for row in range(interior):
        for col in range(interior):
            x = a + h * (col + 1)
            y = a + h * (row + 1)
            k = row * interior + col
            acc = driver(x, y)

            for mult, (sx, sy) in make_stencil((x, y), h):
                c, r = index(sx), index(sy)
                if 0 <= c < interior and 0 <= r < interior:
                    j = r * interior + c
                    lap.set_val(k, j, lap.get_val(k, j) + mult)
                else:
                    # known boundary value moves to the right-hand side
                    acc -= mult * dirichlet(sx, sy)

            rhs.set_val(k, 0, acc)

    logger.debug(f"Poisson: assembled {unknowns}x{unknowns} operator")
    u = solve(lap, rhs, method)
    return u.square_up(interior, interior)


def solve_elliptic(
    a: float,
    b: float,
    ua: float,
    ub: float,
    f: Callable[[float], float],
    n: int,
    method: Method = Method.THOMPSON,
    k: Union[Callable[[float], float], Matrix, None] = None,
) -> Matrix:
    """
    Solve (k u)'' = f on [a, b] given u(a) = ua and u(b) = ub (k = 1
    unless given).

    Uses the second-order 3-point operator on n interior mesh points
    x_i = a + (i + 1) h, h = (b - a) / (n + 1).

    An optional coefficient `k` (a function of x, or an n by 1 Matrix of
    mesh values) scales column j of the operator by k_j, so the system
    solved is D diag(k) u = h^2 f minus the boundary terms.

    Returns
    -------
    u : (n, 1) Matrix of interior values
    """
    if n < 1:
        raise DomainError(f"Need at least one interior mesh point, got {n}.")
    h = (b - a) / (n + 1)

    F = Matrix(n, 1, lambda i, j: h * h * f(a + (i + 1) * h))
    # boundary values truncated from the first and last rows
    boundary = Matrix.zeros(n, 1)
    boundary.set_val(0, 0, ua)
    boundary.set_val(n - 1, 0, boundary.get_val(n - 1, 0) + ub)

    D = gen_fd_matrix(n, 2)
    if k is not None:
        if isinstance(k, Matrix):
            if k.get_size() != (n, 1):
                raise DimensionMismatchError(
                    f"Coefficient k must be a {n}x1 column, got {k.shape}."
                )
            coeff = Matrix.convert(k)
        else:
            coeff = Matrix(n, 1, lambda i, j: k(a + (i + 1) * h))
        D.fill_with(lambda i, j: D.get_val(i, j) * coeff.get_val(j, 0))
    return solve(D, F - boundary, method)
