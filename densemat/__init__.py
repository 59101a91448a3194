# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
densemat
========

A small dense-matrix toolkit for finite-difference and eigen-iteration
experiments.

Public API
~~~~~~~~~~
- Container
    - `Matrix`, `as_matrix`
- Linear systems
    - `solve` + `Method` (LU, Jacobi, Thompson, Gauss-Seidel,
      Conjugate Gradient)
    - `lu_factorize`, `forward_substitute`, `back_substitute`
- Iterative methods
    - `largest_eigenpair`, `smallest_eigenpair`, `condition_number`
- Finite differences
    - `gen_fd_coeff`, `gen_fd_matrix`, `solve_poisson`, `solve_elliptic`
- Norms
    - `inner_product`, `v_norm`, `m_norm`

Everything else lives in sub-modules and is **not** considered part of the
stable interface.

Example
-------
>>> import densemat as dm
>>> A = dm.Matrix.from_rows([[4, 1], [1, 3]])
>>> b = A * dm.Matrix.column([1, 2])
>>> x = dm.solve(A, b, dm.Method.LU)
>>> print(x)
1.0
2.0
"""

from importlib.metadata import version as _pkg_version

from .eigen import (
    condition_number,
    largest_eigenpair,
    smallest_eigenpair,
)
from .elimination import (
    back_substitute,
    forward_substitute,
    lu_factorize,
    lu_solve,
)
from .errors import (
    DimensionMismatchError,
    DomainError,
    MatrixError,
    OutOfRangeError,
    SingularMatrixError,
)
from .finite_difference import gen_fd_coeff, gen_fd_matrix
from .image import write_heatmap
from .iterative import conjugate_gradient, gauss_seidel, jacobi
from .matrix import Matrix, as_matrix
from .matrix_functions import det
from .norms import inner_product, m_norm, residual_norm, v_norm
from .pde import five_point, nine_point, solve_elliptic, solve_poisson
from .solve import Method, solve
from .tridiagonal import thomas_solve

__all__ = [
    "Matrix",
    "as_matrix",
    "Method",
    "solve",
    "lu_factorize",
    "lu_solve",
    "forward_substitute",
    "back_substitute",
    "jacobi",
    "gauss_seidel",
    "conjugate_gradient",
    "thomas_solve",
    "largest_eigenpair",
    "smallest_eigenpair",
    "condition_number",
    "gen_fd_coeff",
    "gen_fd_matrix",
    "five_point",
    "nine_point",
    "solve_poisson",
    "solve_elliptic",
    "inner_product",
    "v_norm",
    "m_norm",
    "residual_norm",
    "det",
    "write_heatmap",
    "MatrixError",
    "OutOfRangeError",
    "DimensionMismatchError",
    "DomainError",
    "SingularMatrixError",
]

# ---------------------------------------------------------------------
# Version string (helps "pip show densemat", Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Optional: lightweight default logging config so users see warnings
# only if they deliberately enable them.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
