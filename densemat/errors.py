# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exception types raised by densemat.

Each error also derives from the builtin a NumPy user would expect
(``IndexError`` for bad indices, ``ValueError`` for everything else), so
``except ValueError`` keeps working around calls into this package.
"""


class MatrixError(Exception):
    """Base class for every error raised by densemat."""


class OutOfRangeError(MatrixError, IndexError):
    """Index (or permutation index) outside the matrix bounds."""


class DimensionMismatchError(MatrixError, ValueError):
    """Operand shapes are incompatible for the requested operation."""


class DomainError(MatrixError, ValueError):
    """A structural precondition of an algorithm does not hold."""


class SingularMatrixError(MatrixError, ValueError):
    """Elimination met a zero pivot it could not swap away."""
