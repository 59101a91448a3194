# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Write a matrix out as a plain-text (P3) PPM heatmap
"""

import logging
import math
import pathlib
from typing import Callable, NamedTuple, Union

from .errors import DomainError
from .matrix import Matrix

logger = logging.getLogger(__name__)


class Color(NamedTuple):
    R: int
    G: int
    B: int


RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)


def lerp(a: Color, b: Color) -> Callable[[float], Color]:
    """Linear interpolation from color a (t = 0) to color b (t = 1)."""

    def wheel(t: float) -> Color:
        s = 1 - t
        return Color(
            int(round(s * a.R + t * b.R)),
            int(round(s * a.G + t * b.G)),
            int(round(s * a.B + t * b.B)),
        )

    return wheel


def write_heatmap(
    path: Union[str, pathlib.Path],
    grid: Matrix,
    width: int = 1000,
    low: Color = BLUE,
    high: Color = RED,
) -> None:
    """
    Write `grid` to `path` as a P3 PPM image.

    Each pixel takes the value of the matrix cell it falls in (nearest
    neighbour) and is colored by where that value sits between the
    matrix minimum (`low`) and maximum (`high`). Height follows the
    matrix aspect ratio.
    """
    m, n = grid.get_size()
    if m == 0 or n == 0:
        raise DomainError("Cannot draw an empty matrix.")
    if width < 1:
        raise DomainError(f"Image width must be positive, got {width}.")

    height = max(1, round(width * m / n))
    ppc_x = width / n
    ppc_y = height / m

    lo = grid.get_min()
    span = grid.get_max() - lo
    wheel = lerp(low, high)

    lines = ["P3", f"{width} {height}", "255"]
    for y in range(height):
        row = min(m - 1, math.floor(y / ppc_y))
        pixels = []
        for x in range(width):
            col = min(n - 1, math.floor(x / ppc_x))
            val = grid.get_val(row, col)
            t = float((val - lo) / span) if span != 0 else 0.0
            pixels.append("{} {} {}".format(*wheel(t)))
        lines.append("   ".join(pixels))

    out = pathlib.Path(path)
    out.write_text("\n".join(lines) + "\n")
    logger.info(f"Wrote {width}x{height} heatmap to {out}")
