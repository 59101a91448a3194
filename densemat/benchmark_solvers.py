#!/usr/bin/python3
# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Time every solve() method against numpy.linalg.solve.

    python -m densemat.benchmark_solvers --sizes 20 50 100 --csv bench.csv
"""

import argparse
import logging
import time

import numpy as np
import pandas as pd

from .finite_difference import gen_fd_matrix
from .matrix import Matrix
from .solve import Method, solve

logger = logging.getLogger(__name__)

REPEATS = 5  # best of 5 runs leads to stable numbers
SIZES = [20, 50, 100]


def wall(f, *args, **kwargs):
    t0 = time.perf_counter()
    f(*args, **kwargs)
    return time.perf_counter() - t0


def make_system(n: int, seed: int = 0):
    """
    SPD, strictly diagonally dominant tridiagonal system (4 on the
    diagonal, -1 beside it) with a random right-hand side, so every
    method's preconditions hold.
    """
    rng = np.random.default_rng(seed)
    A = 2 * Matrix.identity(n) - gen_fd_matrix(n, 2)
    b = Matrix.from_array(rng.standard_normal(n))
    return A, b


def run(sizes=SIZES, repeats=REPEATS) -> pd.DataFrame:
    records = []
    for n in sizes:
        A, b = make_system(n)
        a_np, b_np = np.asarray(A), np.asarray(b).ravel()

        # reference
        t_np = min(wall(np.linalg.solve, a_np, b_np) for _ in range(repeats))
        x_ref = np.linalg.solve(a_np, b_np)
        r_ref = max(np.linalg.norm(a_np @ x_ref - b_np, np.inf), np.finfo(float).eps)

        for method in Method:
            t = min(wall(solve, A, b, method) for _ in range(repeats))
            x = np.asarray(solve(A, b, method)).ravel()
            resid = np.linalg.norm(a_np @ x - b_np, np.inf)
            logger.debug(f"{method.name} n={n}: {t:.4f}s residual={resid:.3e}")
            records.append((method.name, f"{n}x{n}", t, t / t_np, resid, resid / r_ref))

    return pd.DataFrame(
        records,
        columns=["method", "size", "sec", "sec/NumPy", "residual", "residual/NumPy"],
    )


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Benchmark densemat solvers against numpy.linalg.solve"
    )
    parser.add_argument("--sizes", type=int, nargs="+", default=SIZES)
    parser.add_argument("--repeats", type=int, default=REPEATS)
    parser.add_argument("--csv", type=str, default=None, help="Write results here")
    parser.add_argument("--log-level", type=str, default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper())

    df = run(args.sizes, args.repeats)
    print(df.to_string(index=False))
    if args.csv:
        df.to_csv(args.csv, index=False)
    return df


if __name__ == "__main__":
    main()
