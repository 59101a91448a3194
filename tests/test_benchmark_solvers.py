# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import pandas as pd

from densemat.benchmark_solvers import main, make_system, run
from densemat.solve import Method


def test_make_system_preconditions():
    A, b = make_system(6, seed=1)
    assert A.is_diag_dom()
    assert A.is_n_diagonal(3)
    assert b.get_size() == (6, 1)


def test_run_reports_every_method():
    df = run([5], repeats=1)
    assert list(df["method"]) == [m.name for m in Method]
    assert (df["residual"] < 1e-2).all()


def test_main_writes_csv(tmp_path, capsys):
    out = tmp_path / "bench.csv"
    main(["--sizes", "4", "--repeats", "1", "--csv", str(out)])
    assert "GAUSS_SEIDEL" in capsys.readouterr().out
    assert len(pd.read_csv(out)) == len(Method)
