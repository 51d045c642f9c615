import csv

import numpy as np
import pytest

from lightsgf.sweep import (
    FIELDNAMES,
    make_batches,
    run_sweep,
    sample_boards,
    summarize,
    write_rows,
)


def test_sample_boards_counts(fx_rng):
    boards = sample_boards(4, 30, fx_rng)
    assert len(boards) == 30
    for b in boards:
        assert 1 <= b.count_on() <= 16


def test_make_batches_ranges():
    jobs = list(make_batches([3, 4], 10, 4, base_seed=1))
    assert [(j["n"], j["idx_lo"], j["idx_hi"]) for j in jobs] == [
        (3, 0, 4),
        (3, 4, 8),
        (3, 8, 10),
        (4, 0, 4),
        (4, 4, 8),
        (4, 8, 10),
    ]


def test_run_sweep_rows():
    rows = run_sweep([3, 4], n_samples=12, seed=5, batch_size=5)
    assert len(rows) == 24
    assert [r["board_id"] for r in rows if r["n"] == 4] == list(range(12))
    for r in rows:
        assert set(r) == set(FIELDNAMES)
        if r["solvable"]:
            assert r["verified"] == 1
        else:
            assert r["presses"] == ""
    # every 3x3 board is solvable
    assert summarize(rows)[3] == 1.0
    assert 0.0 <= summarize(rows)[4] <= 1.0


def test_run_sweep_is_deterministic():
    a = run_sweep([5], n_samples=8, seed=3, batch_size=3)
    b = run_sweep([5], n_samples=8, seed=3, batch_size=3)
    assert a == b


def test_write_rows(tmp_path):
    rows = run_sweep([3], n_samples=4, seed=0)
    out = write_rows(rows, tmp_path / "nested" / "sweep.csv")
    with open(out, newline="", encoding="utf-8") as f:
        read = list(csv.DictReader(f))
    assert len(read) == 4
    assert list(read[0]) == FIELDNAMES
    assert np.all([r["solvable"] == "1" for r in read])


def test_run_sweep_workers_match_serial():
    serial = run_sweep([3, 4], n_samples=6, seed=1, batch_size=2, workers=1)
    pooled = run_sweep([3, 4], n_samples=6, seed=1, batch_size=2, workers=2)
    assert pooled == serial


def test_run_sweep_rejects_bad_counts():
    with pytest.raises(ValueError):
        run_sweep([3], n_samples=2, workers=0)
    with pytest.raises(ValueError):
        run_sweep([3], n_samples=2, batch_size=0)
