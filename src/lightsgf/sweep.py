from __future__ import annotations

import csv
import logging
import multiprocessing as mp
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path

import numpy as np

from .actions import build_action_matrix
from .algebra import solve
from .board import BoardState

logger = logging.getLogger(__name__)

FIELDNAMES = [
    "n",
    "board_id",
    "initial_on",
    "solvable",
    "presses",
    "verified",
]


def sample_boards(
    n: int, n_samples: int, rng: np.random.Generator
) -> list[BoardState]:
    """Sample random boards with a uniformly drawn number of lights on."""
    states = []
    max_lights = n * n

    for _ in range(n_samples):
        # Uniformly sample how many lights should be on (1 to n²)
        num_on = rng.integers(1, max_lights + 1)

        # Create board with exactly num_on lights
        flat = np.zeros(max_lights, dtype=bool)
        flat[:num_on] = True
        rng.shuffle(flat)

        states.append(BoardState(n, flat.reshape(n, n)))

    return states


def _task_seed(base_seed: int, *coords: int) -> int:
    """Generate deterministic seed for each task."""
    ss = np.random.SeedSequence([int(base_seed)] + [int(c) for c in coords])

    return int(
        ss.generate_state(1, dtype=np.uint64)[0] & np.uint64((1 << 63) - 1)
    )


def make_batches(sizes, n_samples: int, batch_size: int, base_seed: int):
    """Create job batches, one per (size, board range)."""
    ranges = [
        (i, min(i + batch_size, n_samples))
        for i in range(0, n_samples, batch_size)
    ]
    for n in sizes:
        for lo, hi in ranges:
            yield {"n": int(n), "idx_lo": lo, "idx_hi": hi, "base_seed": base_seed}


def _run_batch(job) -> list[dict]:
    """Sample, solve and verify one batch of boards."""
    n = job["n"]
    lo, hi = job["idx_lo"], job["idx_hi"]
    rng = np.random.default_rng(_task_seed(job["base_seed"], n, lo, hi))

    A = build_action_matrix(n)
    rows = []
    for offset, board in enumerate(sample_boards(n, hi - lo, rng)):
        solution = solve(A, board.to_flat())
        if solution is None:
            presses = ""
            verified = 0
        else:
            presses = int(sum(solution))
            # replaying the solution from all-off must give the board back
            replay = BoardState(n).apply(solution)
            verified = int(replay == board)
        rows.append(
            {
                "n": n,
                "board_id": lo + offset,
                "initial_on": board.count_on(),
                "solvable": int(solution is not None),
                "presses": presses,
                "verified": verified,
            }
        )
    return rows


def _print_progress(done: int, total: int, n_rows: int, start_time: float):
    elapsed = time.time() - start_time
    pct = done / total if total else 1.0
    print(
        f"\r[progress] {done}/{total} batches ({pct:>6.1%}) | "
        f"{n_rows:>7,} boards | "
        f"elapsed: {int(elapsed // 60)}m {int(elapsed % 60)}s",
        end="",
        flush=True,
    )
    if done == total:
        print()


def run_sweep(
    sizes,
    n_samples: int,
    seed: int = 0,
    workers: int = 1,
    batch_size: int = 50,
    progress: bool = False,
) -> list[dict]:
    """Solvability statistics for `n_samples` random boards of each size.

    Batches are seeded from (seed, size, range) only, so the rows are the
    same whatever the number of workers. Rows come back sorted by
    (n, board_id).
    """
    if batch_size < 1:
        raise ValueError("batch_size must be positive")
    if workers < 1:
        raise ValueError("workers must be positive")
    sizes = [int(s) for s in sizes]
    jobs = list(make_batches(sizes, n_samples, batch_size, seed))
    total = len(jobs)
    rows: list[dict] = []
    start_time = time.time()
    logger.info(
        "running %d batches (%d boards) with %d workers",
        total,
        len(sizes) * n_samples,
        workers,
    )

    if workers <= 1:
        for done, job in enumerate(jobs, start=1):
            rows.extend(_run_batch(job))
            if progress:
                _print_progress(done, total, len(rows), start_time)
    else:
        ctx = mp.get_context("spawn")
        with ProcessPoolExecutor(max_workers=workers, mp_context=ctx) as ex:
            futures = [ex.submit(_run_batch, j) for j in jobs]
            for done, fut in enumerate(as_completed(futures), start=1):
                rows.extend(fut.result())
                if progress:
                    _print_progress(done, total, len(rows), start_time)

    rows.sort(key=lambda r: (r["n"], r["board_id"]))
    return rows


def summarize(rows: list[dict]) -> dict[int, float]:
    """Fraction of solvable boards per size."""
    counts: dict[int, list[int]] = {}
    for row in rows:
        counts.setdefault(row["n"], []).append(row["solvable"])
    return {n: float(np.mean(v)) for n, v in sorted(counts.items())}


def write_rows(rows: list[dict], path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        writer.writerows(rows)
    return path
