"""
Command line front end.

Usage:
    # Solve a 3x3 board given row-major, rows may be separated by '/'
    lightsgf solve --lights 110/100/000

    # Print a guaranteed-solvable 5x5 board
    lightsgf generate --size 5 --seed 7

    # Rank / nullity of the 4x4 action matrix
    lightsgf basis --size 4

    # Solvability sweep over random boards, written to CSV
    lightsgf sweep --sizes 3 4 5 --samples 200 --workers 4 --out results/sweep.csv
"""

from __future__ import annotations

import argparse
import logging
import math
import sys

import numpy as np

from .actions import build_action_matrix, check_size
from .algebra import column_space_basis, null_space_basis, solve
from .board import BoardState
from .config import EngineConfig, load_config
from .generate import GENERATION_TYPES, create_board
from .rref import rank
from .sweep import run_sweep, summarize, write_rows

logger = logging.getLogger(__name__)


def parse_lights(text: str) -> list[bool]:
    """Parse '0'/'1' characters, ignoring separators such as '/', ',' and spaces."""
    bits = []
    for ch in text:
        if ch in "01":
            bits.append(ch == "1")
        elif ch in "/,; \t\n|":
            continue
        else:
            raise ValueError(f"invalid light character {ch!r}")
    return bits


def _grid_size(n_cells: int) -> int:
    n = math.isqrt(n_cells)
    if n < 1 or n * n != n_cells:
        raise ValueError(f"{n_cells} lights do not form a square grid")
    return n


def cmd_solve(args, cfg: EngineConfig) -> int:
    lights = parse_lights(args.lights)
    n = _grid_size(len(lights))
    if args.size is not None and args.size != n:
        raise ValueError(f"--size {args.size} does not match {len(lights)} lights")
    A = build_action_matrix(n, max_size=cfg.max_size)
    solution = solve(A, lights)
    if solution is None:
        print("unsolvable")
        return 1
    presses = BoardState.from_flat(n, np.array(solution, dtype=bool))
    print(presses)
    print(f"presses: {presses.count_on()}")
    return 0


def cmd_generate(args, cfg: EngineConfig) -> int:
    n = check_size(args.size if args.size is not None else cfg.size, cfg.max_size)
    generation = args.type or cfg.generation
    seed = args.seed if args.seed is not None else cfg.seed
    board = create_board(n, generation, np.random.default_rng(seed))
    logger.info("generated %s %dx%d board with %d lights on", generation, n, n, board.count_on())
    print(board)
    return 0


def cmd_basis(args, cfg: EngineConfig) -> int:
    n = check_size(args.size if args.size is not None else cfg.size, cfg.max_size)
    A = build_action_matrix(n, max_size=cfg.max_size)
    basis = column_space_basis(A)
    nullity = len(null_space_basis(A))
    print(f"size: {n}x{n}")
    print(f"rank: {rank(A)}")
    print(f"column space basis: {len(basis)} vectors")
    print(f"nullity: {nullity} (1 in {2 ** nullity} boards solvable)")
    return 0


def cmd_sweep(args, cfg: EngineConfig) -> int:
    sizes = args.sizes or cfg.sweep_sizes
    for n in sizes:
        check_size(n, cfg.max_size)
    rows = run_sweep(
        sizes,
        n_samples=args.samples if args.samples is not None else cfg.sweep_samples,
        seed=(args.seed if args.seed is not None else cfg.seed) or 0,
        workers=args.workers if args.workers is not None else cfg.workers,
        batch_size=args.batch_size if args.batch_size is not None else cfg.batch_size,
        progress=not args.quiet,
    )
    out = write_rows(rows, args.out or cfg.output)
    for n, frac in summarize(rows).items():
        print(f"{n}x{n}: {frac:.1%} solvable")
    bad = sum(1 for r in rows if r["solvable"] and not r["verified"])
    if bad:
        logger.error("%d solutions failed verification", bad)
        return 2
    print(f"Output: {out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="lightsgf", description="Lights Out solver over GF(2)"
    )
    ap.add_argument("--config", default=None, help="YAML config file")
    ap.add_argument("--log-level", default=None, help="Logging level (default from config)")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("solve", help="Solve a board")
    p.add_argument("--lights", required=True, help="Row-major 0/1 light state")
    p.add_argument("--size", type=int, default=None)
    p.set_defaults(func=cmd_solve)

    p = sub.add_parser("generate", help="Generate a board")
    p.add_argument("--size", type=int, default=None)
    p.add_argument("--type", choices=GENERATION_TYPES, default=None)
    p.add_argument("--seed", type=int, default=None)
    p.set_defaults(func=cmd_generate)

    p = sub.add_parser("basis", help="Column space / null space dimensions")
    p.add_argument("--size", type=int, default=None)
    p.set_defaults(func=cmd_basis)

    p = sub.add_parser("sweep", help="Solvability statistics over random boards")
    p.add_argument("--sizes", type=int, nargs="+", default=None)
    p.add_argument("--samples", type=int, default=None, help="Boards per size")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--workers", type=int, default=None, help="Number of workers")
    p.add_argument("--batch-size", type=int, default=None, help="Boards per batch")
    p.add_argument("--out", default=None, help="Output CSV path")
    p.add_argument("--quiet", action="store_true", help="No progress line")
    p.set_defaults(func=cmd_sweep)
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = load_config(args.config) if args.config else EngineConfig()
    except ValueError as e:
        logging.basicConfig(format="%(levelname)s: %(message)s")
        logger.error("%s: %s", args.config, e)
        return 2

    logging.basicConfig(
        level=(args.log_level or cfg.log_level).upper(),
        format="%(levelname)s: %(message)s",
    )
    try:
        return args.func(args, cfg)
    except ValueError as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
