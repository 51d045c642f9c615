from __future__ import annotations

from typing import Optional

import numpy as np

from .actions import build_action_matrix
from .algebra import column_space_basis
from .board import BoardState
from .field import Field, gf2
from .vector import vec_add, vec_scale, zero_vector

GENERATION_TYPES = ("random", "solvable")


def random_lights(n: int, rng: np.random.Generator) -> np.ndarray:
    """Every cell on with probability 1/2; not necessarily solvable."""
    return rng.random(n * n) > 0.5


def solvable_lights(
    n: int,
    rng: np.random.Generator,
    basis: Optional[list[list]] = None,
    field: Field = gf2,
) -> np.ndarray:
    """Random light vector drawn from the column space of the action matrix.

    Each basis vector is kept or dropped on a coin flip and the kept ones
    are summed, so the result is solvable by construction and the solver is
    never run. `basis`, when given, must be over `field`; the returned mask
    marks the cells whose summed entry is non-zero.
    """
    if basis is None:
        basis = column_space_basis(build_action_matrix(n, field))
    lights = zero_vector(field, n * n)
    for col in basis:
        factor = field.one() if rng.random() > 0.5 else field.zero()
        lights = vec_add(field, lights, vec_scale(field, col, factor))
    return np.array(
        [not field.equals(v, field.zero()) for v in lights], dtype=bool
    )


def create_board(
    n: int, generation: str = "solvable", rng: np.random.Generator | None = None
) -> BoardState:
    rng = rng or np.random.default_rng()
    if generation == "random":
        flat = random_lights(n, rng)
    elif generation == "solvable":
        flat = solvable_lights(n, rng)
    else:
        raise ValueError(
            f"Unknown generation type: {generation!r} (expected one of {GENERATION_TYPES})"
        )
    return BoardState.from_flat(n, flat)
