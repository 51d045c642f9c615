from __future__ import annotations

import functools
import logging
import numbers

from .field import Field, gf2
from .matrix import Matrix

logger = logging.getLogger(__name__)

# Elimination on the N^2 x N^2 action matrix costs O(N^6) field operations.
DEFAULT_MAX_SIZE = 10


def manhattan(n: int, i: int, j: int) -> int:
    r1, c1 = divmod(i, n)
    r2, c2 = divmod(j, n)
    return abs(r1 - r2) + abs(c1 - c2)


def neighbours(n: int, r: int, c: int) -> list[tuple[int, int]]:
    """Cells toggled by pressing (r, c): the cell itself and its open-edge
    orthogonal neighbours."""
    neigh = [(r, c)]
    if r > 0:
        neigh.append((r - 1, c))
    if r < n - 1:
        neigh.append((r + 1, c))
    if c > 0:
        neigh.append((r, c - 1))
    if c < n - 1:
        neigh.append((r, c + 1))
    return neigh


def check_size(size, max_size: int = DEFAULT_MAX_SIZE) -> int:
    if isinstance(size, bool) or not isinstance(size, numbers.Integral):
        raise TypeError(f"grid size must be an integer, got {size!r}")
    size = int(size)
    if size < 1:
        raise ValueError(f"grid size must be positive, got {size}")
    if size > max_size:
        raise ValueError(f"grid size {size} exceeds the limit of {max_size}")
    return size


@functools.lru_cache(maxsize=None)
def _toggle_pattern(n: int) -> tuple[tuple[bool, ...], ...]:
    logger.debug("building %dx%d toggle pattern", n * n, n * n)
    N = n * n
    return tuple(
        tuple(manhattan(n, i, j) <= 1 for j in range(N)) for i in range(N)
    )


def build_action_matrix(
    size: int, field: Field = gf2, max_size: int = DEFAULT_MAX_SIZE
) -> Matrix:
    """Return the N x N action matrix A (N = size**2) for a size x size grid.

    A[i, j] is one() iff pressing cell j toggles cell i, i.e. the cells are
    at Manhattan distance <= 1. A is symmetric, so rows and columns agree.
    The toggle pattern is memoized per size; the returned Matrix is always a
    fresh object the caller may reduce in place.
    """
    n = check_size(size, max_size)
    one, zero = field.one(), field.zero()
    pattern = _toggle_pattern(n)
    return Matrix.from_rows(
        [[one if hit else zero for hit in row] for row in pattern], field
    )
