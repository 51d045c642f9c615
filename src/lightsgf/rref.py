from __future__ import annotations

import logging

from .errors import DimensionMismatchError, NotInvertibleError
from .matrix import Matrix

logger = logging.getLogger(__name__)


def rref(M: Matrix) -> list[int]:
    """Bring M to reduced row echelon form in place (Gauss-Jordan).

    Works over whatever field M carries; every step goes through M.field.
    The pivot row for a column is always the topmost candidate at or below
    the current pivot position.

    Returns the list of pivot columns, one per pivot row, in increasing order.
    """
    f = M.field
    zero = f.zero()
    m, n = M.shape

    row = 0
    pivcols: list[int] = []
    for col in range(n):
        if row == m:
            break
        # find a pivot in/under current row
        pivot = None
        for r in range(row, m):
            if not f.equals(M.get(r, col), zero):
                pivot = r
                break
        if pivot is None:
            continue
        if pivot != row:
            M.swap_rows(row, pivot)
        M.multiply_row(row, f.reciprocal(M.get(row, col)))
        # eliminate ALL other rows (Gauss-Jordan)
        for r in range(m):
            if r == row:
                continue
            value = M.get(r, col)
            if not f.equals(value, zero):
                M.add_rows(row, r, f.negate(value))
        pivcols.append(col)
        row += 1
    return pivcols


def rank(M: Matrix) -> int:
    """Rank of M; M itself is left untouched."""
    return len(rref(M.copy()))


def is_rref(M: Matrix) -> bool:
    f = M.field
    zero, one = f.zero(), f.one()
    last_pivot = -1
    seen_zero_row = False
    for i in range(M.n_rows):
        row = M.row(i)
        lead = next(
            (j for j, v in enumerate(row) if not f.equals(v, zero)), None
        )
        if lead is None:
            seen_zero_row = True
            continue
        if seen_zero_row or lead <= last_pivot:
            return False
        if not f.equals(row[lead], one):
            return False
        for r in range(M.n_rows):
            if r != i and not f.equals(M.get(r, lead), zero):
                return False
        last_pivot = lead
    return True


def invert(M: Matrix) -> Matrix:
    """Return the inverse of square M as a new matrix, M is not modified.

    Reduces [M | I]; M is invertible iff the left half becomes the identity,
    in which case the right half is the inverse.
    """
    n = M.n_rows
    if M.n_cols != n:
        raise DimensionMismatchError(
            f"cannot invert non-square matrix of shape {M.shape}"
        )
    f = M.field
    ident = Matrix.identity(n, f)
    work = Matrix.from_rows([M.row(i) + ident.row(i) for i in range(n)], f)

    pivcols = rref(work)
    if pivcols[:n] != list(range(n)):
        logger.debug("singular %dx%d matrix, pivots=%s", n, n, pivcols)
        raise NotInvertibleError("matrix is not invertible")

    return Matrix.from_rows([work.row(i)[n:] for i in range(n)], f)
