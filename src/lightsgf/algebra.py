from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from .errors import DimensionMismatchError
from .field import Field
from .matrix import Matrix
from .rref import rref

logger = logging.getLogger(__name__)


def as_elements(field: Field, values: Sequence) -> list:
    """Cast light values to field elements: booleans map to one()/zero()."""
    if isinstance(values, np.ndarray):
        values = values.reshape(-1).tolist()
    out = []
    for v in values:
        if isinstance(v, (bool, np.bool_)):
            out.append(field.one() if v else field.zero())
        elif isinstance(v, np.generic):
            out.append(v.item())
        else:
            out.append(v)
    return out


def solve(A: Matrix, lights: Sequence) -> Optional[list]:
    """Solve A x = lights over A's field.

    Returns one solution (free variables set to zero) as a fresh list, or
    None when the system is inconsistent, i.e. no set of presses reaches the
    given light state. A is not modified.
    """
    f = A.field
    b = as_elements(f, lights)
    if len(b) != A.n_rows:
        raise DimensionMismatchError(
            f"light vector of length {len(b)} does not match {A.n_rows} cells"
        )
    n = A.n_cols
    M = A.augment(b)  # [A | b], A itself stays untouched
    pivcols = rref(M)
    zero = f.zero()

    # Inconsistency check: 0...0 | c rows with c != 0
    for r in range(M.n_rows):
        row = M.row(r)
        if all(f.equals(v, zero) for v in row[:n]) and not f.equals(
            row[n], zero
        ):
            logger.debug("unsolvable: row %d reduces to 0 = %r", r, row[n])
            return None

    # Particular solution: free vars = 0, each pivot var read off its row
    x = [zero] * n
    for ri, pc in enumerate(pivcols):
        x[pc] = M.get(ri, n)
    logger.debug("solved %dx%d system, rank %d", A.n_rows, n, len(pivcols))
    return x


def is_solvable(A: Matrix, lights: Sequence) -> bool:
    return solve(A, lights) is not None


def null_space_basis(A: Matrix) -> list[list]:
    """Basis of {x : A x = 0}.

    Adding any combination of these vectors to a solution of A x = b gives
    another solution, so b has |F|**len(basis) solutions when it has one.
    """
    f = A.field
    R = A.copy()
    pivcols = rref(R)
    n = A.n_cols
    frees = [j for j in range(n) if j not in pivcols]
    basis: list[list] = []
    for free in frees:
        v = [f.zero()] * n
        v[free] = f.one()
        for ri, pc in enumerate(pivcols):
            v[pc] = f.negate(R.get(ri, free))
        basis.append(v)
    return basis


def column_space_basis(A: Matrix) -> list[list]:
    """Basis of the column space of A, taken from A's own columns.

    The pivot columns of RREF(A) mark a maximal independent set of A's
    columns; those original columns are returned. Every field-linear
    combination of them is a light vector that solve() accepts.
    """
    R = A.copy()
    pivcols = rref(R)
    logger.debug("column space of %dx%d matrix has rank %d", *A.shape, len(pivcols))
    return [A.column(c) for c in pivcols]
