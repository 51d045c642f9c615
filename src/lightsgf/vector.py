from __future__ import annotations

from typing import Iterable, List, Sequence

from .errors import DimensionMismatchError
from .field import Field


def zero_vector(field: Field, length: int) -> list:
    return [field.zero() for _ in range(length)]


def vec_add(field: Field, u: Sequence, v: Sequence) -> list:
    """Component-wise u + v. Lengths must agree, nothing is padded."""
    if len(u) != len(v):
        raise DimensionMismatchError(
            f"cannot add vectors of length {len(u)} and {len(v)}"
        )
    return [field.add(a, b) for a, b in zip(u, v)]


def vec_scale(field: Field, v: Sequence, factor) -> list:
    return [field.multiply(a, factor) for a in v]


def vec_sum(field: Field, vectors: Iterable[Sequence], length: int) -> List:
    total = zero_vector(field, length)
    for v in vectors:
        total = vec_add(field, total, v)
    return total


def vec_equals(field: Field, u: Sequence, v: Sequence) -> bool:
    return len(u) == len(v) and all(field.equals(a, b) for a, b in zip(u, v))
