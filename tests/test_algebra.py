import numpy as np
import pytest

from lightsgf.actions import build_action_matrix
from lightsgf.algebra import (
    as_elements,
    column_space_basis,
    is_solvable,
    null_space_basis,
    solve,
)
from lightsgf.board import BoardState
from lightsgf.errors import DimensionMismatchError
from lightsgf.field import BinaryField, gf2
from lightsgf.matrix import Matrix
from lightsgf.vector import vec_add, vec_sum


def _lights_from_presses(n, presses):
    return BoardState(n).apply(presses).to_flat()


@pytest.mark.parametrize("n", range(3, 8))
def test_round_trip_random_presses(fx_rng, n):
    A = build_action_matrix(n)
    for _ in range(3):
        presses = fx_rng.random(n * n) < 0.4
        lights = _lights_from_presses(n, presses)
        solution = solve(A, lights)
        assert solution is not None
        replay = _lights_from_presses(n, solution)
        np.testing.assert_array_equal(replay, lights)
        assert A.multiply_vector(solution) == [int(v) for v in lights]


@pytest.mark.parametrize("n", [3, 4, 5])
def test_zero_lights_give_zero_solution(n):
    A = build_action_matrix(n)
    assert solve(A, [False] * (n * n)) == [0] * (n * n)


def test_unique_solution_3x3():
    # 3x3 is full rank: pressing cell 4 is the only way to light the plus
    A = build_action_matrix(3)
    lights = [0, 1, 0, 1, 1, 1, 0, 1, 0]
    assert solve(A, lights) == [0, 0, 0, 0, 1, 0, 0, 0, 0]


def test_single_light_5x5_unsolvable():
    A = build_action_matrix(5)
    lights = [False] * 25
    lights[0] = True
    assert solve(A, lights) is None
    assert not is_solvable(A, lights)


def test_solve_leaves_action_matrix_untouched():
    A = build_action_matrix(4)
    before = A.copy()
    solve(A, np.ones(16, dtype=bool))
    assert A == before


def test_solve_dimension_mismatch():
    A = build_action_matrix(3)
    with pytest.raises(DimensionMismatchError):
        solve(A, [1] * 8)


def test_solve_accepts_numpy_input():
    A = build_action_matrix(3)
    lights = np.zeros((3, 3), dtype=np.uint8)
    lights[0, 0] = 1
    assert solve(A, lights) == solve(A, [True] + [False] * 8)


def test_as_elements():
    assert as_elements(gf2, [True, False, 1, np.uint8(0), np.bool_(True)]) == [
        1,
        0,
        1,
        0,
        1,
    ]


def test_solve_over_extension_field():
    f = BinaryField(0x11B)
    A = Matrix.from_rows([[0x02, 0x03], [0x01, 0x01]], f)
    x = [0x57, 0x83]
    b = A.multiply_vector(x)
    assert solve(A, b) == x


@pytest.mark.parametrize("n", [4, 5])
def test_null_space(n):
    A = build_action_matrix(n)
    basis = null_space_basis(A)
    assert len(basis) == {4: 4, 5: 2}[n]
    for v in basis:
        assert any(v)
        assert A.multiply_vector(v) == [0] * (n * n)


def test_null_space_full_rank_is_empty():
    assert null_space_basis(build_action_matrix(3)) == []


def test_null_space_shifts_solutions(fx_rng):
    n = 5
    A = build_action_matrix(n)
    lights = _lights_from_presses(n, fx_rng.random(n * n) < 0.5)
    x = solve(A, lights)
    for v in null_space_basis(A):
        other = vec_add(gf2, x, v)
        np.testing.assert_array_equal(_lights_from_presses(n, other), lights)


def test_column_space_identity():
    ident = Matrix.from_rows([[1, 0], [0, 1]], gf2)
    assert column_space_basis(ident) == [[1, 0], [0, 1]]


def test_column_space_uses_original_columns():
    m = Matrix.from_rows([[1, 1, 0], [0, 1, 1], [1, 0, 1]], gf2)
    # third column is the sum of the first two
    assert column_space_basis(m) == [[1, 0, 1], [1, 1, 0]]
    assert m.to_lists() == [[1, 1, 0], [0, 1, 1], [1, 0, 1]]


@pytest.mark.parametrize(("n", "rank"), [(3, 9), (4, 12), (5, 23)])
def test_column_space_basis_is_solvable(fx_rng, n, rank):
    A = build_action_matrix(n)
    before = A.copy()
    basis = column_space_basis(A)
    assert A == before
    assert len(basis) == rank
    for v in basis:
        assert len(v) == n * n
        assert is_solvable(A, v)
    for _ in range(5):
        keep = fx_rng.random(len(basis)) < 0.5
        combo = vec_sum(gf2, [v for v, k in zip(basis, keep) if k], n * n)
        assert is_solvable(A, combo)
