import pytest

from lightsgf.actions import (
    build_action_matrix,
    check_size,
    manhattan,
    neighbours,
)
from lightsgf.field import BinaryField

EXPECTED_3X3 = [
    [1, 1, 0, 1, 0, 0, 0, 0, 0],
    [1, 1, 1, 0, 1, 0, 0, 0, 0],
    [0, 1, 1, 0, 0, 1, 0, 0, 0],
    [1, 0, 0, 1, 1, 0, 1, 0, 0],
    [0, 1, 0, 1, 1, 1, 0, 1, 0],
    [0, 0, 1, 0, 1, 1, 0, 0, 1],
    [0, 0, 0, 1, 0, 0, 1, 1, 0],
    [0, 0, 0, 0, 1, 0, 1, 1, 1],
    [0, 0, 0, 0, 0, 1, 0, 1, 1],
]


def test_size_3_fixture():
    assert build_action_matrix(3).to_lists() == EXPECTED_3X3


def test_size_1():
    assert build_action_matrix(1).to_lists() == [[1]]


@pytest.mark.parametrize("n", range(3, 8))
def test_symmetric(n):
    A = build_action_matrix(n)
    N = n * n
    assert A.shape == (N, N)
    for i in range(N):
        for j in range(N):
            assert A.get(i, j) == A.get(j, i)
    assert A.transpose() == A


@pytest.mark.parametrize("n", [2, 4, 6])
def test_entries_follow_neighbourhood(n):
    A = build_action_matrix(n)
    for i in range(n * n):
        r, c = divmod(i, n)
        cells = {rr * n + cc for rr, cc in neighbours(n, r, c)}
        assert {j for j in range(n * n) if A.get(i, j)} == cells
        assert all(manhattan(n, i, j) <= 1 for j in cells)


def test_fresh_matrix_each_call():
    A = build_action_matrix(4)
    A.set(0, 0, 0)
    A.swap_rows(0, 5)
    assert build_action_matrix(4).get(0, 0) == 1
    assert build_action_matrix(4) != A


def test_other_field():
    f = BinaryField(0b111)
    A = build_action_matrix(2, field=f)
    assert A.field == f
    assert A.to_lists() == [[1, 1, 1, 0], [1, 1, 0, 1], [1, 0, 1, 1], [0, 1, 1, 1]]


def test_neighbours_corner_and_centre():
    assert sorted(neighbours(3, 0, 0)) == [(0, 0), (0, 1), (1, 0)]
    assert len(neighbours(3, 1, 1)) == 5


@pytest.mark.parametrize("bad", [0, -2, 11])
def test_size_bounds(bad):
    with pytest.raises(ValueError):
        build_action_matrix(bad)


@pytest.mark.parametrize("bad", [2.5, "3", True, None])
def test_size_type(bad):
    with pytest.raises(TypeError):
        check_size(bad)


def test_custom_max_size():
    assert build_action_matrix(3, max_size=3).shape == (9, 9)
    with pytest.raises(ValueError):
        build_action_matrix(4, max_size=3)
