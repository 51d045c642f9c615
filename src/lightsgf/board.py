from __future__ import annotations

from typing import Optional

import numpy as np

from .actions import build_action_matrix, neighbours
from .algebra import solve


class BoardState:
    def __init__(self, n: int, state: np.ndarray | None = None):
        self.n = n
        if state is None:
            self.state = np.zeros((n, n), dtype=bool)
        else:
            state = np.asarray(state)
            if state.shape != (n, n):
                raise ValueError(f"expected board of shape {(n, n)}, got {state.shape}")
            self.state = state.astype(bool, copy=True)

    def copy(self) -> "BoardState":
        return BoardState(self.n, self.state.copy())

    def to_flat(self) -> np.ndarray:
        return self.state.reshape(-1)

    @staticmethod
    def from_flat(n: int, flat) -> "BoardState":
        return BoardState(n, np.asarray(flat).reshape(n, n))

    def count_on(self) -> int:
        return int(self.state.sum())

    @property
    def is_off(self) -> bool:
        return not self.state.any()

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.n and 0 <= col < self.n

    def press(self, index: int, adjacent: bool = True) -> "BoardState":
        """Return a new board with cell `index` (row-major) pressed.

        A press toggles the cell and, if `adjacent`, its orthogonal neighbours.
        """
        if not 0 <= index < self.n * self.n:
            raise IndexError(f"cell {index} out of range for a {self.n}x{self.n} board")
        r, c = divmod(index, self.n)
        new = self.copy()
        cells = neighbours(self.n, r, c) if adjacent else [(r, c)]
        for rr, cc in cells:
            new.state[rr, cc] ^= True
        return new

    def apply(self, presses) -> "BoardState":
        """Press every cell whose entry in the flat 0/1 vector `presses` is set."""
        flat = np.asarray(presses).reshape(-1)
        if flat.size != self.n * self.n:
            raise ValueError(
                f"expected {self.n * self.n} presses, got {flat.size}"
            )
        board = self
        for idx in np.flatnonzero(flat):
            board = board.press(int(idx))
        return board

    def best_solution(self) -> Optional[np.ndarray]:
        """Press grid (n, n) of 0/1 that turns this board off, or None."""
        solution = solve(build_action_matrix(self.n), self.to_flat())
        if solution is None:
            return None
        return np.array(solution, dtype=np.uint8).reshape(self.n, self.n)

    def is_solvable(self) -> bool:
        return self.best_solution() is not None

    def __eq__(self, other) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return self.n == other.n and bool(np.array_equal(self.state, other.state))

    __hash__ = None

    def __repr__(self):
        return f"BoardState(n={self.n}, on={self.count_on()})"

    def __str__(self) -> str:
        return "\n".join(
            "".join("1" if cell else "0" for cell in row) for row in self.state
        )
