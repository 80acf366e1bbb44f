from __future__ import annotations

from typing import Iterable, NamedTuple

import numpy as np

SIZE = 3
N_CELLS = SIZE * SIZE


class InvalidCoordinateError(ValueError):
    """Raised when a cell coordinate lies outside the 3x3 grid."""

    pass


class Coord(NamedTuple):
    x: int  # column
    y: int  # row

    @property
    def index(self) -> int:
        return self.y * SIZE + self.x

    @staticmethod
    def from_index(i: int) -> "Coord":
        y, x = divmod(int(i), SIZE)
        return Coord(x, y)


def check_coord(x, y) -> Coord:
    for v in (x, y):
        if isinstance(v, bool) or not isinstance(v, (int, np.integer)):
            raise InvalidCoordinateError(f"Coordinate must be an int, got {v!r}")
        if not 0 <= v < SIZE:
            raise InvalidCoordinateError(
                f"Coordinate ({x}, {y}) outside the {SIZE}x{SIZE} grid"
            )
    return Coord(int(x), int(y))


def is_neighbor(x0: int, y0: int, x1: int, y1: int) -> bool:
    """Orthogonal adjacency, reflexive: a cell is its own neighbor."""
    return (x0 == x1 and abs(y0 - y1) <= 1) or (
        y0 == y1 and abs(x0 - x1) <= 1
    )


class Board:
    def __init__(self, state: np.ndarray | None = None):
        if state is None:
            self._state = np.zeros((SIZE, SIZE), dtype=bool)
        else:
            state = np.asarray(state)
            if state.shape != (SIZE, SIZE):
                raise ValueError(
                    f"Board must be {SIZE}x{SIZE}, got shape {state.shape}"
                )
            self._state = state.astype(bool, copy=True)
        self._state.flags.writeable = False

    @staticmethod
    def empty() -> "Board":
        return Board()

    @staticmethod
    def from_rows(rows: Iterable[Iterable[int]]) -> "Board":
        return Board(np.array([list(r) for r in rows], dtype=bool))

    @staticmethod
    def from_flat(flat: np.ndarray) -> "Board":
        flat = np.asarray(flat)
        if flat.size != N_CELLS:
            raise ValueError(f"Expected {N_CELLS} cells, got {flat.size}")
        return Board(flat.reshape(SIZE, SIZE))

    @property
    def state(self) -> np.ndarray:
        """Read-only view of the cells, indexed ``[y, x]``."""
        return self._state

    def copy(self) -> "Board":
        return Board(self._state)

    def to_flat(self) -> np.ndarray:
        return self._state.reshape(-1)

    def cell(self, x: int, y: int) -> bool:
        x, y = check_coord(x, y)
        return bool(self._state[y, x])

    def count_on(self) -> int:
        return int(self._state.sum())

    def is_solved(self) -> bool:
        return not self._state.any()

    def rows(self) -> tuple[tuple[bool, ...], ...]:
        return tuple(tuple(bool(c) for c in row) for row in self._state)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self._state, other._state))

    def __hash__(self) -> int:
        # tobytes() is row-major regardless of the array's memory layout
        return hash(self._state.tobytes())

    def __repr__(self):
        return f"Board(on={self.count_on()})"

    def __str__(self) -> str:
        return "\n".join(
            "".join("1" if cell else "0" for cell in row) for row in self._state
        )
