from __future__ import annotations

from enum import Enum

import numpy as np

from .board import N_CELLS, SIZE, Board, Coord, check_coord, is_neighbor
from .encoding import encode


class ToggleMode(Enum):
    SINGLE = "single"
    CROSS = "cross"


def _cross_pattern(x: int, y: int) -> np.ndarray:
    """Cells flipped by a cross move at (x, y), indexed [y, x]."""
    pattern = np.zeros((SIZE, SIZE), dtype=bool)
    for y1 in range(SIZE):
        for x1 in range(SIZE):
            pattern[y1, x1] = is_neighbor(x, y, x1, y1)
    return pattern


def apply_single(board: Board, x: int, y: int) -> Board:
    x, y = check_coord(x, y)
    grid = board.state.copy()
    grid[y, x] ^= True
    return Board(grid)


def apply_cross(board: Board, x: int, y: int) -> Board:
    x, y = check_coord(x, y)
    return Board(board.state ^ _cross_pattern(x, y))


def apply_toggle(board: Board, x: int, y: int, mode: ToggleMode) -> Board:
    """Return a new board with the toggle applied; ``board`` is left untouched."""
    if mode is ToggleMode.SINGLE:
        return apply_single(board, x, y)
    if mode is ToggleMode.CROSS:
        return apply_cross(board, x, y)
    raise TypeError(f"Expected a ToggleMode, got {mode!r}")


def cross_mask(x: int, y: int) -> int:
    """Encoded set of cells a cross move at (x, y) flips."""
    x, y = check_coord(x, y)
    return encode(Board(_cross_pattern(x, y)))


# Indexed by Coord.index (3*y + x). code ^ CROSS_MASKS[i] applies a cross move.
CROSS_MASKS: tuple[int, ...] = tuple(
    cross_mask(*Coord.from_index(i)) for i in range(N_CELLS)
)
