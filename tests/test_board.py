from __future__ import annotations

import numpy as np
import pytest

from switchpuzzle.board import (
    Board,
    Coord,
    InvalidCoordinateError,
    check_coord,
    is_neighbor,
)
from switchpuzzle.encoding import N_STATES, array_to_code, decode, encode

ALL_COORDS = [(x, y) for y in range(3) for x in range(3)]


# -- encoding -----------------------------------------------------------------


def test_encode_decode_bijection():
    seen = set()
    for code in range(N_STATES):
        board = decode(code)
        assert encode(board) == code
        assert decode(encode(board)) == board
        seen.add(board)
    assert len(seen) == N_STATES


def test_bit_layout_is_row_major():
    for x, y in ALL_COORDS:
        grid = np.zeros((3, 3), dtype=bool)
        grid[y, x] = True
        assert encode(Board(grid)) == 1 << (3 * y + x)


def test_centre_cell_is_16():
    board = Board.from_rows([[0, 0, 0], [0, 1, 0], [0, 0, 0]])
    assert encode(board) == 16
    assert encode(Board.empty()) == 0
    assert encode(Board(np.ones((3, 3)))) == 511


def test_array_to_code_matches_encode():
    board = decode(0b101100011)
    assert array_to_code(board.to_flat()) == encode(board)


@pytest.mark.parametrize("code", [-1, 512, 1000, True, 3.0, "7"])
def test_decode_rejects_out_of_range(code):
    with pytest.raises(ValueError):
        decode(code)


# -- board value type ---------------------------------------------------------


@pytest.mark.parametrize("shape", [(2, 2), (3, 4), (9,), (4, 4)])
def test_board_rejects_wrong_shape(shape):
    with pytest.raises(ValueError):
        Board(np.zeros(shape, dtype=bool))


def test_board_copies_input():
    grid = np.zeros((3, 3), dtype=bool)
    board = Board(grid)
    grid[0, 0] = True
    assert board.is_solved()
    with pytest.raises(ValueError):
        board.state[1, 1] = True


def test_board_queries():
    board = Board.from_rows([[1, 0, 0], [0, 0, 0], [0, 1, 1]])
    assert board.count_on() == 3
    assert not board.is_solved()
    assert board.cell(0, 0) and board.cell(2, 2)
    assert not board.cell(2, 0)
    assert str(board) == "100\n000\n011"
    assert board.copy() == board
    assert hash(board.copy()) == hash(board)
    assert board != Board.empty()


def test_hash_ignores_memory_layout():
    grid = np.array([[1, 0, 0], [1, 1, 0], [0, 0, 1]], dtype=bool)
    fortran = Board(np.asfortranarray(grid))
    board = Board(grid)
    assert fortran == board
    assert hash(fortran) == hash(board)
    assert len({board, fortran, Board.empty()}) == 2


# -- coordinates & adjacency --------------------------------------------------


def test_is_neighbor_reflexive_and_symmetric():
    for x0, y0 in ALL_COORDS:
        assert is_neighbor(x0, y0, x0, y0)
        for x1, y1 in ALL_COORDS:
            assert is_neighbor(x0, y0, x1, y1) == is_neighbor(x1, y1, x0, y0)


def test_is_neighbor_excludes_diagonals_and_wraparound():
    assert is_neighbor(1, 1, 1, 0)
    assert is_neighbor(1, 1, 0, 1)
    assert not is_neighbor(1, 1, 0, 0)
    assert not is_neighbor(0, 0, 2, 0)
    assert not is_neighbor(0, 0, 0, 2)


def test_coord_index_round_trip():
    for i in range(9):
        assert Coord.from_index(i).index == i
    assert Coord.from_index(5) == Coord(2, 1)


@pytest.mark.parametrize("x, y", [(-1, 0), (3, 0), (0, 3), (1, -2), (1.0, 1)])
def test_check_coord_rejects(x, y):
    with pytest.raises(InvalidCoordinateError):
        check_coord(x, y)


def test_check_coord_accepts_numpy_ints():
    assert check_coord(np.int64(2), 1) == Coord(2, 1)
