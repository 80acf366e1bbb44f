"""Guided session state machine: editing, oracle-gated solving, reset."""

from __future__ import annotations

import pytest

from switchpuzzle.board import Board, Coord, InvalidCoordinateError
from switchpuzzle.config import SolverConfig
from switchpuzzle.encoding import N_STATES, decode, encode
from switchpuzzle.moves import apply_cross
from switchpuzzle.oracle import build_oracle
from switchpuzzle.session import GuidedSession, Mode, SessionView

ALL_COORDS = [(x, y) for y in range(3) for x in range(3)]


@pytest.fixture(scope="module")
def oracle():
    return build_oracle()


@pytest.fixture
def session(oracle) -> GuidedSession:
    return GuidedSession(oracle)


def _edit_to(session: GuidedSession, code: int) -> None:
    """Set up ``code`` through single-cell edits."""
    target = decode(code)
    for x, y in ALL_COORDS:
        if target.cell(x, y):
            assert session.toggle_cell(x, y)
    assert encode(session.board) == code


# -- initial state & editing --------------------------------------------------


def test_initial_state(session):
    assert session.mode is Mode.EDITING
    assert session.board == Board.empty()
    assert session.hint is None
    assert session.distance == 0


def test_editing_flips_single_cell(session):
    assert session.toggle_cell(1, 1)
    assert encode(session.board) == 16
    assert str(session.board) == "000\n010\n000"
    assert session.toggle_cell(1, 1)
    assert session.board.is_solved()


def test_editing_ignores_oracle(session):
    _edit_to(session, 0b111000101)
    assert session.mode is Mode.EDITING
    assert session.hint is None


# -- solving ------------------------------------------------------------------


def test_centre_scenario(session, oracle):
    session.toggle_cell(1, 1)
    session.set_mode(Mode.SOLVING)
    assert encode(session.board) == 16

    entry = oracle[16]
    assert session.hint == entry.hint
    assert session.distance == entry.distance

    before = session.board
    assert session.toggle_cell(*entry.hint)
    assert session.board == apply_cross(before, *entry.hint)
    assert session.distance == entry.distance - 1


def test_only_the_hint_is_accepted_in_every_state(session, oracle):
    for code in range(1, N_STATES):
        session.reset()
        _edit_to(session, code)
        session.set_mode(Mode.SOLVING)
        hint = session.hint
        assert hint == oracle[code].hint

        for x, y in ALL_COORDS:
            if Coord(x, y) == hint:
                continue
            assert session.toggle_cell(x, y) is False
            assert encode(session.board) == code
            assert session.mode is Mode.SOLVING

        before = session.board
        assert session.toggle_cell(*hint)
        assert session.board == apply_cross(before, *hint)
        assert session.distance == oracle[code].distance - 1


def test_corner_rejected_when_hint_is_centre(session):
    _edit_to(session, 186)
    session.set_mode("SOLVING")
    assert session.hint == Coord(1, 1)
    assert not session.toggle_cell(0, 0)
    assert encode(session.board) == 186
    assert session.toggle_cell(1, 1)
    assert session.is_solved


def test_follow_hints_to_solved(session, oracle):
    _edit_to(session, 511)
    session.set_mode(Mode.SOLVING)
    moves = 0
    while session.hint is not None:
        assert session.toggle_cell(*session.hint)
        moves += 1
    assert moves == oracle[511].distance
    assert session.is_solved


def test_solved_board_has_no_legal_move(session):
    session.set_mode(Mode.SOLVING)
    assert session.hint is None
    for x, y in ALL_COORDS:
        assert not session.toggle_cell(x, y)
    assert session.board.is_solved()


def test_back_to_editing_keeps_board(session):
    _edit_to(session, 300)
    session.set_mode(Mode.SOLVING)
    session.set_mode(Mode.SOLVING)
    session.set_mode(Mode.EDITING)
    assert encode(session.board) == 300
    assert session.hint is None
    assert session.toggle_cell(0, 0)
    assert encode(session.board) == 301


def test_invalid_mode(session):
    with pytest.raises(TypeError):
        session.set_mode(1)
    with pytest.raises(ValueError):
        session.set_mode("PLAYING")


@pytest.mark.parametrize("mode", list(Mode))
def test_invalid_coordinate(session, mode):
    session.set_mode(mode)
    with pytest.raises(InvalidCoordinateError):
        session.toggle_cell(3, 0)


# -- reset & view -------------------------------------------------------------


@pytest.mark.parametrize("code, mode", [(0, Mode.EDITING), (16, Mode.SOLVING), (511, Mode.SOLVING)])
def test_reset(session, code, mode):
    _edit_to(session, code)
    session.set_mode(mode)
    session.reset()
    assert session.board == Board.empty()
    assert session.mode is Mode.EDITING
    session.reset()
    assert session.board == Board.empty()
    assert session.mode is Mode.EDITING


def test_view(session, oracle):
    _edit_to(session, 16)
    view = session.view()
    assert isinstance(view, SessionView)
    assert view.hint is None
    assert view.cells == ((False,) * 3, (False, True, False), (False,) * 3)

    session.set_mode(Mode.SOLVING)
    view = session.view()
    assert view.mode is Mode.SOLVING
    assert view.hint == oracle[16].hint
    assert view.board == session.board


def test_boards_are_not_aliased(session):
    session.toggle_cell(0, 0)
    first = session.board
    session.toggle_cell(2, 2)
    assert encode(first) == 1
    assert encode(session.board) == 1 + 256


# -- construction -------------------------------------------------------------


def test_default_oracle_is_packaged_artifact(oracle):
    s = GuidedSession()
    assert s.oracle[511] == oracle[511]
    assert GuidedSession().oracle is s.oracle


def test_from_config(oracle, tmp_path):
    path = tmp_path / "oracle.json"
    oracle.save(path)
    s = GuidedSession.from_config(SolverConfig(oracle_path=path))
    assert s.oracle[16] == oracle[16]

    s = GuidedSession.from_config(SolverConfig())
    assert len(s.oracle) == 512
