"""Guided solving session: free editing, then oracle-gated solving."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import Board, Coord, check_coord
from .config import SolverConfig
from .moves import apply_cross, apply_single
from .oracle import Oracle

logger = logging.getLogger(__name__)

_default_oracle: Optional[Oracle] = None


def default_oracle() -> Oracle:
    """Packaged oracle, loaded and validated once per process."""
    global _default_oracle
    if _default_oracle is None:
        _default_oracle = Oracle.load_default()
    return _default_oracle


class Mode(Enum):
    EDITING = "EDITING"
    SOLVING = "SOLVING"


@dataclass(frozen=True)
class SessionView:
    """Everything a presentation layer needs to draw the puzzle."""

    board: Board
    mode: Mode
    hint: Optional[Coord]
    cells: tuple[tuple[bool, ...], ...]


class GuidedSession:
    def __init__(self, oracle: Oracle | None = None):
        self.oracle = oracle if oracle is not None else default_oracle()
        self._board = Board.empty()
        self._mode = Mode.EDITING

    @classmethod
    def from_config(cls, config: SolverConfig) -> "GuidedSession":
        if config.oracle_path is None:
            if config.validate_algebra:
                default_oracle().validate(check_algebra=True)
            return cls()
        oracle = Oracle.load(
            config.oracle_path, check_algebra=config.validate_algebra
        )
        return cls(oracle)

    # -- read model -----------------------------------------------------------

    @property
    def board(self) -> Board:
        return self._board

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def distance(self) -> int:
        return self.oracle.entry_for(self._board).distance

    @property
    def is_solved(self) -> bool:
        return self._board.is_solved()

    @property
    def hint(self) -> Optional[Coord]:
        """Next optimal move, only while solving an unsolved board."""
        if self._mode is not Mode.SOLVING:
            return None
        entry = self.oracle.entry_for(self._board)
        if entry.is_solved:
            return None
        return entry.hint

    def view(self) -> SessionView:
        return SessionView(
            board=self._board,
            mode=self._mode,
            hint=self.hint,
            cells=self._board.rows(),
        )

    # -- input events ---------------------------------------------------------

    def set_mode(self, mode: Mode | str) -> None:
        if isinstance(mode, str):
            mode = Mode(mode)
        if not isinstance(mode, Mode):
            raise TypeError(f"Expected a Mode, got {mode!r}")
        if mode is not self._mode:
            logger.debug("Mode %s -> %s", self._mode.value, mode.value)
        self._mode = mode

    def toggle_cell(self, x: int, y: int) -> bool:
        """Apply a user click at (x, y).

        While editing, the click flips just that cell. While solving, it is
        accepted only on the hinted cell and then flips the whole cross.
        Returns False when the click was rejected; the board is unchanged.
        """
        target = check_coord(x, y)

        if self._mode is Mode.EDITING:
            self._board = apply_single(self._board, *target)
            return True

        hint = self.hint
        if hint is None or target != hint:
            logger.debug("Rejected toggle %s (hint %s)", tuple(target), hint)
            return False

        self._board = apply_cross(self._board, *target)
        logger.debug(
            "Applied cross at %s, %d moves left", tuple(target), self.distance
        )
        return True

    def reset(self) -> None:
        self._board = Board.empty()
        self._mode = Mode.EDITING
