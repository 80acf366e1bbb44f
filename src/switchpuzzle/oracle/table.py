from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator, NamedTuple, Optional

import numpy as np
from numpy.typing import NDArray

from ..algebra import build_effect_matrix, min_moves
from ..board import SIZE, Board, Coord
from ..encoding import N_STATES, SOLVED_STATE, check_code, encode
from ..moves import CROSS_MASKS

logger = logging.getLogger(__name__)

DEFAULT_ORACLE_PATH = Path(__file__).resolve().parents[1] / "data" / "puzzle.json"

NO_HINT = -1


class OracleIntegrityError(Exception):
    """Raised when an oracle table or artifact is incomplete or inconsistent."""

    pass


class OracleEntry(NamedTuple):
    hint: Optional[Coord]
    distance: int

    @property
    def is_solved(self) -> bool:
        return self.distance == 0


class Oracle:
    """Optimal first move and remaining distance for every encoded state.

    Backed by two read-only arrays indexed directly by the encoded state:
    ``distances`` of shape (512,) and ``hints`` of shape (512, 2) holding
    ``(x, y)`` or ``(-1, -1)`` where there is no move to make.
    """

    def __init__(self, distances: np.ndarray, hints: np.ndarray):
        distances = np.array(distances, dtype=np.int16)
        hints = np.array(hints, dtype=np.int8)
        if distances.shape != (N_STATES,):
            raise OracleIntegrityError(
                f"Expected {N_STATES} distances, got shape {distances.shape}"
            )
        if hints.shape != (N_STATES, 2):
            raise OracleIntegrityError(
                f"Expected hints of shape {(N_STATES, 2)}, got {hints.shape}"
            )
        distances.flags.writeable = False
        hints.flags.writeable = False
        self._distances: NDArray[np.int16] = distances
        self._hints: NDArray[np.int8] = hints

    # -- lookups --------------------------------------------------------------

    @property
    def distances(self) -> NDArray[np.int16]:
        return self._distances

    @property
    def hints(self) -> NDArray[np.int8]:
        return self._hints

    def lookup(self, code: int) -> OracleEntry:
        code = check_code(code)
        hx, hy = self._hints[code]
        hint = None if hx == NO_HINT else Coord(int(hx), int(hy))
        return OracleEntry(hint, int(self._distances[code]))

    def __getitem__(self, code: int) -> OracleEntry:
        return self.lookup(code)

    def entry_for(self, board: Board) -> OracleEntry:
        return self.lookup(encode(board))

    def __len__(self) -> int:
        return N_STATES

    def __iter__(self) -> Iterator[OracleEntry]:
        for code in range(N_STATES):
            yield self.lookup(code)

    @property
    def max_distance(self) -> int:
        return int(self._distances.max())

    def distance_histogram(self) -> np.ndarray:
        """Number of states at each distance, indexed by distance."""
        return np.bincount(self._distances.astype(np.int64))

    def solution_path(self, board: Board) -> list[Coord]:
        """Follow hints from ``board`` down to the all-off state."""
        code = encode(board)
        path: list[Coord] = []
        while code != SOLVED_STATE:
            hint = self.lookup(code).hint
            if hint is None or len(path) >= N_STATES:
                raise OracleIntegrityError(
                    f"Hints from state {encode(board)} never reach the solved state"
                )
            path.append(hint)
            code ^= CROSS_MASKS[hint.index]
        return path

    # -- validation -----------------------------------------------------------

    def validate(self, check_algebra: bool = False) -> None:
        """Check every invariant the session relies on.

        Each unsolved state must carry a hint whose cross move lowers the
        distance by exactly one, and no single cross move may change the
        distance by more than one. Together with distance 0 at the solved
        state this pins every distance to the true shortest-path length.
        With ``check_algebra`` the distances are also compared against the
        minimum-weight GF(2) solution of each state.
        """
        d = self._distances.astype(np.int64)
        h = self._hints

        if d[SOLVED_STATE] != 0 or h[SOLVED_STATE, 0] != NO_HINT:
            raise OracleIntegrityError(
                "Solved state must have distance 0 and no hint"
            )
        if np.any(d < 0):
            raise OracleIntegrityError("Negative distance in oracle")

        codes = np.arange(N_STATES)
        for mask in CROSS_MASKS:
            jumps = np.abs(d - d[codes ^ mask])
            if np.any(jumps > 1):
                bad = int(np.flatnonzero(jumps > 1)[0])
                raise OracleIntegrityError(
                    f"State {bad} is more than one move away from a neighbour"
                )

        for code in range(N_STATES):
            if code == SOLVED_STATE:
                continue
            hx, hy = (int(v) for v in h[code])
            if d[code] < 1:
                raise OracleIntegrityError(
                    f"Unsolved state {code} has distance {d[code]}"
                )
            if not (0 <= hx < SIZE and 0 <= hy < SIZE):
                raise OracleIntegrityError(
                    f"State {code} has invalid hint ({hx}, {hy})"
                )
            nxt = code ^ CROSS_MASKS[Coord(hx, hy).index]
            if d[nxt] != d[code] - 1:
                raise OracleIntegrityError(
                    f"Hint ({hx}, {hy}) for state {code} does not reduce distance"
                )

        if check_algebra:
            A = build_effect_matrix()
            for code in range(N_STATES):
                expected = min_moves(code, A)
                if expected != d[code]:
                    raise OracleIntegrityError(
                        f"State {code}: distance {d[code]}, algebra says {expected}"
                    )

    # -- artifact i/o ---------------------------------------------------------

    def to_dict(self) -> dict[str, dict]:
        out = {}
        for code, entry in enumerate(self):
            xy = None if entry.hint is None else [entry.hint.x, entry.hint.y]
            out[str(code)] = {"xy": xy, "steps": entry.distance}
        return out

    @classmethod
    def from_dict(cls, data: dict, validate: bool = True) -> "Oracle":
        """Build from the ``{"<code>": {"xy": [x, y] | null, "steps": n}}`` form."""
        if not isinstance(data, dict):
            raise OracleIntegrityError(
                f"Oracle artifact must be a mapping, got {type(data).__name__}"
            )
        known = {str(c) for c in range(N_STATES)}
        extra = [k for k in data if str(k) not in known]
        if extra:
            raise OracleIntegrityError(f"Unexpected oracle keys: {extra[:5]}")

        distances = np.zeros(N_STATES, dtype=np.int16)
        hints = np.full((N_STATES, 2), NO_HINT, dtype=np.int8)
        missing = []
        for code in range(N_STATES):
            record = data.get(str(code), data.get(code))
            if record is None:
                missing.append(code)
                continue
            distances[code], hint = _parse_record(code, record)
            if hint is not None:
                hints[code] = hint
        if missing:
            raise OracleIntegrityError(
                f"Oracle is missing {len(missing)} states, first: {missing[:5]}"
            )

        oracle = cls(distances, hints)
        if validate:
            oracle.validate()
        return oracle

    def save(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f)
        logger.info("Wrote oracle to %s", path)

    @classmethod
    def load(cls, path: str | Path, check_algebra: bool = False) -> "Oracle":
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise OracleIntegrityError(f"{path}: not valid JSON ({e})") from e
        oracle = cls.from_dict(data, validate=False)
        oracle.validate(check_algebra=check_algebra)
        logger.info(
            "Loaded oracle from %s (%d states, max distance %d)",
            path,
            len(oracle),
            oracle.max_distance,
        )
        return oracle

    @classmethod
    def load_default(cls) -> "Oracle":
        return cls.load(DEFAULT_ORACLE_PATH)


def _parse_record(code: int, record) -> tuple[int, Optional[Coord]]:
    if not isinstance(record, dict) or "steps" not in record:
        raise OracleIntegrityError(f"State {code}: malformed record {record!r}")

    steps = record["steps"]
    # No shortest path can exceed the number of states
    if (
        isinstance(steps, bool)
        or not isinstance(steps, int)
        or not 0 <= steps < N_STATES
    ):
        raise OracleIntegrityError(f"State {code}: bad steps {steps!r}")
    if steps == 0:
        return 0, None

    xy = record.get("xy")
    if xy is None:
        return steps, None
    if (
        not isinstance(xy, (list, tuple))
        or len(xy) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) for v in xy)
        or not all(0 <= v < SIZE for v in xy)
    ):
        raise OracleIntegrityError(f"State {code}: bad xy {xy!r}")
    return steps, Coord(xy[0], xy[1])
