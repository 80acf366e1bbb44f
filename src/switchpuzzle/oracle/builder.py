from __future__ import annotations

import logging
from collections import deque

import numpy as np

from ..board import Coord
from ..encoding import N_STATES, SOLVED_STATE
from ..moves import CROSS_MASKS
from .table import NO_HINT, Oracle

logger = logging.getLogger(__name__)

UNVISITED = -1


class OracleBuildError(Exception):
    """Raised when the search fails to reach every state."""

    pass


def build_oracle() -> Oracle:
    """Breadth-first search outward from the all-off board.

    Cross moves undo themselves, so the coordinate that first reaches a
    state from its parent is also the move leading back to the parent.
    That coordinate becomes the state's hint. Coordinates are tried in
    row-major order and the first discovery wins.
    """
    distances = np.full(N_STATES, UNVISITED, dtype=np.int16)
    hints = np.full((N_STATES, 2), NO_HINT, dtype=np.int8)

    distances[SOLVED_STATE] = 0
    frontier = deque([SOLVED_STATE])
    visited = 1

    while frontier:
        s = frontier.popleft()
        for i, mask in enumerate(CROSS_MASKS):
            nxt = s ^ mask
            if distances[nxt] != UNVISITED:
                continue
            distances[nxt] = distances[s] + 1
            hints[nxt] = Coord.from_index(i)
            frontier.append(nxt)
            visited += 1

    if visited != N_STATES:
        raise OracleBuildError(
            f"Search visited {visited} of {N_STATES} states"
        )

    oracle = Oracle(distances, hints)
    logger.info(
        "Built oracle: %d states, max distance %d",
        visited,
        oracle.max_distance,
    )
    return oracle
