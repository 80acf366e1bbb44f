from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from .board import N_CELLS, Coord, is_neighbor
from .encoding import check_code


def build_effect_matrix() -> np.ndarray:
    """Return the 9x9 effect matrix A over GF(2) for cross moves.
    Column j holds the cells flipped by a cross move at cell j, so a set of
    moves x clears board b exactly when A x = b.
    """
    A = np.zeros((N_CELLS, N_CELLS), dtype=np.uint8)
    for j in range(N_CELLS):
        x0, y0 = Coord.from_index(j)
        for i in range(N_CELLS):
            x1, y1 = Coord.from_index(i)
            if is_neighbor(x0, y0, x1, y1):
                A[i, j] = 1
    return A


def gf2_rref_augmented(
    A: np.ndarray, b: np.ndarray
) -> Tuple[np.ndarray, list[int]]:
    """Return RREF of [A|b] over GF(2) and the pivot columns."""
    m, n = A.shape
    M = np.concatenate(
        [(A % 2).astype(np.uint8), (b % 2).astype(np.uint8).reshape(-1, 1)],
        axis=1,
    )

    row = 0
    pivcols: list[int] = []
    for col in range(n):
        candidates = np.flatnonzero(M[row:, col])
        if candidates.size == 0:
            continue
        pivot = row + int(candidates[0])
        if pivot != row:
            M[[row, pivot]] = M[[pivot, row]]
        # Gauss-Jordan: clear the column everywhere but the pivot row
        others = np.flatnonzero(M[:, col])
        for r in others:
            if r != row:
                M[r, :] ^= M[row, :]
        pivcols.append(col)
        row += 1
        if row == m:
            break
    return M, pivcols


def _back_substitute(
    R_A: np.ndarray, pivcols: list[int], rhs: np.ndarray, x: np.ndarray
) -> np.ndarray:
    n = R_A.shape[1]
    for ri, pc in enumerate(pivcols):
        acc = int(rhs[ri])
        if pc + 1 < n:
            acc ^= int(np.bitwise_and(R_A[ri, pc + 1 :], x[pc + 1 :]).sum() % 2)
        x[pc] = acc
    return x


def gf2_solve_with_nullspace(
    A: np.ndarray, b: np.ndarray
) -> Tuple[Optional[np.ndarray], List[np.ndarray], bool]:
    """Solve A x = b over GF(2) and return a nullspace basis of A.

    Returns:
        x0: one particular solution (uint8) or None if inconsistent
        basis: nullspace basis vectors v with A v = 0
        solvable: bool
    """
    n = A.shape[1]
    R, pivcols = gf2_rref_augmented(A, b)
    R_A, R_b = R[:, :n], R[:, n]

    # 0...0 | 1 rows mean no solution
    if np.any((R_A.sum(axis=1) == 0) & (R_b == 1)):
        return None, [], False

    x0 = _back_substitute(R_A, pivcols, R_b, np.zeros(n, dtype=np.uint8))

    zeros = np.zeros(R.shape[0], dtype=np.uint8)
    basis: list[np.ndarray] = []
    for f in (j for j in range(n) if j not in pivcols):
        v = np.zeros(n, dtype=np.uint8)
        v[f] = 1
        basis.append(_back_substitute(R_A, pivcols, zeros, v))

    return x0, basis, True


def gf2_min_weight_solution(
    A: np.ndarray, b: np.ndarray
) -> Tuple[Optional[np.ndarray], bool]:
    """Return the minimum-Hamming-weight solution to A x = b (if solvable).

    Every solution is x0 plus some subset of the nullspace basis, so all
    2**k subsets are scored in one pass; ties keep x0. For the 3x3 cross
    effect matrix the nullspace is trivial and x0 is returned directly.
    """
    x0, basis, ok = gf2_solve_with_nullspace(A, b)
    if not ok or x0 is None:
        return None, False
    if not basis:
        return x0, True

    k = len(basis)
    B = np.array(basis, dtype=np.int64)  # (k, n)
    # row s selects basis vector i when bit i of s is set
    picks = (np.arange(1 << k)[:, None] >> np.arange(k)) & 1
    candidates = ((x0.astype(np.int64) + picks.dot(B)) % 2).astype(np.uint8)
    best = int(np.argmin(candidates.sum(axis=1)))
    return candidates[best], True


def min_moves(code: int, A: np.ndarray | None = None) -> Optional[int]:
    """Fewest cross moves clearing the encoded state, or None if unsolvable.

    Cross moves commute and undo themselves, so an optimal solution presses
    each cell at most once and its length is the solution's weight.
    """
    code = check_code(code)
    if A is None:
        A = build_effect_matrix()
    b = np.array([(code >> i) & 1 for i in range(N_CELLS)], dtype=np.uint8)
    solution, ok = gf2_min_weight_solution(A, b)
    if not ok or solution is None:
        return None
    return int(solution.sum())
