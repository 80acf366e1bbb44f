import numpy as np

from switchpuzzle.board import N_CELLS, Board

N_STATES = 1 << N_CELLS  # 512
SOLVED_STATE = 0

_POWERS = 1 << np.arange(N_CELLS, dtype=np.uint16)  # [1,2,4,...,256]


def encode(board: Board) -> int:
    """
    Encode a 3x3 board as an integer in [0, 512).
    We interpret the flattened bits as a little-endian binary number,
    so cell (x, y) lands on bit 3*y + x.
    """
    flat = board.to_flat().astype(np.uint16)
    return int(np.dot(flat, _POWERS))


def array_to_code(bits: np.ndarray) -> int:
    """
    Same as above but for a flat (9,) 0/1 numpy array.
    """
    bits = np.asarray(bits).astype(np.uint16).reshape(-1)
    if bits.size != N_CELLS:
        raise ValueError(f"Expected {N_CELLS} bits, got {bits.size}")
    return int(np.dot(bits, _POWERS))


def check_code(code) -> int:
    if isinstance(code, bool) or not isinstance(code, (int, np.integer)):
        raise ValueError(f"Encoded state must be an int, got {code!r}")
    if not 0 <= code < N_STATES:
        raise ValueError(
            f"Encoded state {code} outside [0, {N_STATES - 1}]"
        )
    return int(code)


def decode(code: int) -> Board:
    code = check_code(code)
    bits = (code & _POWERS) != 0
    return Board.from_flat(bits)
