from switchpuzzle.board import (
    Board,
    Coord,
    InvalidCoordinateError,
    check_coord,
    is_neighbor,
)
from switchpuzzle.config import ConfigError, SolverConfig, load_config
from switchpuzzle.encoding import N_STATES, decode, encode
from switchpuzzle.moves import (
    CROSS_MASKS,
    ToggleMode,
    apply_cross,
    apply_single,
    apply_toggle,
)
from switchpuzzle.oracle import (
    Oracle,
    OracleBuildError,
    OracleEntry,
    OracleIntegrityError,
    build_oracle,
)
from switchpuzzle.session import GuidedSession, Mode, SessionView
