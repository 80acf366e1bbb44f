from switchpuzzle.oracle.builder import OracleBuildError, build_oracle
from switchpuzzle.oracle.table import (
    DEFAULT_ORACLE_PATH,
    Oracle,
    OracleEntry,
    OracleIntegrityError,
)
