import argparse
import sys
import time
from pathlib import Path

from switchpuzzle.config import configure_logging, load_config
from switchpuzzle.oracle import (
    DEFAULT_ORACLE_PATH,
    Oracle,
    OracleIntegrityError,
    build_oracle,
)

ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG = ROOT / "configs" / "default.yaml"


def print_summary(oracle: Oracle) -> None:
    counts = oracle.distance_histogram()
    print(f"{len(oracle)} states, max distance {oracle.max_distance}")
    for d, c in enumerate(counts):
        print(f"  {d:>2} moves: {int(c):>4} states")


def check(path: Path, check_algebra: bool) -> int:
    try:
        oracle = Oracle.load(path, check_algebra=check_algebra)
    except (OracleIntegrityError, FileNotFoundError) as e:
        print(f"[ERROR] {path}: {e}", file=sys.stderr)
        return 1
    print(f"[ok] {path}")
    print_summary(oracle)
    return 0


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(
        description="Build or check the switch puzzle oracle artifact."
    )
    ap.add_argument(
        "--config",
        default=None,
        help=f"YAML config (default: {DEFAULT_CONFIG} if present)",
    )
    ap.add_argument("--out", default=None, help="Output JSON path")
    ap.add_argument(
        "--check",
        action="store_true",
        help="Validate an existing artifact instead of building",
    )
    ap.add_argument("--plot", default=None, help="Save distance histogram")
    args = ap.parse_args(argv)

    if args.config is not None:
        config = load_config(args.config)
    else:
        config = load_config(DEFAULT_CONFIG if DEFAULT_CONFIG.exists() else None)
    configure_logging(config)
    out = Path(args.out or config.oracle_path or DEFAULT_ORACLE_PATH)

    if args.check:
        return check(out, check_algebra=config.validate_algebra)

    start_time = time.perf_counter()
    oracle = build_oracle()
    # Offline builds always get the algebraic cross-check
    oracle.validate(check_algebra=True)
    elapsed_ms = (time.perf_counter() - start_time) * 1000

    print_summary(oracle)
    oracle.save(out)
    print(f"Built and validated in {elapsed_ms:.1f} ms")
    print(f"Output: {out}")

    if args.plot:
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        from switchpuzzle.viz import show_distance_histogram

        ax = show_distance_histogram(oracle)
        ax.figure.savefig(args.plot, dpi=120, bbox_inches="tight")
        plt.close(ax.figure)
        print(f"Plot: {args.plot}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
