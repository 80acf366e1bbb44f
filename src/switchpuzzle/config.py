from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

ROOT_KEY = "switchpuzzle"

DEFAULTS = {
    "oracle": {"path": None, "validate_algebra": False},
    "logging": {"level": "INFO"},
}


class ConfigError(ValueError):
    """Raised for a configuration file that cannot be interpreted."""

    pass


@dataclass(frozen=True)
class SolverConfig:
    oracle_path: Optional[Path] = None
    validate_algebra: bool = False
    log_level: str = "INFO"


def _section(cfg: dict, name: str) -> dict:
    merged = dict(DEFAULTS[name])
    raw = cfg.get(name) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"'{name}' must be a mapping, got {raw!r}")
    merged.update(raw)
    return merged


def load_config(path: str | Path | None = None) -> SolverConfig:
    """Read a YAML config, falling back to defaults for anything unset."""
    cfg: dict = {}
    if path is not None:
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            doc = yaml.safe_load(f) or {}
        if not isinstance(doc, dict):
            raise ConfigError(f"{path}: expected a mapping at the top level")
        cfg = doc.get(ROOT_KEY) or {}
        if not isinstance(cfg, dict):
            raise ConfigError(f"{path}: '{ROOT_KEY}' must be a mapping")

    oracle = _section(cfg, "oracle")
    log = _section(cfg, "logging")

    level = str(log["level"]).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"Unknown log level: {log['level']!r}")

    oracle_path = oracle["path"]
    if oracle_path is not None:
        oracle_path = Path(oracle_path)
        # Relative paths are taken relative to the config file
        if not oracle_path.is_absolute() and path is not None:
            oracle_path = path.parent / oracle_path

    return SolverConfig(
        oracle_path=oracle_path,
        validate_algebra=bool(oracle["validate_algebra"]),
        log_level=level,
    )


def configure_logging(config: SolverConfig) -> None:
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
