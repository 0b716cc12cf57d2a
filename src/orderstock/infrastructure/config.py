"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    track_inventory_levels: bool
    environment: str
    log_level: str


def _log_level(environment: str) -> str:
    level_map = {
        "production": "INFO",
        "staging": "INFO",
        "development": "DEBUG",
        "test": "WARNING",
    }
    return os.getenv("LOG_LEVEL", level_map.get(environment, "INFO")).upper()


def load_settings() -> Settings:
    environment = (os.getenv("ENVIRONMENT") or "development").lower()
    track = os.getenv("ORDERSTOCK_TRACK_INVENTORY_LEVELS", "true").strip().lower() in _TRUTHY
    return Settings(
        data_dir=Path(os.getenv("ORDERSTOCK_DATA_DIR", str(_DEFAULT_DATA_DIR))),
        track_inventory_levels=track,
        environment=environment,
        log_level=_log_level(environment),
    )
