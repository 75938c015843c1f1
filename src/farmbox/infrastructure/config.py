"""Runtime settings read from the environment (or a ``.env`` file)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from decouple import config

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    max_skips_per_cycle: int = 2
    max_pauses_per_year: int = 4
    strict_zones: bool = False
    order_number_attempts: int = 3
    log_level: str = "INFO"
    log_json: bool = False


def load_settings() -> Settings:
    return Settings(
        data_dir=Path(config("FARMBOX_DATA_DIR", default=str(_DEFAULT_DATA_DIR))),
        max_skips_per_cycle=config("FARMBOX_MAX_SKIPS_PER_CYCLE", default=2, cast=int),
        max_pauses_per_year=config("FARMBOX_MAX_PAUSES_PER_YEAR", default=4, cast=int),
        strict_zones=config("FARMBOX_STRICT_ZONES", default=False, cast=bool),
        order_number_attempts=config("FARMBOX_ORDER_NUMBER_ATTEMPTS", default=3, cast=int),
        log_level=config("FARMBOX_LOG_LEVEL", default="INFO").upper(),
        log_json=config("FARMBOX_LOG_JSON", default=False, cast=bool),
    )
