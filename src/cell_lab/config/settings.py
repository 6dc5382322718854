"""
Configuration settings using dataclasses.
"""
import os
from dataclasses import dataclass, field
from typing import Optional
from . import defaults


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).strip().lower() in ("1", "true", "yes", "y")


def _env_optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return int(value)


@dataclass
class CellLabSettings:
    """Central configuration for the cell lab."""

    # Logging
    log_level: str = field(default=defaults.DEFAULT_LOG_LEVEL)

    # Extra templates loaded on top of the built-in ones
    templates_path: Optional[str] = None

    # Deterministic ids when set
    id_seed: Optional[int] = None

    # Session behaviour
    assist_growth: bool = field(default=defaults.DEFAULT_ASSIST_GROWTH)
    experiment_rounds: int = field(default=defaults.DEFAULT_EXPERIMENT_ROUNDS)

    @classmethod
    def load_from_env(cls) -> 'CellLabSettings':
        """Load settings from environment variables."""
        return cls(
            log_level=os.getenv("CELL_LAB_LOG_LEVEL", defaults.DEFAULT_LOG_LEVEL).upper(),
            templates_path=os.getenv("CELL_LAB_TEMPLATES_PATH") or None,
            id_seed=_env_optional_int("CELL_LAB_ID_SEED"),
            assist_growth=_env_bool("CELL_LAB_ASSIST_GROWTH", defaults.DEFAULT_ASSIST_GROWTH),
            experiment_rounds=int(os.getenv("CELL_LAB_EXPERIMENT_ROUNDS", defaults.DEFAULT_EXPERIMENT_ROUNDS)),
        )
