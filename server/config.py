"""Configuration for the scheduler API server."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from srs.constants import DEFAULT_CONFIG, SchedulerConfig


def _env_float(name: str) -> Optional[float]:
    value = os.environ.get(name)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _env_int(name: str) -> Optional[int]:
    value = os.environ.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


@dataclass
class Settings:
    """
    Server paths and scheduler tuning.

    Defaults resolve relative to the project root.
    Every field is overridable at construction for testing; unset fields
    fall back to environment variables, then to defaults.
    """
    store_path: Optional[Path] = None
    cors_origins: List[str] = field(default_factory=list)
    log_level: Optional[str] = None

    # Scheduler constants (None = env or SM-2 default)
    initial_ease: Optional[float] = None
    minimum_ease: Optional[float] = None
    maximum_interval_days: Optional[int] = None

    def __post_init__(self):
        project_root = Path(__file__).resolve().parent.parent

        if self.store_path is None:
            env_store = os.environ.get("SRS_STORE_PATH")
            self.store_path = Path(env_store) if env_store else project_root / "data" / "review_states.jsonl"
        self.store_path = Path(self.store_path)

        if not self.cors_origins:
            env_origins = os.environ.get("CORS_ORIGINS", "http://localhost:3000")
            self.cors_origins = [o.strip() for o in env_origins.split(",") if o.strip()]

        if self.log_level is None:
            self.log_level = os.environ.get("LOG_LEVEL", "INFO").upper()

        if self.initial_ease is None:
            self.initial_ease = _env_float("SRS_INITIAL_EASE")
        if self.minimum_ease is None:
            self.minimum_ease = _env_float("SRS_MINIMUM_EASE")
        if self.maximum_interval_days is None:
            self.maximum_interval_days = _env_int("SRS_MAX_INTERVAL_DAYS")

    def scheduler_config(self) -> SchedulerConfig:
        """SchedulerConfig with any configured overrides applied."""
        return SchedulerConfig(
            initial_ease=(
                self.initial_ease if self.initial_ease is not None else DEFAULT_CONFIG.initial_ease
            ),
            minimum_ease=(
                self.minimum_ease if self.minimum_ease is not None else DEFAULT_CONFIG.minimum_ease
            ),
            maximum_interval_days=self.maximum_interval_days,
        )
