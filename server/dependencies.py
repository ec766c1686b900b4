"""FastAPI dependency factories."""

import threading
from functools import lru_cache
from typing import Optional

from fastapi import Depends

from server.config import Settings
from srs.constants import SchedulerConfig
from srs.storage import ReviewStateStore

# Process-wide store cache (keyed by settings identity for override support)
_store: Optional[ReviewStateStore] = None
_store_settings_id: Optional[object] = None
_store_lock = threading.Lock()


@lru_cache()
def get_settings() -> Settings:
    """Singleton Settings -- override via app.dependency_overrides in tests."""
    return Settings()


def get_scheduler_config(settings: Settings = Depends(get_settings)) -> SchedulerConfig:
    return settings.scheduler_config()


def get_store(settings: Settings = Depends(get_settings)) -> ReviewStateStore:
    """Cached ReviewStateStore; rebuilt if settings were overridden (e.g. in tests)."""
    global _store, _store_settings_id
    with _store_lock:
        if _store is None or _store_settings_id is not settings:
            _store = ReviewStateStore(settings.store_path, settings.scheduler_config())
            _store_settings_id = settings
        return _store
