"""Persisted settings and closed-page history."""

from dustman.state.migrations import FIELD_MIGRATIONS, migrate_settings
from dustman.state.models import SessionState
from dustman.state.store import (
    BaseStateStore,
    JsonFileStateStore,
    MemoryStateStore,
    persist_history,
)

__all__ = [
    "FIELD_MIGRATIONS",
    "migrate_settings",
    "SessionState",
    "BaseStateStore",
    "JsonFileStateStore",
    "MemoryStateStore",
    "persist_history",
]
