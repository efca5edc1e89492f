"""Upgrades of settings written by older versions.

Each entry of ``FIELD_MIGRATIONS`` maps a legacy key to a transform that
rewrites the raw settings dict in place. The legacy key is always removed.

=================  ==========================================================
legacy key         transform
=================  ==========================================================
saveClosedPages    ``true`` -> ``maxHistorySize = 1000``; otherwise ``0``
=================  ==========================================================
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from dustman.autoclose.models import DEFAULT_MAX_HISTORY_SIZE

logger = logging.getLogger(__name__)


def _migrate_save_closed_pages(value: Any, settings: dict) -> None:
    settings["maxHistorySize"] = DEFAULT_MAX_HISTORY_SIZE if value is True else 0


FIELD_MIGRATIONS: dict[str, Callable[[Any, dict], None]] = {
    "saveClosedPages": _migrate_save_closed_pages,
}


def migrate_settings(raw: dict) -> dict:
    """Return a copy of ``raw`` with every legacy field translated."""
    settings = dict(raw)
    for key, migrate in FIELD_MIGRATIONS.items():
        if key not in settings:
            continue
        value = settings.pop(key)
        if value is None:
            continue
        logger.info("Migrating legacy setting %s=%r", key, value)
        migrate(value, settings)
    return settings
