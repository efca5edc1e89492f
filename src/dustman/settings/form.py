"""Validation of single-field settings edits before they are persisted."""

from __future__ import annotations

import logging
import math

from dustman.exceptions import SettingsValidationError
from dustman.state.store import BaseStateStore

logger = logging.getLogger(__name__)

MILLISECONDS_PER_MINUTE = 60 * 1000


def parse_min_inactive_minutes(value: str) -> float:
    """Minutes as typed by the user -> milliseconds."""
    try:
        minutes = float(str(value).strip())
    except ValueError:
        raise SettingsValidationError(
            "min_inactive_milliseconds", value, f"Not a number: {value!r}"
        )
    if not math.isfinite(minutes) or minutes < 0:
        raise SettingsValidationError(
            "min_inactive_milliseconds", value, f"Minutes must be 0 or more, got {value!r}"
        )
    return minutes * MILLISECONDS_PER_MINUTE


def parse_min_tabs_count(value: str) -> int:
    count = _parse_int("min_tabs_count", value)
    if count <= 0:
        raise SettingsValidationError(
            "min_tabs_count", value, f"Tab count must be at least 1, got {value!r}"
        )
    return count


def parse_max_history_size(value: str) -> int:
    size = _parse_int("max_history_size", value)
    if size < 0:
        raise SettingsValidationError(
            "max_history_size", value, f"History size must be 0 or more, got {value!r}"
        )
    return size


def _parse_int(field: str, value: str) -> int:
    try:
        return int(str(value).strip())
    except ValueError:
        raise SettingsValidationError(field, value, f"Not a whole number: {value!r}")


class SettingsForm:
    """Applies user edits to the stored settings one field at a time.

    Invalid edits are flagged in ``invalid_fields`` and never persisted.
    Each edit method returns whether the edit was accepted.
    """

    def __init__(self, store: BaseStateStore):
        self.store = store
        self.settings = store.load().settings
        self.invalid_fields: set[str] = set()

    def edit_min_inactive_minutes(self, value: str) -> bool:
        return self._apply("min_inactive_milliseconds", parse_min_inactive_minutes, value)

    def edit_min_tabs_count(self, value: str) -> bool:
        return self._apply("min_tabs_count", parse_min_tabs_count, value)

    def edit_max_history_size(self, value: str) -> bool:
        return self._apply("max_history_size", parse_max_history_size, value)

    def edit_clear_history_on_exit(self, checked: bool) -> bool:
        return self._apply("clear_history_on_exit", bool, checked)

    def edit_exclude_tabs_in_groups(self, checked: bool) -> bool:
        return self._apply("exclude_tabs_in_groups", bool, checked)

    def min_inactive_minutes(self) -> float:
        return self.settings.min_inactive_milliseconds / MILLISECONDS_PER_MINUTE

    def _apply(self, field, parse, value) -> bool:
        try:
            parsed = parse(value)
        except SettingsValidationError as e:
            self.invalid_fields.add(field)
            logger.warning("Rejected settings edit: %s", e)
            return False
        self.invalid_fields.discard(field)
        setattr(self.settings, field, parsed)
        self.store.save_settings(self.settings)
        return True
