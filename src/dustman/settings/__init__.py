"""Settings editing with input validation."""

from dustman.settings.form import (
    SettingsForm,
    parse_max_history_size,
    parse_min_inactive_minutes,
    parse_min_tabs_count,
)

__all__ = [
    "SettingsForm",
    "parse_max_history_size",
    "parse_min_inactive_minutes",
    "parse_min_tabs_count",
]
