"""Unified exception hierarchy for dustman."""


class DustmanError(Exception):
    """Base exception for all dustman errors."""


# State
class StateError(DustmanError):
    """Base exception for persisted state operations."""


class StateReadError(StateError):
    """Failed to read or decode persisted state."""


class StateWriteError(StateError):
    """Failed to write persisted state."""


# Tab inventory
class TabInventoryError(DustmanError):
    """Base exception for tab inventory operations."""


class TabCloseError(TabInventoryError):
    """Failed to close one or more tabs."""


# Settings form
class SettingsValidationError(DustmanError):
    """A settings edit was rejected before reaching the store."""

    def __init__(self, field: str, value, message: str):
        super().__init__(message)
        self.field = field
        self.value = value
