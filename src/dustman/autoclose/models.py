"""Data models for the autoclose engine."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Browser sentinel for "tab is not in a group".
NO_GROUP = -1

DEFAULT_MIN_INACTIVE_MILLISECONDS = 20 * 60 * 1000
DEFAULT_MIN_TABS_COUNT = 5
DEFAULT_MAX_HISTORY_SIZE = 1000
DEFAULT_CLEAR_HISTORY_ON_EXIT = True
DEFAULT_EXCLUDE_TABS_IN_GROUPS = False


@dataclass(frozen=True)
class TabSnapshot:
    """Read-only view of one open tab at decision time."""

    id: int
    window_id: int
    last_accessed: float | None = None  # epoch ms, None when unknown
    pinned: bool = False
    audible: bool = False
    incognito: bool = False
    group_id: int | None = NO_GROUP
    title: str | None = None
    url: str | None = None
    fav_icon_url: str | None = None
    window_type: str = "normal"

    @property
    def in_group(self) -> bool:
        return self.group_id is not None and self.group_id != NO_GROUP

    @classmethod
    def from_dict(cls, raw: dict) -> TabSnapshot:
        """Build a snapshot from a browser tab object (camelCase keys)."""
        last_accessed = raw.get("lastAccessed")
        if isinstance(last_accessed, bool) or not isinstance(last_accessed, (int, float)):
            last_accessed = None
        return cls(
            id=raw["id"],
            window_id=raw["windowId"],
            last_accessed=last_accessed,
            pinned=raw.get("pinned") is True,
            audible=raw.get("audible") is True,
            incognito=raw.get("incognito") is True,
            group_id=raw.get("groupId", NO_GROUP),
            title=raw.get("title"),
            url=raw.get("url"),
            fav_icon_url=raw.get("favIconUrl"),
            window_type=raw.get("windowType") or "normal",
        )


@dataclass
class Settings:
    """User configuration for automatic closing.

    The engine trusts these values; validation happens in the settings form
    and, for persisted data, in :meth:`from_dict`.
    """

    min_inactive_milliseconds: float = DEFAULT_MIN_INACTIVE_MILLISECONDS
    min_tabs_count: int = DEFAULT_MIN_TABS_COUNT
    max_history_size: int = DEFAULT_MAX_HISTORY_SIZE
    clear_history_on_exit: bool = DEFAULT_CLEAR_HISTORY_ON_EXIT
    exclude_tabs_in_groups: bool = DEFAULT_EXCLUDE_TABS_IN_GROUPS

    def to_dict(self) -> dict:
        return {
            "minInactiveMilliseconds": self.min_inactive_milliseconds,
            "minTabsCount": self.min_tabs_count,
            "maxHistorySize": self.max_history_size,
            "clearHistoryOnExit": self.clear_history_on_exit,
            "excludeTabsInGroups": self.exclude_tabs_in_groups,
        }

    @classmethod
    def from_dict(cls, raw: dict | None) -> Settings:
        """Load persisted settings, defaulting each missing or invalid field."""
        raw = raw if isinstance(raw, dict) else {}
        return cls(
            min_inactive_milliseconds=_number(
                raw, "minInactiveMilliseconds", DEFAULT_MIN_INACTIVE_MILLISECONDS, minimum=0
            ),
            min_tabs_count=_integer(raw, "minTabsCount", DEFAULT_MIN_TABS_COUNT, minimum=1),
            max_history_size=_integer(raw, "maxHistorySize", DEFAULT_MAX_HISTORY_SIZE, minimum=0),
            clear_history_on_exit=_boolean(
                raw, "clearHistoryOnExit", DEFAULT_CLEAR_HISTORY_ON_EXIT
            ),
            exclude_tabs_in_groups=_boolean(
                raw, "excludeTabsInGroups", DEFAULT_EXCLUDE_TABS_IN_GROUPS
            ),
        )


@dataclass(frozen=True)
class ClosedPageRecord:
    """A page as it was when its tab got closed."""

    title: str
    url: str
    fav_icon_url: str | None = None

    @classmethod
    def from_tab(cls, tab: TabSnapshot) -> ClosedPageRecord:
        return cls(title=tab.title, url=tab.url, fav_icon_url=tab.fav_icon_url)

    def to_dict(self) -> dict:
        return {"title": self.title, "url": self.url, "favIconUrl": self.fav_icon_url}

    @classmethod
    def from_dict(cls, raw: dict) -> ClosedPageRecord | None:
        """Returns None for entries without a url."""
        if not isinstance(raw, dict) or not isinstance(raw.get("url"), str):
            return None
        return cls(
            title=raw.get("title") or "",
            url=raw["url"],
            fav_icon_url=raw.get("favIconUrl"),
        )


@dataclass(frozen=True)
class WindowSelection:
    """Outcome of the closure selector for a single window."""

    tabs_to_close: tuple[TabSnapshot, ...] = ()
    next_check: float | None = None  # absolute epoch ms, None = never


@dataclass(frozen=True)
class DecisionResult:
    """Tabs to close now, and how long to wait before deciding again."""

    tabs_to_close: tuple[TabSnapshot, ...] = ()
    next_wake_after: float | None = None  # ms from now, None = never

    @property
    def tab_ids_to_close(self) -> frozenset:
        return frozenset(tab.id for tab in self.tabs_to_close)


def _number(raw: dict, key: str, default: float, minimum: float) -> float:
    value = raw.get(key)
    try:
        valid = (
            not isinstance(value, bool)
            and isinstance(value, (int, float))
            and math.isfinite(value)
            and value >= minimum
        )
    except OverflowError:
        valid = False
    if not valid:
        if key in raw:
            logger.warning("Invalid %s=%r in stored settings, using %r", key, value, default)
        return default
    return value


def _integer(raw: dict, key: str, default: int, minimum: int) -> int:
    value = raw.get(key)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        if key in raw:
            logger.warning("Invalid %s=%r in stored settings, using %r", key, value, default)
        return default
    return value


def _boolean(raw: dict, key: str, default: bool) -> bool:
    value = raw.get(key)
    if not isinstance(value, bool):
        if key in raw:
            logger.warning("Invalid %s=%r in stored settings, using %r", key, value, default)
        return default
    return value
