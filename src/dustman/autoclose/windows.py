"""Per-window partitioning and closure selection."""

from __future__ import annotations

from typing import Iterable

from dustman.autoclose.filters import is_candidate
from dustman.autoclose.models import Settings, TabSnapshot, WindowSelection
from dustman.autoclose.wake import next_check


def partition_by_window(tabs: Iterable[TabSnapshot]) -> dict[int, list[TabSnapshot]]:
    """Group tabs by window, keeping enumeration order inside each window."""
    windows: dict[int, list[TabSnapshot]] = {}
    for tab in tabs:
        windows.setdefault(tab.window_id, []).append(tab)
    return windows


def select_window(now: float, settings: Settings, tabs: list[TabSnapshot]) -> WindowSelection:
    """Pick the tabs of one window to close at ``now``.

    Pinned tabs are ignored entirely and never count toward
    ``min_tabs_count``. At most ``unpinned - min_tabs_count`` tabs are closed,
    longest-inactive first.
    """
    unpinned = [tab for tab in tabs if not tab.pinned]
    budget = len(unpinned) - settings.min_tabs_count
    if budget <= 0:
        return WindowSelection()

    # sorted() is stable: equal timestamps keep enumeration order
    candidates = sorted(
        (tab for tab in unpinned if is_candidate(tab, settings)),
        key=lambda tab: tab.last_accessed,
    )

    threshold = settings.min_inactive_milliseconds
    now_closeable = [tab for tab in candidates if tab.last_accessed + threshold < now]
    later_closeable = [tab for tab in candidates if tab.last_accessed + threshold >= now]

    tabs_to_close = tuple(now_closeable[:budget])
    return WindowSelection(
        tabs_to_close=tabs_to_close,
        next_check=next_check(settings, later_closeable, budget - len(tabs_to_close)),
    )
