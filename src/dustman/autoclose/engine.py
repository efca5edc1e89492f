"""The autoclose decision: which tabs to close now, and when to look again."""

from __future__ import annotations

from typing import Iterable

from dustman.autoclose.models import DecisionResult, Settings, TabSnapshot
from dustman.autoclose.wake import earliest_wake
from dustman.autoclose.windows import partition_by_window, select_window


def decide(now: float, settings: Settings, tabs: Iterable[TabSnapshot]) -> DecisionResult:
    """Decide which tabs to close at ``now`` (epoch ms).

    Pure: the result depends only on the arguments. ``next_wake_after`` is a
    delay relative to ``now``, or None when no tab will become closeable
    without some other change.
    """
    selections = [
        select_window(now, settings, window_tabs)
        for window_tabs in partition_by_window(tabs).values()
    ]
    return DecisionResult(
        tabs_to_close=tuple(tab for sel in selections for tab in sel.tabs_to_close),
        next_wake_after=earliest_wake(now, [sel.next_check for sel in selections]),
    )
