"""Bounded, newest-first log of closed pages."""

from __future__ import annotations

from typing import Iterable, Sequence

from dustman.autoclose.filters import is_saveable
from dustman.autoclose.models import ClosedPageRecord, TabSnapshot


def accumulate_history(
    history: Sequence[ClosedPageRecord],
    closed_tabs: Iterable[TabSnapshot],
    max_history_size: int,
) -> list[ClosedPageRecord]:
    """Prepend saveable closed tabs to ``history`` and drop the oldest overflow."""
    if max_history_size <= 0:
        return []
    records = [ClosedPageRecord.from_tab(tab) for tab in closed_tabs if is_saveable(tab)]
    return (records + list(history))[:max_history_size]


def truncate_history(
    history: Sequence[ClosedPageRecord], max_history_size: int
) -> list[ClosedPageRecord]:
    return list(history[: max(0, max_history_size)])
