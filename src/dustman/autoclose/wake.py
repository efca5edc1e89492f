"""When to run the engine again."""

from __future__ import annotations

from dustman.autoclose.models import Settings, TabSnapshot


def next_check(
    settings: Settings,
    later_closeable: list[TabSnapshot],
    remaining_budget: int,
) -> float | None:
    """Instant (epoch ms) at which the next tab of a window crosses the threshold.

    ``later_closeable`` must be sorted by ``last_accessed`` ascending. Returns
    None when the window's budget is used up or nothing is waiting.
    """
    if remaining_budget <= 0 or not later_closeable:
        return None
    return later_closeable[0].last_accessed + settings.min_inactive_milliseconds


def earliest_wake(now: float, checks: list[float | None]) -> float | None:
    """Delay in ms from ``now`` until the earliest per-window check, or None."""
    pending = [check for check in checks if check is not None]
    if not pending:
        return None
    return min(pending) - now
