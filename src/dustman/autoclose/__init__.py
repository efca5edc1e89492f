"""Pure decision engine for closing inactive tabs."""

from dustman.autoclose.engine import decide
from dustman.autoclose.filters import is_candidate, is_saveable
from dustman.autoclose.history import accumulate_history, truncate_history
from dustman.autoclose.models import (
    NO_GROUP,
    ClosedPageRecord,
    DecisionResult,
    Settings,
    TabSnapshot,
    WindowSelection,
)
from dustman.autoclose.windows import partition_by_window, select_window

__all__ = [
    "decide",
    "is_candidate",
    "is_saveable",
    "accumulate_history",
    "truncate_history",
    "partition_by_window",
    "select_window",
    "NO_GROUP",
    "ClosedPageRecord",
    "DecisionResult",
    "Settings",
    "TabSnapshot",
    "WindowSelection",
]
