"""Access to the browser's open tabs."""

from __future__ import annotations

import dataclasses
import logging
import threading
from abc import ABC, abstractmethod
from typing import Iterable

from dustman.autoclose.models import TabSnapshot

logger = logging.getLogger(__name__)


class BaseTabInventory(ABC):
    """Abstract interface to the host's tabs."""

    @abstractmethod
    def list_tabs(self, window_type: str | None = "normal") -> list[TabSnapshot]:
        """Snapshot of open tabs in enumeration order, optionally by window type."""
        ...

    @abstractmethod
    def close_tabs(self, tab_ids: Iterable) -> set:
        """Close tabs, best-effort. Returns the ids that were actually closed.

        A failure for one id must not prevent closing the others. Raise
        TabInventoryError only when the whole operation failed.
        """
        ...


class InMemoryTabInventory(BaseTabInventory):
    """Tabs held in process, for embedding hosts and tests."""

    def __init__(self, tabs: Iterable[TabSnapshot] = ()) -> None:
        self._tabs: dict = {}
        self._lock = threading.Lock()
        for tab in tabs:
            self.add_tab(tab)

    def add_tab(self, tab: TabSnapshot) -> None:
        with self._lock:
            self._tabs[tab.id] = tab

    def update_tab(self, tab_id, **changes) -> TabSnapshot:
        """Replace fields of a tab, e.g. ``update_tab(3, pinned=False)``."""
        with self._lock:
            tab = dataclasses.replace(self._tabs[tab_id], **changes)
            self._tabs[tab_id] = tab
            return tab

    def list_tabs(self, window_type: str | None = "normal") -> list[TabSnapshot]:
        with self._lock:
            return [
                tab
                for tab in self._tabs.values()
                if window_type is None or tab.window_type == window_type
            ]

    def close_tabs(self, tab_ids: Iterable) -> set:
        closed = set()
        with self._lock:
            for tab_id in tab_ids:
                if self._tabs.pop(tab_id, None) is None:
                    logger.warning("Cannot close tab %s: no such tab", tab_id)
                    continue
                closed.add(tab_id)
        return closed
