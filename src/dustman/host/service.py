"""Event-driven host loop around the autoclose engine."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from dustman.autoclose.engine import decide
from dustman.autoclose.history import accumulate_history, truncate_history
from dustman.autoclose.models import Settings
from dustman.config import WAKE_TOLERANCE_MS, now_ms
from dustman.exceptions import StateWriteError, TabInventoryError
from dustman.host.alarms import BaseWakeTimer, ThreadingWakeTimer
from dustman.host.indicator import BaseStatusIndicator, LoggingStatusIndicator, indicator_state
from dustman.host.inventory import BaseTabInventory
from dustman.state.models import SessionState
from dustman.state.store import BaseStateStore, persist_history

logger = logging.getLogger(__name__)


class AutocloseService:
    """Closes inactive tabs whenever something relevant happens.

    Every trigger (tab created or attached, pin/audio released, settings
    changed, wake timer) funnels into :meth:`trigger`. Evaluations never
    overlap: triggers that arrive while one runs are coalesced into a single
    follow-up evaluation.

    Args:
        inventory: Source of tab snapshots and the close operation.
        store: Persisted settings and history.
        timer: Wake timer; defaults to a ``ThreadingWakeTimer``.
        indicator: Receives pause/history state; defaults to logging it.
        clock: Returns the current time in epoch milliseconds.
        wake_tolerance_ms: Added to every wake delay.
    """

    def __init__(
        self,
        inventory: BaseTabInventory,
        store: BaseStateStore,
        timer: BaseWakeTimer | None = None,
        indicator: BaseStatusIndicator | None = None,
        clock: Callable[[], float] = now_ms,
        wake_tolerance_ms: float = WAKE_TOLERANCE_MS,
    ):
        self.inventory = inventory
        self.store = store
        self.timer = timer or ThreadingWakeTimer()
        self.indicator = indicator or LoggingStatusIndicator()
        self.clock = clock
        self.wake_tolerance_ms = wake_tolerance_ms
        self.state = SessionState()

        self._state_lock = threading.RLock()
        self._trigger_lock = threading.Lock()
        self._running = False
        self._pending = False

    def start(self) -> None:
        """Load stored state, start listening for settings changes, and evaluate."""
        self.state = self.store.load()
        self.store.subscribe(self.on_settings_changed)
        self._refresh_indicator()
        self.trigger()

    def shutdown(self) -> None:
        """End the session: drop the wake timer and, if configured, the history."""
        self.timer.cancel()
        with self._state_lock:
            if not self.state.settings.clear_history_on_exit:
                return
            self.state.history = []
        try:
            self.store.clear_history()
        except StateWriteError as e:
            logger.warning("Failed to clear history on exit: %s", e)

    # ---- Host events ----

    def on_tab_created(self) -> None:
        self.trigger()

    def on_tab_attached(self) -> None:
        self.trigger()

    def on_tab_updated(self, change_info: dict) -> None:
        """Only a tab losing its pin or its audio can become closeable."""
        if change_info.get("pinned") is False or change_info.get("audible") is False:
            self.trigger()

    def on_settings_changed(self, settings: Settings) -> None:
        with self._state_lock:
            self.state.settings = settings
            self.state.history = truncate_history(self.state.history, settings.max_history_size)
        self._refresh_indicator()
        self._persist_history()
        self.trigger()

    def toggle_pause(self) -> bool:
        """Flip the pause flag and return the new value."""
        with self._state_lock:
            self.state.paused = not self.state.paused
            paused = self.state.paused
        logger.info("Autoclose %s", "paused" if paused else "resumed")
        self._refresh_indicator()
        self.trigger()
        return paused

    # ---- Evaluation ----

    def trigger(self) -> None:
        """Evaluate now, or once more after the evaluation already running."""
        with self._trigger_lock:
            if self._running:
                self._pending = True
                logger.debug("Evaluation in progress, coalescing trigger")
                return
            self._running = True
        try:
            while True:
                self._evaluate()
                with self._trigger_lock:
                    if not self._pending:
                        self._running = False
                        return
                    self._pending = False
        except BaseException:
            with self._trigger_lock:
                self._running = False
                self._pending = False
            raise

    def _on_wake(self) -> None:
        logger.debug("Wake timer fired")
        self.trigger()

    def _evaluate(self) -> None:
        self.timer.cancel()
        # Picks up edits saved through another store instance or process.
        self.store.refresh()

        with self._state_lock:
            if self.state.paused:
                logger.debug("Paused, skipping evaluation")
                return
            settings = self.state.settings

        try:
            tabs = self.inventory.list_tabs()
        except TabInventoryError as e:
            logger.warning("Failed to list tabs: %s", e)
            return

        now = self.clock()
        result = decide(now, settings, tabs)

        if result.next_wake_after is not None:
            delay_ms = result.next_wake_after + self.wake_tolerance_ms
            self.timer.schedule(delay_ms, self._on_wake)
            logger.info("Next check in %.1fs", delay_ms / 1000)

        if not result.tabs_to_close:
            return

        try:
            closed_ids = self.inventory.close_tabs(result.tab_ids_to_close)
        except TabInventoryError as e:
            logger.warning("Failed to close tabs: %s", e)
            return
        closed = [tab for tab in result.tabs_to_close if tab.id in closed_ids]
        logger.info("Closed %d of %d inactive tab(s)", len(closed), len(result.tabs_to_close))

        if not closed or settings.max_history_size <= 0:
            return
        with self._state_lock:
            self.state.history = accumulate_history(
                self.state.history, closed, self.state.settings.max_history_size
            )
        if not settings.clear_history_on_exit:
            self._persist_history()

    def _persist_history(self) -> None:
        with self._state_lock:
            settings = self.state.settings
            history = list(self.state.history)
        try:
            persist_history(self.store, settings, history)
        except StateWriteError as e:
            logger.warning("Failed to persist history: %s", e)

    def _refresh_indicator(self) -> None:
        with self._state_lock:
            state = indicator_state(self.state.paused, self.state.settings)
        self.indicator.update(state)
