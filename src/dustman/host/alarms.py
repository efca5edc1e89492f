"""One-shot wake timers used to re-run the engine."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Callable

WakeCallback = Callable[[], None]


class BaseWakeTimer(ABC):
    """At most one outstanding wake; scheduling replaces the previous one."""

    @abstractmethod
    def schedule(self, delay_ms: float, callback: WakeCallback) -> None:
        ...

    @abstractmethod
    def cancel(self) -> None:
        ...

    @property
    @abstractmethod
    def pending(self) -> bool:
        ...


class ThreadingWakeTimer(BaseWakeTimer):
    """Wake timer backed by a daemon ``threading.Timer``."""

    def __init__(self) -> None:
        self._timer: threading.Timer | None = None
        self._generation = 0
        self._lock = threading.Lock()

    def schedule(self, delay_ms: float, callback: WakeCallback) -> None:
        with self._lock:
            self._cancel_locked()
            generation = self._generation
            timer = threading.Timer(
                max(0.0, delay_ms) / 1000, self._fire, args=(generation, callback)
            )
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        with self._lock:
            self._cancel_locked()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        # A timer that already started firing sees a stale generation and bails.
        self._generation += 1

    def _fire(self, generation: int, callback: WakeCallback) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None
            self._generation += 1
        callback()


class ManualWakeTimer(BaseWakeTimer):
    """Records the requested delay; the host calls :meth:`fire` itself."""

    def __init__(self) -> None:
        self.delay_ms: float | None = None
        self._callback: WakeCallback | None = None
        self.cancel_count = 0

    def schedule(self, delay_ms: float, callback: WakeCallback) -> None:
        self.delay_ms = delay_ms
        self._callback = callback

    def cancel(self) -> None:
        self.cancel_count += 1
        self.delay_ms = None
        self._callback = None

    @property
    def pending(self) -> bool:
        return self._callback is not None

    def fire(self) -> bool:
        """Run the scheduled callback once. Returns False if nothing was pending."""
        callback = self._callback
        if callback is None:
            return False
        self.delay_ms = None
        self._callback = None
        callback()
        return True
