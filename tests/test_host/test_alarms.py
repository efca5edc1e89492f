"""Tests for wake timers."""

import threading

from dustman.host.alarms import ManualWakeTimer, ThreadingWakeTimer


def test_manual_timer_fires_once():
    timer = ManualWakeTimer()
    calls = []
    timer.schedule(500, lambda: calls.append(1))
    assert timer.pending
    assert timer.delay_ms == 500
    assert timer.fire() is True
    assert timer.fire() is False
    assert calls == [1]


def test_manual_timer_cancel():
    timer = ManualWakeTimer()
    timer.schedule(500, lambda: None)
    timer.cancel()
    assert not timer.pending
    assert timer.fire() is False


def test_threading_timer_fires():
    timer = ThreadingWakeTimer()
    fired = threading.Event()
    timer.schedule(10, fired.set)
    assert fired.wait(timeout=5)
    assert not timer.pending


def test_threading_timer_reschedule_replaces_previous():
    timer = ThreadingWakeTimer()
    first = threading.Event()
    second = threading.Event()
    timer.schedule(200, first.set)
    timer.schedule(10, second.set)
    assert second.wait(timeout=5)
    assert not first.wait(timeout=0.5)


def test_threading_timer_cancel():
    timer = ThreadingWakeTimer()
    fired = threading.Event()
    timer.schedule(50, fired.set)
    timer.cancel()
    assert not timer.pending
    assert not fired.wait(timeout=0.3)
