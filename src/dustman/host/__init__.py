"""Host-side collaborators and the event-driven autoclose service."""

from dustman.host.alarms import BaseWakeTimer, ManualWakeTimer, ThreadingWakeTimer
from dustman.host.indicator import (
    BaseStatusIndicator,
    IndicatorState,
    LoggingStatusIndicator,
    RecordingStatusIndicator,
    indicator_state,
)
from dustman.host.inventory import BaseTabInventory, InMemoryTabInventory
from dustman.host.service import AutocloseService

__all__ = [
    "AutocloseService",
    "BaseTabInventory",
    "InMemoryTabInventory",
    "BaseWakeTimer",
    "ManualWakeTimer",
    "ThreadingWakeTimer",
    "BaseStatusIndicator",
    "IndicatorState",
    "LoggingStatusIndicator",
    "RecordingStatusIndicator",
    "indicator_state",
]
