"""Pause and history state as shown by the toolbar button."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from dustman.autoclose.models import Settings

logger = logging.getLogger(__name__)

BADGE_PAUSED = "off"
TOOLTIP_ACTIVE = "Dustman: closing inactive tabs"
TOOLTIP_PAUSED = "Dustman: paused"


@dataclass(frozen=True)
class IndicatorState:
    paused: bool
    badge_text: str
    title: str
    popup_enabled: bool  # history popup only makes sense when history is kept


def indicator_state(paused: bool, settings: Settings) -> IndicatorState:
    return IndicatorState(
        paused=paused,
        badge_text=BADGE_PAUSED if paused else "",
        title=TOOLTIP_PAUSED if paused else TOOLTIP_ACTIVE,
        popup_enabled=settings.max_history_size > 0,
    )


class BaseStatusIndicator(ABC):
    @abstractmethod
    def update(self, state: IndicatorState) -> None:
        ...


class LoggingStatusIndicator(BaseStatusIndicator):
    def update(self, state: IndicatorState) -> None:
        logger.info(
            "Status: %s, history popup %s",
            "paused" if state.paused else "active",
            "enabled" if state.popup_enabled else "disabled",
        )


class RecordingStatusIndicator(BaseStatusIndicator):
    """Keeps every state it was given; ``current`` is the latest."""

    def __init__(self) -> None:
        self.states: list[IndicatorState] = []

    @property
    def current(self) -> IndicatorState | None:
        return self.states[-1] if self.states else None

    def update(self, state: IndicatorState) -> None:
        self.states.append(state)
