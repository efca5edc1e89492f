"""Data models for the state module."""

from __future__ import annotations

from dataclasses import dataclass, field

from dustman.autoclose.models import ClosedPageRecord, Settings


@dataclass
class SessionState:
    """Everything the host keeps between evaluations."""

    settings: Settings = field(default_factory=Settings)
    history: list[ClosedPageRecord] = field(default_factory=list)
    paused: bool = False
