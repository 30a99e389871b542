"""Data models for the speech2text application."""

from .session import Mode, Session
from .events import (
    KeyEvent,
    ResizeEvent,
    TickEvent,
    JobSucceeded,
    JobFailed,
    JobOutcome,
    Event,
)

__all__ = [
    "Mode",
    "Session",
    "KeyEvent",
    "ResizeEvent",
    "TickEvent",
    "JobSucceeded",
    "JobFailed",
    "JobOutcome",
    "Event",
]
