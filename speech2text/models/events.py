"""Event models consumed by the interaction state machine."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class KeyEvent:
    """A decoded key press, e.g. "q", "up", "enter", "ctrl+c"."""
    key: str


@dataclass(frozen=True)
class ResizeEvent:
    """New terminal dimensions."""
    width: int
    height: int


@dataclass(frozen=True)
class TickEvent:
    """Periodic animation tick."""


@dataclass(frozen=True)
class JobSucceeded:
    """The pipeline finished; text may be empty when nothing was recognised."""
    text: str


@dataclass(frozen=True)
class JobFailed:
    """The pipeline failed; message is the raw diagnostic output."""
    message: str


JobOutcome = Union[JobSucceeded, JobFailed]

Event = Union[KeyEvent, ResizeEvent, TickEvent, JobSucceeded, JobFailed]
