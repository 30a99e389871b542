"""Session-related data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24


class Mode(Enum):
    """Top-level phase of the interaction."""
    SELECTING_FILE = "selecting_file"
    PROCESSING = "processing"
    COMPLETE = "complete"


@dataclass
class Session:
    """Mutable state of one run, owned by the state machine."""
    mode: Mode = Mode.SELECTING_FILE
    selected_path: Optional[str] = None
    result_text: Optional[str] = None
    error_text: Optional[str] = None
    viewport_width: int = DEFAULT_WIDTH
    viewport_height: int = DEFAULT_HEIGHT
    scroll_offset: int = 0
    max_scroll: int = 0  # Derived from result_text and the viewport size

    @property
    def succeeded(self) -> bool:
        return self.mode is Mode.COMPLETE and self.result_text is not None

    @property
    def failed(self) -> bool:
        return self.mode is Mode.COMPLETE and self.error_text is not None
