"""Terminal user interface for speech2text."""

from .text_wrap import wrap_text
from .viewport import ViewportWindow, compute_window, max_scroll
from .state_machine import InteractionStateMachine
from .file_browser import FileBrowser
from .activity_indicator import ActivityIndicator
from .theme import Theme, DEFAULT_THEME

__all__ = [
    "wrap_text",
    "ViewportWindow",
    "compute_window",
    "max_scroll",
    "InteractionStateMachine",
    "FileBrowser",
    "ActivityIndicator",
    "Theme",
    "DEFAULT_THEME",
]
