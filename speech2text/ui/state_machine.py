"""Interaction state machine driving the terminal front-end."""

import logging

from ..models.events import (
    Event,
    JobFailed,
    JobSucceeded,
    KeyEvent,
    ResizeEvent,
    TickEvent,
)
from ..models.session import Mode, Session
from .activity_indicator import ActivityIndicator
from .file_browser import FileBrowser
from .viewport import clamp_offset, max_scroll, panel_height, wrapped_result

logger = logging.getLogger(__name__)

QUIT_KEYS = ("q", "ctrl+c")
# Rows above the file listing: title, blank, subtitle, blank, directory
BROWSER_CHROME_ROWS = 5


class InteractionStateMachine:
    """Owns the session and applies events to it one at a time.

    ``handle`` is the only place session state changes. It returns False
    when the application should exit.
    """

    def __init__(self,
                 session: Session,
                 file_browser: FileBrowser,
                 indicator: ActivityIndicator,
                 job_runner):
        """Initialize the state machine.

        Args:
            session: Session record to own
            file_browser: Collaborator used while selecting a file
            indicator: Spinner animated while processing
            job_runner: Object with ``start(path)`` that reports back asynchronously
        """
        self.session = session
        self.file_browser = file_browser
        self.indicator = indicator
        self.job_runner = job_runner

    def handle(self, event: Event) -> bool:
        """Apply one event. Returns True to continue, False to quit."""
        if isinstance(event, KeyEvent):
            return self._on_key(event.key)
        if isinstance(event, ResizeEvent):
            self._on_resize(event.width, event.height)
        elif isinstance(event, TickEvent):
            if self.session.mode is Mode.PROCESSING:
                self.indicator.tick()
        elif isinstance(event, JobSucceeded):
            self._on_success(event.text)
        elif isinstance(event, JobFailed):
            self._on_failure(event.message)
        else:
            logger.warning(f"Ignoring unknown event: {event!r}")
        return True

    def _on_key(self, key: str) -> bool:
        if key in QUIT_KEYS:
            logger.info(f"Quit requested in mode {self.session.mode.value}")
            return False

        mode = self.session.mode
        if mode is Mode.SELECTING_FILE:
            self.file_browser.handle_key(key)
            selection = self.file_browser.current_selection()
            if selection:
                self._start_processing(selection)
        elif mode is Mode.COMPLETE and self.session.result_text is not None:
            self._scroll(key)
        return True

    def _start_processing(self, path: str) -> None:
        logger.info(f"Starting transcription of {path}")
        self.session.selected_path = path
        self.session.mode = Mode.PROCESSING
        self.indicator.start()
        self.job_runner.start(path)

    def _scroll(self, key: str) -> None:
        session = self.session
        page = panel_height(session.viewport_height)
        if key in ("up", "k"):
            target = session.scroll_offset - 1
        elif key in ("down", "j"):
            target = session.scroll_offset + 1
        elif key == "home":
            target = 0
        elif key == "end":
            target = session.max_scroll
        elif key == "pgup":
            target = session.scroll_offset - page
        elif key == "pgdown":
            target = session.scroll_offset + page
        else:
            return
        session.scroll_offset = clamp_offset(target, session.max_scroll)

    def _on_resize(self, width: int, height: int) -> None:
        session = self.session
        session.viewport_width = max(width, 0)
        session.viewport_height = max(height, 0)
        if session.mode is Mode.SELECTING_FILE:
            self.file_browser.set_height(session.viewport_height - BROWSER_CHROME_ROWS)
        elif session.mode is Mode.COMPLETE:
            self._recompute_scroll()

    def _on_success(self, text: str) -> None:
        if self.session.mode is not Mode.PROCESSING:
            logger.warning("Ignoring job result received outside of processing")
            return
        logger.info(f"Transcription completed ({len(text)} characters)")
        self.session.result_text = text
        self.session.error_text = None
        self.session.mode = Mode.COMPLETE
        self.session.scroll_offset = 0
        self._recompute_scroll()

    def _on_failure(self, message: str) -> None:
        if self.session.mode is not Mode.PROCESSING:
            logger.warning("Ignoring job failure received outside of processing")
            return
        logger.error(f"Transcription failed: {message}")
        self.session.error_text = message
        self.session.result_text = None
        self.session.mode = Mode.COMPLETE
        self.session.scroll_offset = 0
        self.session.max_scroll = 0

    def _recompute_scroll(self) -> None:
        session = self.session
        lines = wrapped_result(session.result_text, session.viewport_width)
        session.max_scroll = max_scroll(len(lines), panel_height(session.viewport_height))
        session.scroll_offset = clamp_offset(session.scroll_offset, session.max_scroll)
