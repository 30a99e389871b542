"""Terminal screen: rendering and the single-threaded event loop."""

import logging
import queue
import threading
from pathlib import Path
from typing import Callable, Optional, Tuple

from pubsub import pub
from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ..config import Speech2TextConfig
from ..models.events import Event, JobOutcome, KeyEvent, ResizeEvent, TickEvent
from ..models.session import Mode, Session
from ..services.job_runner import JobRunner, JOB_RESULT_TOPIC
from ..transcription.pipeline import TranscriptionPipeline
from .activity_indicator import ActivityIndicator
from .file_browser import FileBrowser
from .keyboard_input import KeyboardInputHandler
from .state_machine import BROWSER_CHROME_ROWS, InteractionStateMachine
from .theme import Theme, DEFAULT_THEME
from .viewport import compute_window, panel_height, wrapped_result

logger = logging.getLogger(__name__)


APP_TITLE = "Speech-to-Text CLI"
NO_SPEECH_TEXT = "No speech detected in the audio file."


class TranscriptionView:
    """Renders the session for the current mode."""

    def __init__(self, theme: Theme = DEFAULT_THEME):
        self.theme = theme

    def render(self,
               session: Session,
               file_browser: FileBrowser,
               indicator: ActivityIndicator) -> RenderableType:
        if session.mode is Mode.SELECTING_FILE:
            content = self._render_selecting(file_browser)
        elif session.mode is Mode.PROCESSING:
            content = self._render_processing(session, indicator)
        elif session.error_text is not None:
            content = self._render_error(session)
        else:
            content = self._render_result(session)
        return Align.center(content, vertical="middle",
                            width=max(session.viewport_width, 1),
                            height=max(session.viewport_height, 1))

    def _title(self) -> Text:
        return Text(f" {APP_TITLE} ", style=self.theme.title)

    def _render_selecting(self, file_browser: FileBrowser) -> RenderableType:
        return Group(
            self._title(),
            Text(),
            Text("Select a video or audio file to transcribe:", style=self.theme.subtitle),
            Text(),
            file_browser.render(self.theme),
        )

    def _render_processing(self, session: Session, indicator: ActivityIndicator) -> RenderableType:
        status = Text.assemble(
            (indicator.frame, self.theme.spinner),
            " Processing audio...",
        )
        return Group(
            self._title(),
            Text(),
            status,
            Text(f"File: {Path(session.selected_path or '').name}", style=self.theme.subtitle),
            Text(),
            Text("Extracting audio and transcribing... This may take a few minutes...",
                 style=self.theme.subtitle),
        )

    def _render_error(self, session: Session) -> RenderableType:
        return Group(
            self._title(),
            Text(),
            Text("Error occurred:", style=self.theme.error),
            Text(),
            Text(session.error_text or "", style=self.theme.error),
            Text(),
            Text("Press 'q' to exit", style=self.theme.subtitle),
        )

    def _render_result(self, session: Session) -> RenderableType:
        rows = panel_height(session.viewport_height)
        text = session.result_text or NO_SPEECH_TEXT
        lines = wrapped_result(text, session.viewport_width)
        window = compute_window(lines, session.scroll_offset, rows)

        panel = Panel(
            Text("\n".join(window.visible_lines), style=self.theme.transcription),
            box=self.theme.panel_box,
            border_style=self.theme.border,
            padding=(1, 2),
            # Border adds two columns and two rows around the padded text
            width=max(session.viewport_width - 2, 10),
            height=rows + 4,
        )

        if session.max_scroll > 0:
            first, last = self.visible_range(window.offset, rows, len(lines))
            instructions = (
                f"Use ↑/↓ or j/k to scroll • Line {first}-{last} of {len(lines)} "
                f"• Press 'q' to exit"
            )
        else:
            instructions = "Press 'q' to exit"

        return Group(
            self._title(),
            Text(),
            Text("Transcription completed", style=self.theme.success),
            Text(),
            panel,
            Text(),
            Text(instructions, style=self.theme.subtitle),
        )

    @staticmethod
    def visible_range(offset: int, rows: int, total: int) -> Tuple[int, int]:
        """1-based first and last visible line numbers."""
        return offset + 1, min(offset + rows, total)


class TranscriptionScreen:
    """Terminal front-end: owns the event queue and the session."""

    def __init__(self,
                 config: Speech2TextConfig,
                 console: Optional[Console] = None,
                 pipeline=None,
                 theme: Theme = DEFAULT_THEME,
                 input_handler_factory: Callable = KeyboardInputHandler):
        """Initialize transcription screen.

        Args:
            config: Application configuration
            console: Rich console to draw on
            pipeline: Pipeline for the job runner, built from config when None
            theme: Styles used by the view
            input_handler_factory: Builds the key reader from a key callback
        """
        self.config = config
        self.console = console or Console()
        self.events: "queue.Queue[Event]" = queue.Queue()
        self.tick_interval = float(config.get('ui.tick_interval_seconds', 0.1))
        self.input_handler_factory = input_handler_factory
        self.input_handler = None

        width, height = self.console.size
        self.session = Session(viewport_width=width, viewport_height=height)
        self.file_browser = FileBrowser(
            directory=config.get_start_directory(),
            allowed_extensions=config.get_allowed_extensions(),
            show_hidden=config.get('ui.show_hidden', False),
            height=height - BROWSER_CHROME_ROWS,
        )
        self.indicator = ActivityIndicator()
        self.job_runner = JobRunner(pipeline if pipeline is not None else TranscriptionPipeline.from_config(config),
                                    topic=JOB_RESULT_TOPIC)
        self.machine = InteractionStateMachine(
            session=self.session,
            file_browser=self.file_browser,
            indicator=self.indicator,
            job_runner=self.job_runner,
        )
        self.view = TranscriptionView(theme)

        self.stop_event = threading.Event()
        self.ticker_thread: Optional[threading.Thread] = None

        pub.subscribe(self._on_job_result, JOB_RESULT_TOPIC)
        logger.info(f"TranscriptionScreen initialized ({width}x{height})")

    def _on_job_result(self, outcome: JobOutcome) -> None:
        """Pub/sub listener; runs on the job thread, so only enqueue."""
        self.events.put(outcome)

    def _on_key(self, key: str) -> bool:
        self.events.put(KeyEvent(key))
        return not self.stop_event.is_set()

    def _tick_loop(self) -> None:
        """Emit ticks, and a resize event whenever the console size changes."""
        last_size = self.console.size
        while not self.stop_event.wait(self.tick_interval):
            size = self.console.size
            if size != last_size:
                last_size = size
                self.events.put(ResizeEvent(width=size.width, height=size.height))
            self.events.put(TickEvent())

    def render(self) -> RenderableType:
        return self.view.render(self.session, self.file_browser, self.indicator)

    def process_events(self, live: Optional[Live] = None) -> None:
        """Handle queued events in arrival order until a quit is requested."""
        while True:
            event = self.events.get()
            if not self.machine.handle(event):
                return
            if isinstance(event, TickEvent) and self.session.mode is not Mode.PROCESSING:
                continue
            if live is not None:
                live.update(self.render(), refresh=True)

    def run(self) -> None:
        """Run the screen until the user quits."""
        width, height = self.console.size
        self.events.put(ResizeEvent(width=width, height=height))

        self.input_handler = self.input_handler_factory(self._on_key)
        self.input_handler.start()
        self.ticker_thread = threading.Thread(target=self._tick_loop, name="ticker", daemon=True)
        self.ticker_thread.start()

        try:
            with Live(self.render(), console=self.console, screen=True,
                      auto_refresh=False, redirect_stderr=False) as live:
                self.process_events(live)
        except KeyboardInterrupt:
            logger.info("Keyboard interrupt received")
        finally:
            self.cleanup()

    def cleanup(self) -> None:
        """Stop background threads, then cancel any running job and wait for it."""
        self.stop_event.set()
        if self.input_handler:
            self.input_handler.stop()
        if self.ticker_thread:
            self.ticker_thread.join(timeout=1.0)
        if self.session.mode is Mode.PROCESSING:
            self.job_runner.cancel()
            grace = float(self.config.get('pipeline.cancel_grace_seconds', 2.0))
            if not self.job_runner.wait(timeout=grace + 1.0):
                logger.warning("Transcription job did not stop, its scratch files may remain")
        try:
            pub.unsubscribe(self._on_job_result, JOB_RESULT_TOPIC)
        except Exception as e:
            logger.warning(f"Error during unsubscribe: {e}")
        logger.info("TranscriptionScreen cleanup completed")
