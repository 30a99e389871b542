"""Directory browser used to pick the file to transcribe."""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from rich.text import Text

from .theme import Theme, DEFAULT_THEME

logger = logging.getLogger(__name__)


class FileBrowser:
    """Keyboard-driven directory listing with an extension allow-list.

    Directories are listed first. Files whose extension is not allowed are
    shown but cannot be selected. After a file is chosen,
    ``current_selection()`` returns its path.
    """

    MOVE_UP = ("up", "k")
    MOVE_DOWN = ("down", "j")
    OPEN = ("enter", "right", "l")
    PARENT = ("left", "h", "backspace", "esc")

    def __init__(self,
                 directory: str,
                 allowed_extensions: Iterable[str],
                 show_hidden: bool = False,
                 height: int = 20):
        """Initialize file browser.

        Args:
            directory: Directory to list first
            allowed_extensions: Selectable extensions, e.g. [".mp4", ".wav"]
            show_hidden: Whether dot-files are listed
            height: Number of rows available for the listing
        """
        self.directory = Path(directory).absolute()
        self.allowed_extensions = {ext.lower() for ext in allowed_extensions}
        self.show_hidden = show_hidden
        self.height = max(height, 1)
        self.entries: List[Path] = []
        self.cursor = 0
        self.top = 0
        self.error: Optional[str] = None
        self._selection: Optional[str] = None

        self._load(self.directory)
        logger.info(f"FileBrowser initialized in {self.directory}")

    def _load(self, directory: Path) -> bool:
        try:
            children = [p for p in directory.iterdir()
                        if self.show_hidden or not p.name.startswith('.')]
        except OSError as e:
            logger.warning(f"Cannot list {directory}: {e}")
            self.error = f"Cannot open {directory.name or directory}: {e.strerror or e}"
            return False

        dirs = sorted((p for p in children if p.is_dir()), key=lambda p: p.name.lower())
        files = sorted((p for p in children if not p.is_dir()), key=lambda p: p.name.lower())
        self.directory = directory
        self.entries = dirs + files
        self.cursor = 0
        self.top = 0
        self.error = None
        return True

    def is_allowed(self, path: Path) -> bool:
        return path.suffix.lower() in self.allowed_extensions

    def set_height(self, height: int) -> None:
        self.height = max(height, 1)
        self._scroll_to_cursor()

    def current_selection(self) -> Optional[str]:
        """Path of the chosen file, or None while nothing has been chosen."""
        return self._selection

    def handle_key(self, key: str) -> None:
        """Apply a navigation key to the listing."""
        if key in self.MOVE_UP:
            self._move(-1)
        elif key in self.MOVE_DOWN:
            self._move(1)
        elif key in ("home", "g"):
            self._move(-len(self.entries))
        elif key in ("end", "G"):
            self._move(len(self.entries))
        elif key == "pgup":
            self._move(-self.height)
        elif key == "pgdown":
            self._move(self.height)
        elif key in self.OPEN:
            self._open()
        elif key in self.PARENT:
            parent = self.directory.parent
            if parent != self.directory:
                previous = self.directory
                if self._load(parent) and previous in self.entries:
                    self.cursor = self.entries.index(previous)
                    self._scroll_to_cursor()

    def _move(self, delta: int) -> None:
        if not self.entries:
            return
        self.cursor = min(max(self.cursor + delta, 0), len(self.entries) - 1)
        self._scroll_to_cursor()

    def _scroll_to_cursor(self) -> None:
        if self.cursor < self.top:
            self.top = self.cursor
        elif self.cursor >= self.top + self.height:
            self.top = self.cursor - self.height + 1

    def _open(self) -> None:
        if not self.entries:
            return
        entry = self.entries[self.cursor]
        if entry.is_dir():
            self._load(entry)
        elif self.is_allowed(entry):
            self._selection = str(entry)
            logger.info(f"File selected: {entry}")
        else:
            logger.debug(f"Ignoring unsupported file: {entry.name}")

    def render(self, theme: Theme = DEFAULT_THEME) -> Text:
        """Render the visible part of the listing."""
        text = Text()
        text.append(f"{self.directory}\n", style=theme.subtitle)

        if not self.entries:
            text.append("  (empty directory)", style=theme.disabled)
        for index in range(self.top, min(self.top + self.height, len(self.entries))):
            entry = self.entries[index]
            marker = "> " if index == self.cursor else "  "
            if entry.is_dir():
                style = theme.directory
                label = f"{entry.name}/"
            elif self.is_allowed(entry):
                style = theme.transcription
                label = entry.name
            else:
                style = theme.disabled
                label = entry.name
            if index == self.cursor:
                style = style + theme.cursor
            text.append(marker + label, style=style)
            if index < min(self.top + self.height, len(self.entries)) - 1:
                text.append("\n")

        if self.error:
            text.append(f"\n{self.error}", style=theme.error)
        return text
