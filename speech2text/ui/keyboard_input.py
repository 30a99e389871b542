"""Cross-platform keyboard input handling for the terminal UI."""

import os
import sys
import threading
from typing import Callable, List, Optional
import logging

logger = logging.getLogger(__name__)


ESCAPE_SEQUENCES = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[7~": "home",
    "\x1b[8~": "end",
    "\x1b[5~": "pgup",
    "\x1b[6~": "pgdown",
    "\x1b[3~": "delete",
}

CONTROL_KEYS = {
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x03": "ctrl+c",
    "\x04": "ctrl+d",
    "\x1b": "esc",
}

# Second byte after a 0x00 / 0xe0 prefix from msvcrt.getwch()
WINDOWS_SCAN_CODES = {
    "H": "up",
    "P": "down",
    "K": "left",
    "M": "right",
    "G": "home",
    "O": "end",
    "I": "pgup",
    "Q": "pgdown",
    "S": "delete",
}


def split_keys(data: str) -> List[str]:
    """Decode raw terminal input into key names.

    One read may hold several keys when the user types fast, so the input
    is scanned left to right. Unknown escape sequences are dropped.
    """
    keys: List[str] = []
    i = 0
    while i < len(data):
        char = data[i]
        if char == "\x1b" and i + 1 < len(data) and data[i + 1] in "[O":
            end = i + 2
            # CSI parameters are digits and ';', the final byte ends the sequence
            while end < len(data) and (data[end].isdigit() or data[end] == ";"):
                end += 1
            sequence = data[i:end + 1]
            key = ESCAPE_SEQUENCES.get(sequence)
            if key:
                keys.append(key)
            else:
                logger.debug(f"Unknown escape sequence: {sequence!r}")
            i = end + 1
            continue
        keys.append(CONTROL_KEYS.get(char, char))
        i += 1
    return keys


class KeyboardInputHandler:
    """Read keys on a background thread and pass them to a callback."""

    def __init__(self, callback: Callable[[str], bool], stream=None):
        """Initialize keyboard handler.

        Args:
            callback: Function that takes a key and returns True to continue, False to quit
            stream: Input stream, defaults to sys.stdin
        """
        self.callback = callback
        self.stream = stream if stream is not None else sys.stdin
        self.running = False
        self.thread: Optional[threading.Thread] = None
        self._saved_settings = None

    def start(self) -> None:
        """Start the keyboard input handler."""
        if self.running:
            return

        self._enter_cbreak()
        self.running = True
        self.thread = threading.Thread(target=self._input_loop, name="keyboard_input", daemon=True)
        self.thread.start()
        logger.info("Keyboard input handler started")

    def stop(self) -> None:
        """Stop the keyboard input handler."""
        self.running = False
        if self.thread and self.thread is not threading.current_thread():
            self.thread.join(timeout=1.0)
        self._restore_terminal()
        logger.info("Keyboard input handler stopped")

    def _enter_cbreak(self) -> None:
        """Switch the terminal to unbuffered, no-echo input (POSIX only)."""
        if sys.platform == "win32":
            return
        import termios
        import tty

        fd = self.stream.fileno()
        self._saved_settings = termios.tcgetattr(fd)
        tty.setcbreak(fd)

    def _restore_terminal(self) -> None:
        if self._saved_settings is None:
            return
        import termios

        termios.tcsetattr(self.stream.fileno(), termios.TCSADRAIN, self._saved_settings)
        self._saved_settings = None

    def _input_loop(self) -> None:
        """Main input handling loop."""
        logger.info("Starting keyboard input loop")
        try:
            while self.running:
                for key in self._read_keys():
                    logger.debug(f"Key detected: {key!r}")
                    if not self.callback(key):
                        logger.info("Callback returned False, breaking input loop")
                        self.running = False
                        break
        except Exception as e:
            logger.error(f"Input loop error: {e}")
        logger.info("Keyboard input loop ended")

    def _read_keys(self) -> List[str]:
        if sys.platform == "win32":
            return self._read_keys_windows()
        return self._read_keys_unix()

    def _read_keys_windows(self) -> List[str]:
        """Get keys on Windows."""
        import msvcrt
        import time

        if not msvcrt.kbhit():
            time.sleep(0.05)
            return []
        char = msvcrt.getwch()
        if char in ("\x00", "\xe0"):
            code = msvcrt.getwch()
            key = WINDOWS_SCAN_CODES.get(code)
            return [key] if key else []
        return split_keys(char)

    def _read_keys_unix(self) -> List[str]:
        """Get keys on Unix/Linux/macOS."""
        import select

        fd = self.stream.fileno()
        if not select.select([fd], [], [], 0.1)[0]:
            return []
        data = os.read(fd, 64)
        if not data:
            # EOF on stdin
            self.running = False
            return []
        return split_keys(data.decode("utf-8", errors="ignore"))
