"""Scroll viewport math for the transcription panel."""

from typing import List, NamedTuple, Optional, Sequence

from .text_wrap import wrap_text


MIN_VIEWPORT_HEIGHT = 5
# Rows taken by the title, status line, panel padding and instructions
CHROME_ROWS = 10
# Columns taken by the panel border and horizontal padding
CHROME_COLUMNS = 8


class ViewportWindow(NamedTuple):
    """Visible slice of the wrapped lines."""
    visible_lines: List[str]
    offset: int


def compute_window(lines: Sequence[str], offset: int, height: int) -> ViewportWindow:
    """Compute the lines shown for a scroll offset.

    The result always holds exactly ``max(height, 5)`` lines, padded with
    blanks. An offset past the end re-anchors to the last page.
    """
    height = max(height, MIN_VIEWPORT_HEIGHT)
    start = max(offset, 0)
    if start >= len(lines):
        start = max(0, len(lines) - height)

    visible = list(lines[start:start + height])
    visible.extend([""] * (height - len(visible)))
    return ViewportWindow(visible_lines=visible, offset=start)


def max_scroll(line_count: int, height: int) -> int:
    """Largest valid scroll offset for ``line_count`` lines."""
    return max(0, line_count - max(height, MIN_VIEWPORT_HEIGHT))


def clamp_offset(offset: int, limit: int) -> int:
    return min(max(offset, 0), max(limit, 0))


def panel_height(terminal_height: int) -> int:
    """Number of text rows in the transcription panel."""
    return max(terminal_height - CHROME_ROWS, MIN_VIEWPORT_HEIGHT)


def panel_wrap_width(terminal_width: int) -> int:
    """Wrap width for the transcription panel."""
    return terminal_width - CHROME_COLUMNS


def wrapped_result(text: Optional[str], terminal_width: int) -> List[str]:
    """Wrap result text for the current terminal width."""
    if not text:
        return []
    return wrap_text(text, panel_wrap_width(terminal_width))
