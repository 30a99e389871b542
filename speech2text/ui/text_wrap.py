"""Word wrapping for the transcription panel."""

from typing import List

from rich.cells import cell_len


def wrap_text(text: str, width: int) -> List[str]:
    """Wrap text into lines no wider than ``width`` terminal cells.

    Words are never split: a word longer than ``width`` gets a line of its
    own and overflows. Whitespace runs (including newlines) collapse to a
    single space. A non-positive width returns the text untouched.

    Args:
        text: Text to wrap
        width: Target line width in cells

    Returns:
        Wrapped lines; empty for empty or whitespace-only text
    """
    if width <= 0:
        return [text] if text else []

    words = text.split()
    if not words:
        return []

    lines: List[str] = []
    current_line = ""
    current_len = 0

    for word in words:
        word_len = cell_len(word)
        if not current_line:
            current_line, current_len = word, word_len
        elif current_len + 1 + word_len <= width:
            current_line += " " + word
            current_len += 1 + word_len
        else:
            lines.append(current_line)
            current_line, current_len = word, word_len

    lines.append(current_line)
    return lines
