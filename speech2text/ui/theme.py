"""Visual styling for the terminal screens."""

from dataclasses import dataclass

from rich import box
from rich.style import Style


@dataclass(frozen=True)
class Theme:
    """Immutable style set handed to the view at construction."""
    title: Style = Style(color="#FAFAFA", bgcolor="#7D56F4", bold=True)
    subtitle: Style = Style(color="#999999")
    error: Style = Style(color="#FF5555")
    success: Style = Style(color="#50FA7B")
    transcription: Style = Style(color="#F8F8F2")
    border: Style = Style(color="#6272A4")
    spinner: Style = Style(color="#7D56F4")
    directory: Style = Style(color="#8BE9FD", bold=True)
    cursor: Style = Style(color="#FF79C6", bold=True)
    disabled: Style = Style(color="#555555")
    panel_box: box.Box = box.ROUNDED


DEFAULT_THEME = Theme()
