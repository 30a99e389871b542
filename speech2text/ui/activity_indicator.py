"""Tick-driven activity indicator shown while a job runs."""

from typing import Sequence, Tuple

DOT_FRAMES: Tuple[str, ...] = ("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷")


class ActivityIndicator:
    """Spinner animation advanced by tick events."""

    def __init__(self, frames: Sequence[str] = DOT_FRAMES):
        if not frames:
            raise ValueError("ActivityIndicator needs at least one frame")
        self.frames = tuple(frames)
        self.frame_count = 0
        self.running = False

    def start(self) -> None:
        self.running = True
        self.frame_count = 0

    def tick(self) -> None:
        if self.running:
            self.frame_count += 1

    @property
    def frame(self) -> str:
        return self.frames[self.frame_count % len(self.frames)]
