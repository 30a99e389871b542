"""speech2text - terminal front-end for transcribing video and audio files."""

__version__ = "0.1.0"
