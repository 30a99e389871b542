"""Audio extraction module."""

from .extractor import FFmpegAudioExtractor, locate_ffmpeg

__all__ = [
    'FFmpegAudioExtractor',
    'locate_ffmpeg',
]
