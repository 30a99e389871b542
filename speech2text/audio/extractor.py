"""Audio extraction with the ffmpeg command line tool."""

import logging
import shutil
from pathlib import Path
from typing import Iterable, Optional

from ..commands import CommandRunner, PipelineError

logger = logging.getLogger(__name__)


SAMPLE_RATE = 16000
CHANNELS = 1


def locate_ffmpeg(configured_path: Optional[str] = None,
                  fallback_paths: Iterable[str] = ()) -> str:
    """Find the ffmpeg executable.

    Order: the configured path, ``ffmpeg`` on PATH, then the fallback
    locations.

    Raises:
        PipelineError: If ffmpeg cannot be found
    """
    if configured_path:
        if Path(configured_path).exists() or shutil.which(configured_path):
            return configured_path
        raise PipelineError(f"configured ffmpeg not found: {configured_path}")

    found = shutil.which("ffmpeg")
    if found:
        return found

    for candidate in fallback_paths:
        if Path(candidate).exists():
            logger.info(f"Using fallback ffmpeg at {candidate}")
            return candidate

    raise PipelineError(
        "ffmpeg not found. Please install FFmpeg or place ffmpeg.exe in the current directory"
    )


class FFmpegAudioExtractor:
    """Extracts a mono 16 kHz 16-bit PCM WAV track from a media file."""

    def __init__(self, ffmpeg_path: str, runner: CommandRunner):
        self.ffmpeg_path = ffmpeg_path
        self.runner = runner

    def build_command(self, input_path: str, output_path: str) -> list:
        return [
            self.ffmpeg_path,
            "-i", input_path,
            "-vn",  # no video
            "-acodec", "pcm_s16le",
            "-ar", str(SAMPLE_RATE),
            "-ac", str(CHANNELS),
            "-f", "wav",
            output_path,
            "-y",
        ]

    def extract(self, input_path: str, output_path: str) -> str:
        """Extract the audio track of ``input_path`` into ``output_path``.

        Raises:
            PipelineError: If ffmpeg exits non-zero
        """
        logger.info(f"Extracting audio from {input_path}")
        result = self.runner.run(self.build_command(input_path, output_path))
        if result.returncode != 0:
            raise PipelineError(f"ffmpeg error: {result.output}")
        logger.info(f"Audio extracted to {output_path}")
        return output_path
