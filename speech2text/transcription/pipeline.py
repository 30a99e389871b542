"""Extraction + transcription pipeline run for one selected file."""

import logging
import tempfile
from pathlib import Path
from typing import Optional

from ..audio.extractor import FFmpegAudioExtractor, locate_ffmpeg
from ..commands import CommandCancelledError, CommandRunner, PipelineError
from ..config import Speech2TextConfig
from .base import AbstractTranscriptionBackend
from .whisper_backend import WhisperBackend

logger = logging.getLogger(__name__)


TEMP_DIR_PREFIX = "audio_stt_"
AUDIO_NAME = "audio.wav"


class TranscriptionPipeline:
    """Runs dependency checks, audio extraction and transcription.

    Scratch files live in a temporary directory that is removed when
    ``run`` returns or raises.
    """

    def __init__(self,
                 runner: CommandRunner,
                 backend: AbstractTranscriptionBackend,
                 ffmpeg_path: Optional[str] = None,
                 ffmpeg_fallback_paths=()):
        self.runner = runner
        self.backend = backend
        self.ffmpeg_path = ffmpeg_path
        self.ffmpeg_fallback_paths = list(ffmpeg_fallback_paths)

    @classmethod
    def from_config(cls, config: Speech2TextConfig) -> "TranscriptionPipeline":
        runner = CommandRunner(cancel_grace_seconds=config.get('pipeline.cancel_grace_seconds', 2.0))
        backend = WhisperBackend(
            runner=runner,
            python_path=config.get('pipeline.python_path'),
            model=config.get('pipeline.model', 'base'),
            language=config.get('pipeline.language'),
            package=config.get('pipeline.package', 'openai-whisper'),
            auto_install=config.get('pipeline.auto_install', True),
        )
        return cls(
            runner=runner,
            backend=backend,
            ffmpeg_path=config.get('pipeline.ffmpeg_path'),
            ffmpeg_fallback_paths=config.get('pipeline.ffmpeg_fallback_paths', []),
        )

    def run(self, input_path: str) -> str:
        """Transcribe ``input_path`` and return the text.

        Raises:
            PipelineError: If any stage fails; the message names the stage
        """
        with tempfile.TemporaryDirectory(prefix=TEMP_DIR_PREFIX) as temp_dir:
            logger.debug(f"Working directory: {temp_dir}")
            try:
                return self._run_stages(input_path, temp_dir)
            finally:
                self.backend.cleanup()

    def _run_stages(self, input_path: str, temp_dir: str) -> str:
        try:
            ffmpeg = locate_ffmpeg(self.ffmpeg_path, self.ffmpeg_fallback_paths)
            self.backend.initialize()
        except CommandCancelledError:
            raise
        except PipelineError as e:
            raise PipelineError(f"dependency check failed: {e}") from e

        audio_path = str(Path(temp_dir) / AUDIO_NAME)
        extractor = FFmpegAudioExtractor(ffmpeg, self.runner)
        try:
            extractor.extract(input_path, audio_path)
        except CommandCancelledError:
            raise
        except PipelineError as e:
            raise PipelineError(f"audio extraction failed: {e}") from e

        try:
            return self.backend.transcribe_file(audio_path, temp_dir)
        except CommandCancelledError:
            raise
        except PipelineError as e:
            raise PipelineError(f"transcription failed: {e}") from e

    def cancel(self) -> None:
        """Stop the running external command, best effort."""
        self.runner.cancel()
