"""Abstract base classes for transcription backends."""

from abc import ABC, abstractmethod
import logging

logger = logging.getLogger(__name__)


class AbstractTranscriptionBackend(ABC):
    """Abstract base class for transcription backends."""

    @abstractmethod
    def initialize(self) -> None:
        """Make sure the backend can run, installing what it needs.

        Raises:
            PipelineError: If the backend cannot be made ready
        """
        pass

    @abstractmethod
    def transcribe_file(self, audio_path: str, work_dir: str) -> str:
        """Transcribe a 16 kHz mono WAV file.

        Args:
            audio_path: Path to the WAV file
            work_dir: Scratch directory owned by the current job

        Returns:
            Transcribed text, stripped; empty when no speech was found
        """
        pass

    def cleanup(self) -> None:
        """Clean up backend resources."""
        pass
