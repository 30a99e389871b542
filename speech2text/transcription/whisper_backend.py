"""Whisper transcription backend running in a separate Python interpreter."""

import logging
import sys
from pathlib import Path
from typing import Optional

from .base import AbstractTranscriptionBackend
from ..commands import CommandRunner, PipelineError

logger = logging.getLogger(__name__)


SCRIPT_NAME = "transcribe.py"
OUTPUT_NAME = "transcription.txt"

TRANSCRIBE_SCRIPT = '''\
import whisper

print("Loading Whisper model...")
model = whisper.load_model({model!r})
print("Transcribing audio...")
result = model.transcribe({audio_path!r}{language_arg})

transcription = result["text"].strip()
print("Transcription completed")

with open({output_path!r}, "w", encoding="utf-8") as f:
    f.write(transcription)
'''


class WhisperBackend(AbstractTranscriptionBackend):
    """openai-whisper backend invoked as a child process."""

    def __init__(self,
                 runner: CommandRunner,
                 python_path: Optional[str] = None,
                 model: str = "base",
                 language: Optional[str] = None,
                 package: str = "openai-whisper",
                 auto_install: bool = True):
        """Initialize Whisper backend.

        Args:
            runner: Command runner shared with the rest of the job
            python_path: Interpreter used to run Whisper (defaults to this one)
            model: Whisper model name, e.g. 'base', 'small'
            language: Optional language code passed to Whisper
            package: pip package providing the ``whisper`` module
            auto_install: Install the package with pip when it is missing
        """
        self.runner = runner
        self.python_path = python_path or sys.executable
        self.model = model
        self.language = language
        self.package = package
        self.auto_install = auto_install

    def initialize(self) -> None:
        """Check that whisper is importable, installing it on first use."""
        if not self.python_path:
            raise PipelineError("python not found in PATH")

        check = self.runner.run([self.python_path, "-c", "import whisper"])
        if check.returncode == 0:
            logger.info("Whisper is available")
            return

        if not self.auto_install:
            raise PipelineError(f"{self.package} is not installed for {self.python_path}")

        logger.info(f"Installing {self.package} with {self.python_path}")
        install = self.runner.run([self.python_path, "-m", "pip", "install", self.package])
        if install.returncode != 0:
            raise PipelineError(f"failed to install {self.package}: {install.output}")

    def build_script(self, audio_path: str, output_path: str) -> str:
        language_arg = f", language={self.language!r}" if self.language else ""
        return TRANSCRIBE_SCRIPT.format(
            model=self.model,
            audio_path=str(audio_path),
            output_path=str(output_path),
            language_arg=language_arg,
        )

    def transcribe_file(self, audio_path: str, work_dir: str) -> str:
        work = Path(work_dir)
        script_path = work / SCRIPT_NAME
        output_path = work / OUTPUT_NAME
        script_path.write_text(self.build_script(audio_path, str(output_path)), encoding="utf-8")

        logger.info(f"Running Whisper model '{self.model}' on {audio_path}")
        result = self.runner.run([self.python_path, str(script_path)])
        if result.returncode != 0:
            raise PipelineError(f"python transcription error: {result.output}")

        try:
            transcription = output_path.read_text(encoding="utf-8")
        except OSError as e:
            raise PipelineError(f"failed to read transcription file: {e}") from e

        return transcription.strip()
