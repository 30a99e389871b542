"""Transcription module for speech2text."""

from .base import AbstractTranscriptionBackend
from ..commands import CommandRunner, CommandResult, PipelineError, CommandCancelledError
from .whisper_backend import WhisperBackend
from .pipeline import TranscriptionPipeline

__all__ = [
    "AbstractTranscriptionBackend",
    "CommandRunner",
    "CommandResult",
    "PipelineError",
    "CommandCancelledError",
    "WhisperBackend",
    "TranscriptionPipeline",
]
