"""Subprocess execution with best-effort cancellation."""

import logging
import subprocess
import threading
from typing import List, NamedTuple, Optional

logger = logging.getLogger(__name__)


class PipelineError(RuntimeError):
    """A pipeline stage failed; the message is shown to the user as-is."""


class CommandCancelledError(PipelineError):
    """The command was terminated because the job was cancelled."""


class CommandResult(NamedTuple):
    returncode: int
    output: str  # stdout and stderr combined


class CommandRunner:
    """Runs one external command at a time and can kill it on request."""

    def __init__(self, cancel_grace_seconds: float = 2.0):
        self.cancel_grace_seconds = cancel_grace_seconds
        self.lock = threading.Lock()
        self.process: Optional[subprocess.Popen] = None
        self.cancelled = False

    def run(self, args: List[str]) -> CommandResult:
        """Run a command to completion and capture its combined output.

        Raises:
            CommandCancelledError: If cancel() was called before or during the run
            PipelineError: If the executable cannot be started
        """
        logger.debug(f"Running command: {args}")
        with self.lock:
            if self.cancelled:
                raise CommandCancelledError("job cancelled")
            try:
                self.process = subprocess.Popen(
                    args,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    stdin=subprocess.DEVNULL,
                )
            except OSError as e:
                raise PipelineError(f"cannot run {args[0]}: {e}") from e
            process = self.process

        raw_output, _ = process.communicate()

        with self.lock:
            self.process = None
            cancelled = self.cancelled

        output = (raw_output or b"").decode("utf-8", errors="replace")
        if cancelled:
            raise CommandCancelledError("job cancelled")
        logger.debug(f"Command {args[0]} exited with {process.returncode}")
        return CommandResult(returncode=process.returncode, output=output)

    def cancel(self) -> None:
        """Terminate the running command, if any, and refuse new ones."""
        with self.lock:
            self.cancelled = True
            process = self.process

        if process is None or process.poll() is not None:
            return

        logger.info(f"Terminating child process {process.pid}")
        process.terminate()
        try:
            process.wait(timeout=self.cancel_grace_seconds)
        except subprocess.TimeoutExpired:
            logger.warning(f"Child process {process.pid} did not exit, killing it")
            process.kill()
