"""Background job runner publishing its outcome over pub/sub."""

import logging
import threading
from typing import Optional

from pubsub import pub

from ..models.events import JobFailed, JobOutcome, JobSucceeded

logger = logging.getLogger(__name__)

JOB_RESULT_TOPIC = "job.result"


class JobRunner:
    """Runs the transcription pipeline once on a worker thread.

    The outcome is published exactly once on ``topic`` with the keyword
    ``outcome``. The runner never raises into the caller.
    """

    def __init__(self, pipeline, topic: str = JOB_RESULT_TOPIC):
        """Initialize job runner.

        Args:
            pipeline: Object with ``run(path) -> str`` and ``cancel()``
            topic: Pub/sub topic name for the job outcome
        """
        self.pipeline = pipeline
        self.topic = topic
        self.thread: Optional[threading.Thread] = None
        self.outcome: Optional[JobOutcome] = None
        logger.info(f"JobRunner initialized with topic: {topic}")

    @property
    def is_running(self) -> bool:
        return self.thread is not None and self.thread.is_alive()

    def start(self, input_path: str) -> None:
        """Start the job for ``input_path`` without waiting for it."""
        if self.thread is not None:
            logger.warning(f"Job already started, ignoring request for {input_path}")
            return

        self.thread = threading.Thread(target=self._run, args=(input_path,), name="job_runner")
        self.thread.daemon = True
        self.thread.start()
        logger.info(f"Job started for {input_path}")

    def _run(self, input_path: str) -> None:
        try:
            text = self.pipeline.run(input_path)
            outcome: JobOutcome = JobSucceeded(text=text or "")
        except Exception as e:
            logger.error(f"Job for {input_path} failed: {e}", exc_info=True)
            outcome = JobFailed(message=str(e))

        self.outcome = outcome
        self.publish(outcome)

    def publish(self, outcome: JobOutcome) -> None:
        pub.sendMessage(self.topic, outcome=outcome)
        logger.debug(f"Published job outcome: {type(outcome).__name__}")

    def cancel(self) -> None:
        """Ask the pipeline to stop its running command (best effort)."""
        if not self.is_running:
            return
        logger.info("Cancelling running job")
        try:
            self.pipeline.cancel()
        except Exception as e:
            logger.warning(f"Error cancelling job: {e}")

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Wait for the worker thread. Returns True when it has finished."""
        if self.thread is None:
            return True
        self.thread.join(timeout=timeout)
        return not self.thread.is_alive()
