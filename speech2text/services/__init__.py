"""Services layer for speech2text."""

from .job_runner import JobRunner, JOB_RESULT_TOPIC

__all__ = [
    "JobRunner",
    "JOB_RESULT_TOPIC",
]
