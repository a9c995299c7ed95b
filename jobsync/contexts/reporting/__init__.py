"""
Run reporting domain.

Records the outcome of each sync run for the display layer and local history.
"""

from jobsync.contexts.reporting.events import log_sync_run_event
from jobsync.contexts.reporting.metadata import (
    FAILURE_STATUS,
    SUCCESS_STATUS,
    RunInfo,
    RunReporter,
    error_message,
)

__all__ = [
    "RunInfo",
    "RunReporter",
    "error_message",
    "log_sync_run_event",
    "SUCCESS_STATUS",
    "FAILURE_STATUS",
]
