"""
Error taxonomy for a sync run.

ConfigError is fatal before any work starts. FetchError and SyncError are
caught by the run orchestrator and reported to the metadata record.
SecondaryReportError is only ever logged.
"""

from typing import Optional


class JobSyncError(Exception):
    """Base class for all jobsync errors."""


class ConfigError(JobSyncError):
    """Missing or invalid credentials or configuration values."""


class FetchError(JobSyncError):
    """The listing page could not be fetched (network, timeout, non-2xx)."""

    def __init__(self, message: str, url: str, classification: Optional[str] = None):
        super().__init__(message)
        self.url = url
        self.classification = classification


class SyncError(JobSyncError):
    """A document store operation failed."""


class SecondaryReportError(JobSyncError):
    """Writing the failure record itself failed."""
