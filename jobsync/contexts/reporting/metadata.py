"""
Run status bookkeeping.

Publishes the outcome of the most recent run to a single well-known
metadata document that the display layer reads.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from loguru import logger

from jobsync.config import ReportingConfig, StorageConfig
from jobsync.contexts.reporting.events import log_sync_run_event
from jobsync.contexts.storage.database import DocumentStore
from jobsync.exceptions import SecondaryReportError
from jobsync.utils.helpers import iso_timestamp, locale_timestamp, utc_now
from jobsync.utils.text_processing import truncate

SUCCESS_STATUS = "success"
FAILURE_STATUS = "failure"


def error_message(error: Union[BaseException, str]) -> str:
    """Readable message for an exception, falling back to its type name."""
    if isinstance(error, str):
        return error
    return str(error) or type(error).__name__


@dataclass
class RunInfo:
    """Identifiers attached to every metadata write."""

    source: str
    run_id: Optional[str] = None
    sha: Optional[str] = None

    @classmethod
    def from_config(cls, config: ReportingConfig) -> "RunInfo":
        return cls(source=config.source, run_id=config.run_id, sha=config.commit_sha)

    def to_document(self) -> Dict[str, Any]:
        return {"source": self.source, "runId": self.run_id, "sha": self.sha}


class RunReporter:
    """
    Merges success or failure records into the metadata document.

    Args:
        store: Document store holding the metadata record
        storage_config: Supplies the metadata document path
        reporting_config: Run identifiers, display timezone, error length cap
        log_dir: If set, each record is also appended to ``sync_runs.txt`` there
        clock: Returns the current UTC time
    """

    def __init__(
        self,
        store: DocumentStore,
        storage_config: StorageConfig,
        reporting_config: ReportingConfig,
        log_dir: Optional[Path] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.metadata_path = storage_config.metadata_doc_path
        self.config = reporting_config
        self.run_info = RunInfo.from_config(reporting_config)
        self.log_dir = log_dir
        self.clock = clock

    def _base_record(self, status: str) -> Dict[str, Any]:
        now = self.clock()
        return {
            **self.run_info.to_document(),
            "timestamp": locale_timestamp(now, self.config.timezone),
            "timestampISO": iso_timestamp(now),
            "status": status,
        }

    def _log_event(self, record: Dict[str, Any]) -> None:
        """Append to local run history; the store record is authoritative."""
        if self.log_dir is None:
            return
        try:
            log_sync_run_event(record, self.log_dir)
        except OSError as e:
            logger.warning(f"Could not append run history in {self.log_dir}: {e}")

    def report_success(self, count: int) -> Dict[str, Any]:
        """
        Merge a success record.

        Store errors propagate so the caller can report the run as failed.
        """
        record = {**self._base_record(SUCCESS_STATUS), "count": count}
        self.store.merge_document(self.metadata_path, record)
        self._log_event(record)
        return record

    def _write_failure_record(self, record: Dict[str, Any]) -> None:
        try:
            self.store.merge_document(self.metadata_path, record)
        except Exception as e:
            raise SecondaryReportError(
                f"Also failed to update {self.metadata_path}: {error_message(e)}"
            ) from e

    def report_failure(self, error: Union[BaseException, str]) -> Dict[str, Any]:
        """
        Merge a failure record with the truncated error text.

        A failure to write this record is logged and otherwise ignored; the run
        is already failing.
        """
        message = truncate(error_message(error), self.config.max_error_length)
        record = {**self._base_record(FAILURE_STATUS), "error": message}

        try:
            self._write_failure_record(record)
        except SecondaryReportError as e:
            logger.error(str(e))

        self._log_event(record)
        return record
