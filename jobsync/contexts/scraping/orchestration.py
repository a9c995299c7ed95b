"""
Run orchestration: fetch, extract, replace the jobs collection, report.

One call to ``run_sync`` is one attempt. Any exception before the success
record is written routes to the failure report; nothing is retried.
"""

import time
import traceback
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger

from jobsync.config import SyncConfig
from jobsync.contexts.reporting import FAILURE_STATUS, SUCCESS_STATUS, RunReporter, error_message
from jobsync.contexts.scraping.extraction import ListingExtractor
from jobsync.contexts.scraping.requests import PageFetcher
from jobsync.contexts.storage import CollectionSynchronizer, DocumentStore
from jobsync.exceptions import FetchError


def _setup_logger(log_dir: Path, quiet: bool = False) -> Path:
    """
    Configure loguru to write to timestamped log file.

    Args:
        log_dir: Directory for log files
        quiet: Only show warnings and errors on the console

    Returns:
        Path to the created log file
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"sync_{timestamp}.txt"

    # Remove default handler and add file handler
    logger.remove()  # Remove default stderr handler
    logger.add(log_file, format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}")
    logger.add(
        lambda msg: print(msg, end=""),  # Also print to console
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}\n",
        level="WARNING" if quiet else "INFO",
    )

    return log_file


@dataclass
class SyncResult:
    status: str
    count: int = 0
    deleted: int = 0
    time_elapsed: float = 0.0
    error: Optional[str] = None
    traceback: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCESS_STATUS

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1


def run_sync(
    config: SyncConfig,
    store: DocumentStore,
    fetcher: Optional[PageFetcher] = None,
    extractor: Optional[ListingExtractor] = None,
    synchronizer: Optional[CollectionSynchronizer] = None,
    reporter: Optional[RunReporter] = None,
    show_progress: bool = False,
) -> SyncResult:
    """
    Run one full sync and report its outcome.

    Components default to ones built from ``config``; pass your own to
    substitute fakes in tests.

    Args:
        config: Run configuration
        store: Document store for the jobs collection and metadata record
        fetcher: Listing page fetcher
        extractor: HTML to JobPosting extractor
        synchronizer: Delete-all / write-all collection replacement
        reporter: Metadata record writer
        show_progress: Show tqdm bars for the delete and write phases

    Returns:
        SyncResult with status "success" or "failure"
    """
    fetcher = fetcher or PageFetcher(config.fetch)
    extractor = extractor or ListingExtractor(config.extraction)
    synchronizer = synchronizer or CollectionSynchronizer(store, config.storage, show_progress=show_progress)
    reporter = reporter or RunReporter(
        store, config.storage, config.reporting, log_dir=Path(config.logs_path)
    )

    url = config.fetch.url
    collection = config.storage.jobs_collection
    start_time = time.time()
    result = SyncResult(status=FAILURE_STATUS)

    logger.info(f"Starting scrape of {url}...")

    try:
        html = fetcher.fetch(url)
        postings = extractor.extract(html, source_url=url)
        logger.info(f"Found {len(postings)} jobs. Syncing {collection}...")

        # Two separate phases; a crash between them leaves the collection empty
        result.deleted = synchronizer.delete_all(collection)
        logger.info(f"Deleted {result.deleted} existing documents from {collection}")
        result.count = synchronizer.write_all(collection, postings)

        reporter.report_success(result.count)

        result.status = SUCCESS_STATUS
        result.time_elapsed = time.time() - start_time
        logger.success(f"Synced {result.count} jobs to {collection} ({result.time_elapsed:.1f}s)")

    except Exception as e:
        result.status = FAILURE_STATUS
        result.error = error_message(e)
        result.traceback = traceback.format_exc()
        result.time_elapsed = time.time() - start_time

        outcome = ""
        if isinstance(e, FetchError) and e.classification:
            outcome = f" ({e.classification})"
        logger.error(f"Scrape failed{outcome}: {result.error} ({result.time_elapsed:.1f}s)")
        logger.debug(f"Traceback:\n{result.traceback}")

        reporter.report_failure(e)

    return result
