"""
Command-line interface for the job board sync.

Uses typer for clean CLI with subcommands.
"""

from dataclasses import fields
from pathlib import Path
from typing import List, Optional

import pandas as pd
import typer
from dotenv import load_dotenv
from loguru import logger

from jobsync.config import load_settings
from jobsync.contexts.scraping import JobPosting, ListingExtractor, PageFetcher
from jobsync.contexts.scraping.orchestration import _setup_logger, run_sync
from jobsync.contexts.storage import get_document_store
from jobsync.exceptions import ConfigError, FetchError

app = typer.Typer(
    add_completion=False,
    help="Scrape the job board and replace the jobs collection",
)


def _fail(message: str) -> None:
    typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command("run")
def run_command(
    config_files: Optional[List[Path]] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML override file(s), merged in order. Defaults to $CONFIG_PATH/sync.yaml if present.",
    ),
    log_dir: Optional[Path] = typer.Option(
        None,
        "--log-dir",
        "-l",
        help="Directory for log files and run history (default: $LOGS_PATH or outs/logs)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress progress output (errors still logged)",
    ),
):
    """
    Run one sync: fetch, extract, replace the jobs collection, update metadata.

    Requires FIREBASE_SERVICE_ACCOUNT to hold the service-account JSON.
    Exits with code 1 on any failure.

    Examples:

        # Run with defaults
        $ run_sync.py run

        # Layer a staging override and log elsewhere
        $ run_sync.py run -c config/sync.yaml -c config/staging.yaml --log-dir /tmp/logs
    """
    load_dotenv()

    # Credentials and settings are checked before any network activity
    try:
        config = load_settings(config_paths=config_files or None)
    except ConfigError as e:
        _fail(str(e))

    if log_dir is not None:
        config.logs_path = str(log_dir)

    log_file = _setup_logger(Path(config.logs_path), quiet=quiet)
    logger.info(f"Logging to: {log_file}")

    try:
        store = get_document_store(config)
    except ConfigError as e:
        logger.error(str(e))
        raise typer.Exit(code=1)

    result = run_sync(config, store, show_progress=not quiet)
    if not result.succeeded:
        raise typer.Exit(code=result.exit_code)


@app.command("preview")
def preview_command(
    url: Optional[str] = typer.Option(
        None,
        "--url",
        "-u",
        help="Page to scrape (default: configured scrape URL)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write extracted postings to this CSV file",
    ),
):
    """
    Fetch and extract postings without touching the store.

    No credentials are needed. Useful for checking selectors after the board's
    markup changes.
    """
    load_dotenv()

    try:
        config = load_settings(require_credentials=False)
    except ConfigError as e:
        _fail(str(e))

    url = url or config.fetch.url
    try:
        html = PageFetcher(config.fetch).fetch(url)
    except FetchError as e:
        _fail(str(e))

    postings = ListingExtractor(config.extraction).extract(html, source_url=url)

    typer.secho(f"Found {len(postings)} jobs at {url}", fg=typer.colors.BLUE, bold=True)
    for posting in postings:
        typer.echo(f"  • {posting.title} | {posting.location} | {posting.pay_rate}")

    if output is not None:
        columns = [field.name for field in fields(JobPosting)]
        df = pd.DataFrame([posting.to_row() for posting in postings], columns=columns)
        df.to_csv(output, index=False)
        typer.echo(f"Wrote {len(df)} rows to {output}")
