"""Minimal run-history logger written to JSON Lines."""

import json
from pathlib import Path
from typing import Any, Dict


def log_sync_run_event(record: Dict[str, Any], log_dir: Path) -> Path:
    """Append a run record to ``sync_runs.txt`` in JSON Lines."""

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / "sync_runs.txt"

    # Keep one JSON object per line so downstream tools can stream the file.
    with open(log_path, "a", encoding="utf-8") as handle:
        handle.write(json.dumps(record, default=str) + "\n")
    return log_path
