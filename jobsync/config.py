"""
Configuration for a jobsync run.

All settings live in a tree of dataclasses that doubles as an OmegaConf
structured-config schema. ``load_settings`` layers, in order:

1. dataclass defaults
2. optional YAML files (``CONFIG_PATH/sync.yaml`` or explicit paths)
3. environment overrides (``SCRAPE_URL``, ``JOBS_COLLECTION``, ...)

and returns a plain ``SyncConfig`` object that is handed to each component.
Nothing in the package reads the environment after this point.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from jobsync.exceptions import ConfigError
from jobsync.utils.config_helpers import merge_configs

DEFAULT_SCRAPE_URL = (
    "https://jobboard.ontempworks.com/AtlasJobs/Jobs/Search"
    "?Keywords=&Location=&Distance=Twentyfive&SortBy=Date"
)
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# Firestore rejects batches with more than 500 operations.
STORE_BATCH_LIMIT = 500

CREDENTIALS_ENV_VAR = "FIREBASE_SERVICE_ACCOUNT"

# Environment variable -> dotted config key
ENV_OVERRIDES = {
    "SCRAPE_URL": "fetch.url",
    "JOBS_COLLECTION": "storage.jobs_collection",
    "METADATA_DOC_PATH": "storage.metadata_doc_path",
    "STORE_BACKEND": "storage.backend",
    "GITHUB_RUN_ID": "reporting.run_id",
    "GITHUB_SHA": "reporting.commit_sha",
    "LOGS_PATH": "logs_path",
}


@dataclass
class FetchConfig:
    url: str = DEFAULT_SCRAPE_URL
    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class ExtractionConfig:
    """Selector chains and fallback literals for listing extraction."""

    listing_selectors: List[str] = field(
        default_factory=lambda: [".job-listing-item", ".job-listing", ".job-item", "tr.job-row"]
    )
    title_selectors: List[str] = field(default_factory=lambda: [".job-title", "a.title", "a.job-title"])
    location_selectors: List[str] = field(default_factory=lambda: [".location", ".job-location"])
    pay_selectors: List[str] = field(default_factory=lambda: [".pay", ".salary"])
    description_selectors: List[str] = field(default_factory=lambda: [".description", ".summary"])

    # These are not read from the page
    company: str = "Atlas Staffing"
    default_location: str = "MN"
    default_pay_rate: str = "$18.00 / hr"
    default_description: str = "View full details on the Atlas Job Board."
    employment_type: str = "Full-Time"
    skills: List[str] = field(default_factory=lambda: ["Industrial", "Labor"])
    years_experience: int = 1


@dataclass
class StorageConfig:
    backend: str = "firestore"
    jobs_collection: str = "jobs"
    metadata_doc_path: str = "metadata/sync"
    batch_chunk: int = 450
    chunk_pause: float = 0.2


@dataclass
class ReportingConfig:
    source: str = "github-actions"
    run_id: Optional[str] = None
    commit_sha: Optional[str] = None
    timezone: str = "America/Chicago"
    max_error_length: int = 900


@dataclass
class SyncConfig:
    fetch: FetchConfig = field(default_factory=FetchConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    reporting: ReportingConfig = field(default_factory=ReportingConfig)
    credentials: Dict[str, Any] = field(default_factory=dict)
    logs_path: str = "outs/logs"


def parse_credentials(raw: Optional[str]) -> Dict[str, Any]:
    """
    Parse the service-account JSON blob.

    Raises:
        ConfigError: If the value is missing, not JSON, or not a JSON object.
    """
    if not raw:
        raise ConfigError(
            f"Missing {CREDENTIALS_ENV_VAR} env var. "
            "Set it to the JSON contents of the service-account key file."
        )
    try:
        credentials = json.loads(raw)
    except json.JSONDecodeError:
        raise ConfigError(
            f"{CREDENTIALS_ENV_VAR} is not valid JSON. "
            "Paste the full service-account JSON into the variable."
        )
    if not isinstance(credentials, dict):
        raise ConfigError(f"{CREDENTIALS_ENV_VAR} must be a JSON object.")
    return credentials


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Nest environment overrides under their config sections."""
    overrides: Dict[str, Any] = {}
    for env_key, dotted_key in ENV_OVERRIDES.items():
        value = environ.get(env_key)
        # Empty strings count as unset
        if not value:
            continue
        *sections, leaf = dotted_key.split(".")
        node = overrides
        for section in sections:
            node = node.setdefault(section, {})
        node[leaf] = value
    return overrides


def _validate(config: SyncConfig) -> SyncConfig:
    chunk = config.storage.batch_chunk
    if not 1 <= chunk <= STORE_BATCH_LIMIT:
        raise ConfigError(
            f"storage.batch_chunk must be between 1 and {STORE_BATCH_LIMIT}, got {chunk}"
        )
    if config.storage.chunk_pause < 0:
        raise ConfigError("storage.chunk_pause must be non-negative")
    if config.fetch.timeout <= 0:
        raise ConfigError("fetch.timeout must be positive")
    if not config.extraction.listing_selectors or not config.extraction.title_selectors:
        raise ConfigError("extraction.listing_selectors and extraction.title_selectors cannot be empty")
    return config


def _default_config_paths(environ: Mapping[str, str]) -> List[Path]:
    config_dir = environ.get("CONFIG_PATH")
    if not config_dir:
        return []
    candidate = Path(config_dir) / "sync.yaml"
    return [candidate] if candidate.exists() else []


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    config_paths: Optional[Sequence[Union[str, Path]]] = None,
    require_credentials: bool = True,
) -> SyncConfig:
    """
    Build the run configuration.

    Args:
        environ: Environment mapping (default: ``os.environ``)
        config_paths: YAML files to merge over the defaults. When omitted,
            ``CONFIG_PATH/sync.yaml`` is used if it exists.
        require_credentials: Parse ``FIREBASE_SERVICE_ACCOUNT`` and fail if absent.

    Returns:
        Fully merged and validated SyncConfig

    Raises:
        ConfigError: On missing/invalid credentials or invalid settings
    """
    environ = os.environ if environ is None else environ

    # Credentials before anything else
    credentials = parse_credentials(environ.get(CREDENTIALS_ENV_VAR)) if require_credentials else {}

    if config_paths is None:
        config_paths = _default_config_paths(environ)

    try:
        schema = OmegaConf.structured(SyncConfig)
        layers = [schema]
        if config_paths:
            layers.append(merge_configs(config_paths))
        layers.append(OmegaConf.create(_env_overrides(environ)))
        merged = OmegaConf.merge(*layers)
        config = OmegaConf.to_object(merged)
    except (OmegaConfBaseException, yaml.YAMLError, TypeError, FileNotFoundError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    # Secrets never pass through OmegaConf interpolation
    config.credentials = credentials
    return _validate(config)
