"""
Shared utility functions.
"""

from jobsync.utils.config_helpers import merge_configs
from jobsync.utils.helpers import chunked, iso_timestamp, locale_timestamp, utc_now
from jobsync.utils.text_processing import clean_text, truncate

__all__ = [
    # Misc utilities
    "chunked",
    "utc_now",
    "iso_timestamp",
    "locale_timestamp",
    # Text processing
    "clean_text",
    "truncate",
    # Configuration utilities
    "merge_configs",
]
