"""
Job scraping domain.

Handles fetching the listing page and extracting job postings from it.
"""

from jobsync.contexts.scraping.extraction import (
    FieldRule,
    ListingExtractor,
    select_text,
)
from jobsync.contexts.scraping.requests import (
    PageFetcher,
    classify_http_outcome,
)
from jobsync.contexts.scraping.schema import JobPosting

__all__ = [
    "JobPosting",
    "FieldRule",
    "ListingExtractor",
    "select_text",
    "PageFetcher",
    "classify_http_outcome",
]
