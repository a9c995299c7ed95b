"""
Listing extraction from raw HTML.

Each field is described by a FieldRule: an ordered list of CSS selectors and
a fallback literal. Selectors are tried in order and the first non-empty
trimmed text wins, which tolerates small markup differences between
deployments of the same job board.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup
from bs4.element import Tag
from loguru import logger

from jobsync.config import ExtractionConfig
from jobsync.contexts.scraping.schema import JobPosting
from jobsync.utils.helpers import iso_timestamp
from jobsync.utils.text_processing import clean_text


def select_text(element: Tag, selectors: Sequence[str]) -> str:
    """
    Return the first non-empty trimmed text found by ``selectors``.

    Args:
        element: Element to search within
        selectors: CSS selectors, highest priority first

    Returns:
        Trimmed text, or an empty string when nothing matches
    """
    for selector in selectors:
        for match in element.select(selector):
            text = clean_text(match.get_text())
            if text:
                return text
    return ""


@dataclass(frozen=True)
class FieldRule:
    """Ordered selector chain for one field, with a fallback value."""

    name: str
    selectors: Sequence[str]
    default: str = ""

    def extract(self, element: Tag) -> str:
        return select_text(element, self.selectors) or self.default


class ListingExtractor:
    """
    Turns a job-board listing page into JobPosting records.

    Works on raw HTML only; fetching is the PageFetcher's job.
    """

    def __init__(self, config: ExtractionConfig):
        self.config = config
        self.title_rule = FieldRule("title", tuple(config.title_selectors))
        self.location_rule = FieldRule("location", tuple(config.location_selectors), config.default_location)
        self.pay_rule = FieldRule("payRate", tuple(config.pay_selectors), config.default_pay_rate)
        self.description_rule = FieldRule(
            "description", tuple(config.description_selectors), config.default_description
        )

    @property
    def listing_selector(self) -> str:
        # One grouped selector keeps matches in document order without duplicates
        return ", ".join(self.config.listing_selectors)

    def find_listings(self, soup: BeautifulSoup) -> List[Tag]:
        return soup.select(self.listing_selector)

    def parse_listing(self, element: Tag, source_url: str, posted_date: str) -> Optional[JobPosting]:
        """Build a posting from one listing element, or None if it has no title."""
        title = self.title_rule.extract(element)
        if not title:
            return None

        return JobPosting(
            title=title,
            company=self.config.company,
            location=self.location_rule.extract(element),
            pay_rate=self.pay_rule.extract(element),
            posted_date=posted_date,
            employment_type=self.config.employment_type,
            description=self.description_rule.extract(element),
            source_url=source_url,
            skills=list(self.config.skills),
            years_experience=self.config.years_experience,
        )

    def extract(self, html: str, source_url: str, scraped_at: Optional[datetime] = None) -> List[JobPosting]:
        """
        Extract postings from a listing page.

        Args:
            html: Raw page HTML
            source_url: URL the page was fetched from, stored on each posting
            scraped_at: Scrape time used for ``postedDate`` (default: now, UTC)

        Returns:
            Postings in document order
        """
        soup = BeautifulSoup(html, "html.parser")
        posted_date = iso_timestamp(scraped_at)

        listings = self.find_listings(soup)
        postings = []
        for element in listings:
            posting = self.parse_listing(element, source_url=source_url, posted_date=posted_date)
            if posting is not None:
                postings.append(posting)

        skipped = len(listings) - len(postings)
        if skipped:
            logger.debug(f"Skipped {skipped} listing element(s) without a title")

        return postings
