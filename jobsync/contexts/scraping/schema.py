"""
Job posting record produced by the scraping context.

Field names on the stored document are camelCase because the jobs
collection is read directly by the display layer.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

# Stored document key -> JobPosting attribute
DOCUMENT_FIELD_MAP = {
    "title": "title",
    "company": "company",
    "location": "location",
    "payRate": "pay_rate",
    "postedDate": "posted_date",
    "type": "employment_type",
    "description": "description",
    "skills": "skills",
    "yearsExperience": "years_experience",
    "sourceUrl": "source_url",
}


@dataclass
class JobPosting:
    title: str
    company: str
    location: str
    pay_rate: str
    posted_date: str
    employment_type: str
    description: str
    source_url: str
    skills: List[str] = field(default_factory=list)
    years_experience: int = 1

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ValueError("JobPosting requires a non-empty title")

    def __repr__(self):
        return f"<JobPosting {self.title} at {self.company} ({self.location})>"

    def to_document(self, scraped_at: Any = None) -> Dict[str, Any]:
        """
        Convert to the stored document shape.

        Args:
            scraped_at: Value for ``scrapedAt``, normally the store's
                server-timestamp sentinel. Omitted when None.
        """
        document = {key: getattr(self, attr) for key, attr in DOCUMENT_FIELD_MAP.items()}
        document["skills"] = list(self.skills)
        if scraped_at is not None:
            document["scrapedAt"] = scraped_at
        return document

    def to_row(self) -> Dict[str, Any]:
        """Flat row for tabular export; skills joined with commas."""
        row = asdict(self)
        row["skills"] = ", ".join(self.skills)
        return row
