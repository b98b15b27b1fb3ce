"""
Record types produced by the scraping context.

JobRecord is what one detail page turns into. DetailOutcome wraps either a
record or the reason there is none, so the pipeline can branch on it
instead of catching exceptions.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from jobharvest.contexts.export.tabular import RESULT_COLUMN_MAP, RESULT_COLUMNS
from jobharvest.contexts.scraping.errors import CrawlError


@dataclass(frozen=True)
class JobRecord:
    """One job post. Text fields are None when their selector matched nothing."""

    title: Optional[str]
    description: Optional[str]
    job_type: Optional[str]
    employer: Optional[str]
    location: Optional[str]
    retrieved_at: datetime
    url: Optional[str] = None

    def to_row(self, include_url: bool = False) -> dict:
        row = {column: getattr(self, attr) for column, attr in RESULT_COLUMN_MAP.items()}
        if include_url:
            row["url"] = self.url
        return row


@dataclass(frozen=True)
class DetailOutcome:
    """Result of parsing one detail address: a record, or why there is none."""

    url: str
    record: Optional[JobRecord] = None
    error_kind: Optional[str] = None
    error: Optional[str] = None
    # Fetch failures only: HTTP status (if any) and permanent/transient classification
    status_code: Optional[int] = None
    classification: Optional[str] = None

    def __post_init__(self):
        if (self.record is None) == (self.error is None):
            raise ValueError("DetailOutcome needs exactly one of record or error")

    @property
    def ok(self) -> bool:
        return self.record is not None

    @classmethod
    def success(cls, url: str, record: JobRecord) -> "DetailOutcome":
        return cls(url=url, record=record)

    @classmethod
    def failure(cls, url: str, exc: CrawlError) -> "DetailOutcome":
        return cls(
            url=url,
            error_kind=exc.kind,
            error=str(exc),
            status_code=getattr(exc, "status_code", None),
            classification=getattr(exc, "classification", None),
        )
