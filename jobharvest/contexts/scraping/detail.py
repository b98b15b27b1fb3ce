"""
Detail page parsing: one job post address in, one JobRecord out.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from loguru import logger

from jobharvest.contexts.scraping.errors import CrawlError
from jobharvest.contexts.scraping.extraction import extract
from jobharvest.contexts.scraping.records import DetailOutcome, JobRecord
from jobharvest.contexts.scraping.requests import PageFetcher, parse_html


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DetailSelectors:
    """CSS selectors for the five fields of a detail page."""

    title: str
    description: str
    job_type: str
    employer: str
    location: str

    @classmethod
    def from_config(cls, selectors) -> "DetailSelectors":
        """Build from the ``selectors`` section of the crawl config."""
        return cls(
            title=selectors.title,
            description=selectors.description,
            job_type=selectors.job_type,
            employer=selectors.employer,
            location=selectors.location,
        )


class DetailParser:
    """
    Fetches a detail page and extracts its fields.

    ``parse_detail`` raises on failure; ``parse`` turns the same failures into
    a DetailOutcome so callers can keep going.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        selectors: DetailSelectors,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.fetcher = fetcher
        self.selectors = selectors
        self.clock = clock

    def parse_detail(self, url: str) -> JobRecord:
        """
        Fetch ``url`` and build a JobRecord from it.

        Raises:
            FetchError: Network failure or non-2xx status
            ParseError: Body is not parseable HTML
            ExtractionError: A field selector could not be evaluated
        """
        response = self.fetcher.fetch(url)
        retrieved_at = self.clock()
        document = parse_html(url, response)

        try:
            return JobRecord(
                title=extract(document, self.selectors.title),
                description=extract(document, self.selectors.description),
                job_type=extract(document, self.selectors.job_type),
                employer=extract(document, self.selectors.employer),
                location=extract(document, self.selectors.location),
                retrieved_at=retrieved_at,
                url=url,
            )
        except CrawlError as e:
            e.url = e.url or url
            raise

    def parse(self, url: str) -> DetailOutcome:
        try:
            record = self.parse_detail(url)
        except CrawlError as e:
            logger.debug(f"Detail parse failed for {url}: {e}")
            return DetailOutcome.failure(url, e)
        return DetailOutcome.success(url, record)
