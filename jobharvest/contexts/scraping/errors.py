"""
Error types raised while crawling.

The Listing Crawler lets every CrawlError propagate. The Detail Parser
raises them too, but the Pipeline Driver only ever sees them as failed
DetailOutcome values.
"""

from typing import Optional

FETCH_FAILURE = "fetch"
PARSE_FAILURE = "parse"
EXTRACTION_FAILURE = "extraction"


class CrawlError(Exception):
    """Base class for failures tied to a single address."""

    kind = "crawl"

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class FetchError(CrawlError):
    """Network-level error or non-2xx status for an address."""

    kind = FETCH_FAILURE

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        classification: Optional[str] = None,
    ):
        super().__init__(message, url=url)
        self.status_code = status_code
        self.classification = classification


class ParseError(CrawlError):
    """Fetched body could not be turned into an HTML document."""

    kind = PARSE_FAILURE


class ExtractionError(CrawlError):
    """A selector could not be evaluated (as opposed to matching nothing)."""

    kind = EXTRACTION_FAILURE

    def __init__(self, message: str, selector: str, url: Optional[str] = None):
        super().__init__(message, url=url)
        self.selector = selector


class CrawlNotPermitted(CrawlError):
    """The site's robots policy does not allow fetching the listing pages."""

    kind = "permission"
