"""
Job posting crawl domain.

Handles listing page discovery and detail page extraction for a classifieds site.
"""

from jobharvest.contexts.scraping.errors import (
    CrawlError,
    FetchError,
    ParseError,
    ExtractionError,
    CrawlNotPermitted,
)
from jobharvest.contexts.scraping.extraction import extract, extract_links
from jobharvest.contexts.scraping.records import JobRecord, DetailOutcome, RESULT_COLUMNS
from jobharvest.contexts.scraping.requests import (
    PageFetcher,
    html_request,
    classify_http_outcome,
)
from jobharvest.contexts.scraping.pacing import PacingPolicy, FixedDelay, NoDelay
from jobharvest.contexts.scraping.detail import DetailParser, DetailSelectors
from jobharvest.contexts.scraping.listing import ListingCrawler
from jobharvest.contexts.scraping.permissions import CrawlPermission, check_crawl_permission
from jobharvest.contexts.scraping.config import load_crawl_config, ConfigError
from jobharvest.contexts.scraping.orchestration import (
    PipelineDriver,
    TqdmProgress,
    run_crawl,
)

__all__ = [
    # Errors
    "CrawlError",
    "FetchError",
    "ParseError",
    "ExtractionError",
    "CrawlNotPermitted",
    # Extraction and records
    "extract",
    "extract_links",
    "JobRecord",
    "DetailOutcome",
    "RESULT_COLUMNS",
    # HTTP
    "PageFetcher",
    "html_request",
    "classify_http_outcome",
    # Pacing
    "PacingPolicy",
    "FixedDelay",
    "NoDelay",
    # Crawl stages
    "DetailParser",
    "DetailSelectors",
    "ListingCrawler",
    "PipelineDriver",
    "run_crawl",
    "TqdmProgress",
    # Peripheral
    "CrawlPermission",
    "check_crawl_permission",
    "load_crawl_config",
    "ConfigError",
]
