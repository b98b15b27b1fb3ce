"""
Listing page crawl: walks numbered listing pages and collects detail links.

Unlike detail pages, a failing listing page is not skipped. Any CrawlError
here aborts the crawl before a single detail page is requested.
"""

from urllib.parse import urljoin

from loguru import logger

from jobharvest.contexts.scraping.extraction import extract_links
from jobharvest.contexts.scraping.pacing import PacingPolicy, NoDelay
from jobharvest.contexts.scraping.requests import PageFetcher

PAGE_PLACEHOLDER = "{page}"


def build_page_url(base_address_template: str, page: int) -> str:
    """Substitute a 1-based page index into the listing template."""
    if PAGE_PLACEHOLDER not in base_address_template:
        raise ValueError(
            f"Listing template must contain '{PAGE_PLACEHOLDER}': {base_address_template}"
        )
    return base_address_template.replace(PAGE_PLACEHOLDER, str(page))


class ListingCrawler:
    """
    Collects detail page addresses from paginated listing pages.

    Pages are fetched one at a time in increasing order, with a pacing pause
    between consecutive pages.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        origin: str,
        link_selector: str,
        pacing: PacingPolicy = None,
    ):
        self.fetcher = fetcher
        self.origin = origin
        self.link_selector = link_selector
        self.pacing = pacing or NoDelay()
        self.pages_crawled = 0

    def scrape_urls_by_listing_page(self, page_url: str) -> list:
        """Fetch one listing page and return its detail links as absolute URLs."""
        document = self.fetcher.fetch_document(page_url)
        links = extract_links(document, self.link_selector)
        return [urljoin(self.origin, link) for link in links]

    def crawl_listings(self, base_address_template: str, page_count: int) -> list:
        """
        Crawl listing pages 1..page_count and return every detail address found.

        Args:
            base_address_template: Listing URL containing a ``{page}`` placeholder
            page_count: Number of listing pages to visit (>= 1)

        Returns:
            Detail page URLs in page order, then in-page document order.
            Duplicates are kept.

        Raises:
            ValueError: If page_count < 1 or the template has no placeholder
            CrawlError: If any listing page fails to fetch or parse
        """
        if page_count < 1:
            raise ValueError(f"page_count must be at least 1, got {page_count}")

        addresses = []
        self.pages_crawled = 0

        for page in range(1, page_count + 1):
            page_url = build_page_url(base_address_template, page)
            page_addresses = self.scrape_urls_by_listing_page(page_url)
            addresses += page_addresses
            self.pages_crawled = page

            logger.info(f"{len(page_addresses):-3} jobs on listing page {page:-3}")

            if page < page_count:
                self.pacing.wait()

        logger.info(f"Listing crawl complete: {len(addresses)} addresses from {page_count} pages")
        return addresses
