"""
Crawl orchestration: listing pages -> detail pages -> Result Table.

Provides functionality to:
- Parse a list of detail addresses with per-address failure isolation
- Run a full crawl from config with logging to timestamped files
- Export the Result Table and return a structured run summary
"""

import os
import time
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional

import pandas as pd
from dotenv import load_dotenv
from loguru import logger
from omegaconf.dictconfig import DictConfig
from tqdm import tqdm

from jobharvest.contexts.export import (
    build_result_table,
    log_skipped_listing_event,
    write_result_table,
)
from jobharvest.contexts.scraping.detail import DetailParser, DetailSelectors, utc_now
from jobharvest.contexts.scraping.errors import CrawlNotPermitted
from jobharvest.contexts.scraping.listing import ListingCrawler, build_page_url
from jobharvest.contexts.scraping.pacing import FixedDelay, NoDelay, PacingPolicy
from jobharvest.contexts.scraping.permissions import check_crawl_permission
from jobharvest.contexts.scraping.records import DetailOutcome
from jobharvest.contexts.scraping.requests import PageFetcher

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

ProgressObserver = Callable[[int, int], None]


def setup_logger(log_dir: Path = LOGS_PATH) -> Path:
    """
    Configure loguru to write to a timestamped log file.

    Args:
        log_dir: Directory for log files (default: LOGS_PATH from environment)

    Returns:
        Path to the created log file
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"crawl_{timestamp}.txt"

    logger.remove()  # Remove default stderr handler
    logger.add(log_file, format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}")
    logger.add(
        lambda msg: tqdm.write(msg, end=""),  # Console, without breaking the progress bar
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
        level="INFO",
    )

    return log_file


class TqdmProgress:
    """Progress observer drawing a tqdm bar over the detail pages."""

    def __init__(self, desc: str = "Detail pages"):
        self.desc = desc
        self._bar = None

    def __call__(self, current: int, total: int) -> None:
        if self._bar is None:
            self._bar = tqdm(total=total, desc=self.desc, unit="page")
        self._bar.update(current - self._bar.n)
        if current >= total:
            self.close()

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None


def no_progress(current: int, total: int) -> None:
    pass


class PipelineDriver:
    """
    Runs the Detail Parser over an Address List.

    Addresses are processed one at a time in order. A failing address yields
    a failed DetailOutcome and contributes no row; the run carries on.
    """

    def __init__(
        self,
        detail_parser: DetailParser,
        pacing: PacingPolicy = None,
        progress: ProgressObserver = None,
        event_log_dir: Optional[Path] = None,
    ):
        self.detail_parser = detail_parser
        self.pacing = pacing or NoDelay()
        self.progress = progress or no_progress
        self.event_log_dir = event_log_dir

    def _record_failure(self, outcome: DetailOutcome) -> None:
        detail = f", {outcome.classification}" if outcome.classification else ""
        logger.warning(f"Skipping {outcome.url} ({outcome.error_kind} failure{detail}): {outcome.error}")
        if self.event_log_dir is not None:
            log_skipped_listing_event(
                outcome.url,
                kind=outcome.error_kind,
                reason=outcome.error,
                log_dir=self.event_log_dir,
                status_code=outcome.status_code,
                classification=outcome.classification,
            )

    def run_outcomes(self, addresses: list) -> list:
        """Parse every address and return one DetailOutcome per address, in order."""
        total = len(addresses)
        outcomes = []

        for index, url in enumerate(addresses, start=1):
            outcome = self.detail_parser.parse(url)

            if not outcome.ok:
                self._record_failure(outcome)

            outcomes.append(outcome)
            self.progress(index, total)

            if index < total:
                self.pacing.wait()

        return outcomes

    def run(self, addresses: list, include_url: bool = False) -> pd.DataFrame:
        """
        Parse every address and aggregate the successes into the Result Table.

        Returns:
            DataFrame with one row per successfully parsed address, in crawl order
        """
        outcomes = self.run_outcomes(addresses)
        return build_result_table(
            (outcome.record for outcome in outcomes if outcome.ok), include_url=include_url
        )


def _resolve_pacing(config: DictConfig, crawl_delay: Optional[float], sleep=time.sleep) -> FixedDelay:
    delay = float(config.request_delay)
    if crawl_delay is not None and crawl_delay > delay:
        logger.info(f"robots.txt asks for a {crawl_delay}s crawl delay; using it instead of {delay}s")
        delay = crawl_delay
    return FixedDelay(delay, sleep=sleep)


def run_crawl(
    config: DictConfig,
    session=None,
    pacing: PacingPolicy = None,
    progress: ProgressObserver = None,
    log_dir: Path = LOGS_PATH,
    clock=utc_now,
    configure_logging: bool = True,
) -> dict[str, Any]:
    """
    Run a full crawl and write the Result Table to ``config.output_path``.

    Args:
        config: Validated crawl config (see load_crawl_config)
        session: requests.Session to use (default: a new session, closed afterwards)
        pacing: Pacing policy (default: FixedDelay from config, raised to robots Crawl-delay)
        progress: Observer called with (current, total) after each detail page
        log_dir: Directory for log files and the skipped-listing event log
        clock: Timestamp source for retrievedAt
        configure_logging: Set up loguru file and console sinks

    Returns:
        Dict with keys:
            - status: "success" or "failed"
            - pages_crawled: Listing pages fetched
            - addresses_found: Detail addresses collected
            - rows_written: Rows in the exported table
            - failed_addresses: Detail addresses skipped after a failure
            - output_path: File written (None if the run failed)
            - time_elapsed: Time in seconds
            - error: Error message (if failed)
            - traceback: Full traceback (if failed)
    """
    start_time = time.time()
    result = {
        "status": "failed",
        "pages_crawled": 0,
        "addresses_found": 0,
        "rows_written": 0,
        "failed_addresses": [],
        "output_path": None,
        "time_elapsed": 0.0,
        "error": None,
        "traceback": None,
    }

    if configure_logging:
        log_file = setup_logger(log_dir)
        logger.info(f"Logging to: {log_file}")

    owns_session = session is None
    fetcher = None
    crawler = None

    try:
        fetcher = PageFetcher(
            session=session,
            timeout=float(config.request_timeout),
            user_agent=config.user_agent,
        )
        first_page_url = build_page_url(config.listing_template, 1)
        crawl_delay = None

        if config.respect_robots:
            permission = check_crawl_permission(
                first_page_url,
                user_agent=config.user_agent or "*",
                session=fetcher.session,
                timeout=float(config.request_timeout),
            )
            if not permission.allowed:
                raise CrawlNotPermitted(
                    f"{permission.robots_url} disallows crawling {first_page_url}", url=first_page_url
                )
            crawl_delay = permission.crawl_delay

        pacing = pacing or _resolve_pacing(config, crawl_delay)
        logger.info(
            f"Starting crawl of {config.page_count} listing page(s) from {config.origin} (pacing={pacing!r})"
        )

        crawler = ListingCrawler(
            fetcher=fetcher,
            origin=config.origin,
            link_selector=config.selectors.listing_link,
            pacing=pacing,
        )
        addresses = crawler.crawl_listings(config.listing_template, int(config.page_count))
        result["pages_crawled"] = crawler.pages_crawled
        result["addresses_found"] = len(addresses)

        if addresses:
            pacing.wait()

        driver = PipelineDriver(
            detail_parser=DetailParser(
                fetcher=fetcher,
                selectors=DetailSelectors.from_config(config.selectors),
                clock=clock,
            ),
            pacing=pacing,
            progress=progress if progress is not None else TqdmProgress(),
            event_log_dir=log_dir,
        )
        outcomes = driver.run_outcomes(addresses)
        failed = [outcome.url for outcome in outcomes if not outcome.ok]
        df = build_result_table(
            (outcome.record for outcome in outcomes if outcome.ok),
            include_url=bool(config.get("include_url", False)),
        )

        output_path = write_result_table(df, config.output_path)
        elapsed = time.time() - start_time

        result.update(
            {
                "status": "success",
                "rows_written": len(df),
                "failed_addresses": failed,
                "output_path": output_path,
                "time_elapsed": elapsed,
            }
        )

        logger.success(
            f"Crawl complete: {len(df)}/{len(addresses)} job posts written to {output_path} "
            f"({len(failed)} skipped, {elapsed:.1f}s)"
        )

    except Exception as e:
        elapsed = time.time() - start_time
        error_traceback = traceback.format_exc()

        result.update(
            {
                "status": "failed",
                "pages_crawled": crawler.pages_crawled if crawler is not None else 0,
                "time_elapsed": elapsed,
                "error": str(e),
                "traceback": error_traceback,
            }
        )

        logger.error(f"Crawl aborted, no output written: {e} ({elapsed:.1f}s)")
        logger.debug(f"Traceback:\n{error_traceback}")

    finally:
        if owns_session and fetcher is not None:
            fetcher.close()

    return result
