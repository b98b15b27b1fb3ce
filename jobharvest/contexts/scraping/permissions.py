"""
robots.txt consultation before a crawl starts.

The check runs once per run against the first listing page. Individual
requests are not re-checked.
"""

from dataclasses import dataclass
from typing import Optional
from urllib import robotparser
from urllib.parse import urlparse

import requests
from loguru import logger

ROBOTS_TIMEOUT = 10.0
ACCESS_DENIED_CODES = (401, 403)


@dataclass(frozen=True)
class CrawlPermission:
    allowed: bool
    crawl_delay: Optional[float] = None
    robots_url: Optional[str] = None


def robots_url_for(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}/robots.txt"


def check_crawl_permission(url, user_agent="*", session=None, timeout=ROBOTS_TIMEOUT) -> CrawlPermission:
    """
    Check the site's robots.txt for ``url``.

    A 401 or 403 on robots.txt means the whole site is off limits. Any other
    error status, an empty file, or an unreachable server (including 5xx) is
    read as "everything allowed".

    Args:
        url: Address we intend to crawl
        user_agent: Agent name to match robots rules against
        session: requests.Session to reuse (default: module-level requests)
        timeout: Seconds to wait for robots.txt

    Returns:
        CrawlPermission with the verdict and any declared Crawl-delay
    """
    robots_url = robots_url_for(url)
    client = session if session is not None else requests
    parser = robotparser.RobotFileParser()

    try:
        response = client.get(robots_url, timeout=timeout)
        if response.status_code in ACCESS_DENIED_CODES:
            parser.disallow_all = True
        elif response.status_code >= 400 or not response.text:
            parser.parse([])
        else:
            parser.parse(response.text.splitlines())
    except requests.RequestException as e:
        logger.warning(f"Could not read {robots_url} ({e}); assuming crawling is allowed")
        parser.parse([])

    allowed = parser.can_fetch(user_agent, url)
    delay = parser.crawl_delay(user_agent)

    return CrawlPermission(
        allowed=allowed,
        crawl_delay=float(delay) if delay is not None else None,
        robots_url=robots_url,
    )
