"""Shared fixtures: a fake HTTP session, HTML builders and a recording pacer.

HTTP is faked at the session boundary. ``FakeSession.get`` hands back real
``requests.Response`` objects so ``raise_for_status`` and header handling
behave exactly as they do against a live server.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
import requests
from loguru import logger

from jobharvest.contexts.scraping.pacing import PacingPolicy

ORIGIN = "https://classifieds.example.com"
LISTING_TEMPLATE = f"{ORIGIN}/jobs?page={{page}}"
PROJECT_ROOT = Path(__file__).resolve().parent.parent
BASE_CONFIG = PROJECT_ROOT / "config" / "crawl.yaml"


# ---------------------------------------------------------------------------
# HTTP fakes
# ---------------------------------------------------------------------------

def make_response(url: str, status: int = 200, body: str = "",
                  content_type: str = "text/html; charset=utf-8") -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response._content = body.encode("utf-8")
    response.url = url
    response.encoding = "utf-8"
    if content_type:
        response.headers["Content-Type"] = content_type
    return response


class FakeSession:
    """Stands in for ``requests.Session``; serves canned responses by URL."""

    def __init__(self, routes: dict | None = None):
        self.routes = dict(routes or {})
        self.headers: dict = {}
        self.requested: list[str] = []
        self.closed = False

    def add(self, url: str, body: str = "", status: int = 200, **kwargs) -> None:
        self.routes[url] = make_response(url, status=status, body=body, **kwargs)

    def fail(self, url: str, exc: Exception | None = None) -> None:
        self.routes[url] = exc or requests.ConnectionError(f"Connection refused: {url}")

    def get(self, url, timeout=None, allow_redirects=True, **kwargs):
        self.requested.append(url)
        route = self.routes.get(url)
        if route is None:
            if url.endswith("/robots.txt"):
                return make_response(url, status=404, body="Not Found", content_type="text/plain")
            raise requests.ConnectionError(f"No route for {url}")
        if isinstance(route, Exception):
            raise route
        return route

    def close(self) -> None:
        self.closed = True


class RecordingPacing(PacingPolicy):
    """Zero-delay pacing that remembers when it was asked to wait."""

    def __init__(self, session: FakeSession | None = None):
        super().__init__(sleep=lambda seconds: None)
        self.session = session
        self.waits: list[int] = []

    def delay(self) -> float:
        return 0.0

    def wait(self) -> None:
        # Number of requests made before this pause
        self.waits.append(len(self.session.requested) if self.session else len(self.waits))


class TickingClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        now = self.current
        self.current += timedelta(seconds=1)
        return now


# ---------------------------------------------------------------------------
# HTML builders
# ---------------------------------------------------------------------------

def listing_html(links: list[str]) -> str:
    items = "\n".join(
        f'<li class="listing-item"><h2 class="listing-title"><a href="{link}">Post {i}</a></h2>'
        f'<span class="price">n/a</span></li>'
        for i, link in enumerate(links)
    )
    return f"<html><body><ul class=\"listings\">{items}</ul></body></html>"


def detail_html(title="Line Cook", description="Prep and cook.", job_type="Full-time",
                employer="Harbour Bistro", location="Halifax") -> str:
    def field(css_class, value):
        return f'<span class="{css_class}">{value}</span>' if value is not None else ""

    title_html = f'<h1 class="post-title">{title}</h1>' if title is not None else ""
    description_html = (
        f'<div class="post-description">{description}</div>' if description is not None else ""
    )
    return (
        "<html><body>"
        f"{title_html}"
        '<div class="job-attributes">'
        f"{field('job-type', job_type)}{field('employer', employer)}{field('location', location)}"
        "</div>"
        f"{description_html}"
        "</body></html>"
    )


# ---------------------------------------------------------------------------
# Config builders
# ---------------------------------------------------------------------------

_MINIMAL_CONFIG = f"""\
origin: {ORIGIN}
listing_template: {LISTING_TEMPLATE}
page_count: 1
request_delay: 0.0
output_path: jobs.csv
selectors:
  listing_link: .listing-item .listing-title a
  title: h1.post-title
  description: .post-description
  job_type: .job-attributes .job-type
  employer: .job-attributes .employer
  location: .job-attributes .location
"""


def write_minimal_config(directory: Path, name: str = "minimal.yaml") -> Path:
    """Write a crawl config holding only the required settings."""
    path = Path(directory) / name
    path.write_text(_MINIMAL_CONFIG, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def pacing(session) -> RecordingPacing:
    return RecordingPacing(session)


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture(autouse=True)
def _restore_logger():
    """run_crawl reconfigures loguru sinks; put the default back afterwards."""
    yield
    logger.remove()
    logger.add(lambda msg: None, level="DEBUG")
