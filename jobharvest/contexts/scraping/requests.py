"""HTTP helpers shared by the listing crawler and the detail parser."""

from typing import Optional

import requests
from bs4 import BeautifulSoup

from jobharvest.contexts.scraping.errors import FetchError, ParseError

PermanentCodeSet = (401, 403, 404, 410)

PermanentErrorTypes = (requests.exceptions.InvalidURL, requests.exceptions.TooManyRedirects)

LINK_GOOD = "success"
LINK_BAD = "failure"
LINK_UNKNOWN = "transient failure"

DEFAULT_USER_AGENT = "jobharvest/0.1 (+https://github.com/jobharvest/jobharvest)"
HTML_PARSER = "html.parser"


def classify_http_outcome(
    url: str,
    exception: Optional[requests.RequestException] = None,
    response: Optional[requests.Response] = None,
) -> str:
    if response is None and exception is not None:
        response = getattr(exception, "response", None)

    if response is not None: # We received a response object.
        status = response.status_code

        if 200 <= status < 300:
            return LINK_GOOD
        elif status in PermanentCodeSet:
            return LINK_BAD
        else:
            return LINK_UNKNOWN

    elif exception is not None: # No response, only an exception.
        if isinstance(exception, PermanentErrorTypes):
            return LINK_BAD
        else:
            return LINK_UNKNOWN
    else:
        return LINK_UNKNOWN


def html_request(url, session=None, timeout=30.0, **kwargs):
    """
    Make a single HTTP GET request. There is no retry: one attempt per address.

    Args:
        url (str): The URL to request
        session (requests.Session): Session to send the request through (default: module-level requests)
        timeout (float): Seconds to wait for the server (default: 30.0)
        **kwargs: Any additional arguments to pass to get()

    Returns:
        requests.Response: The response object, guaranteed to have a 2xx status

    Raises:
        FetchError: On any network error or non-success status
    """
    client = session if session is not None else requests

    try:
        response = client.get(url, timeout=timeout, allow_redirects=True, **kwargs)
        response.raise_for_status()
    except requests.RequestException as e:
        response = getattr(e, "response", None)
        raise FetchError(
            f"GET {url} failed: {e}",
            url=url,
            status_code=response.status_code if response is not None else None,
            classification=classify_http_outcome(url, exception=e),
        ) from e

    return response


def parse_html(url: str, response: requests.Response) -> BeautifulSoup:
    """
    Turn a fetched response into a Page Document.

    Raises:
        ParseError: If the body is not HTML or cannot be parsed
    """
    content_type = response.headers.get("Content-Type", "")
    if content_type and "html" not in content_type.lower():
        raise ParseError(f"Expected HTML from {url}, got '{content_type}'", url=url)

    if not response.content:
        raise ParseError(f"Empty document returned by {url}", url=url)

    try:
        return BeautifulSoup(response.text, HTML_PARSER)
    except Exception as e:
        raise ParseError(f"Could not parse HTML from {url}: {e}", url=url) from e


class PageFetcher:
    """
    Fetches one page per call through a shared session.

    The session carries the User-Agent for the whole run; there are no
    other custom headers and redirects are always followed.
    """

    def __init__(self, session=None, timeout=30.0, user_agent=DEFAULT_USER_AGENT):
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        if user_agent:
            self.session.headers["User-Agent"] = user_agent

    def fetch(self, url):
        return html_request(url, session=self.session, timeout=self.timeout)

    def fetch_document(self, url) -> BeautifulSoup:
        """Fetch ``url`` and parse it. Raises FetchError or ParseError."""
        response = self.fetch(url)
        return parse_html(url, response)

    def close(self):
        self.session.close()
