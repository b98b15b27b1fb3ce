"""
Selector-driven field extraction from a parsed page.

A field is the text of every element matching one CSS selector, joined in
document order and cleaned into a single line. ``None`` means the selector
matched nothing; an empty string means it matched elements with no text.
"""

from typing import Optional

from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from jobharvest.contexts.scraping.errors import ExtractionError
from jobharvest.utils.text_processing import clean_text_fragments


def select_elements(document: BeautifulSoup, selector: str) -> list:
    """
    Run a CSS selector against a document.

    Raises:
        ExtractionError: If the selector is malformed or cannot be evaluated
    """
    try:
        return document.select(selector)
    except SelectorSyntaxError as e:
        raise ExtractionError(f"Invalid selector '{selector}': {e}", selector=selector) from e
    except (TypeError, ValueError, NotImplementedError) as e:
        raise ExtractionError(f"Could not evaluate selector '{selector}': {e}", selector=selector) from e


def extract(document: BeautifulSoup, selector: str) -> Optional[str]:
    """
    Extract the cleaned text of all elements matching ``selector``.

    Args:
        document: Parsed page
        selector: CSS selector

    Returns:
        Single-spaced text of every match in document order, or None when
        nothing matched

    Raises:
        ExtractionError: If the selector cannot be evaluated
    """
    elements = select_elements(document, selector)
    if not elements:
        return None
    return clean_text_fragments(element.get_text(" ") for element in elements)


def extract_links(document: BeautifulSoup, selector: str) -> list[str]:
    """Return the ``href`` of every matching element that has one, in document order."""
    links = []
    for element in select_elements(document, selector):
        href = element.get("href")
        if href is None:
            # Selector may target a wrapper around the anchor
            anchor = element.find("a", href=True)
            href = anchor.get("href") if anchor is not None else None
        if href and href.strip():
            links.append(href.strip())
    return links
