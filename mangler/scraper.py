"""Fetch a web page and pull candidate words from its visible body text."""

from __future__ import annotations

from typing import List, Optional

import requests
from bs4 import BeautifulSoup

from mangler.config import SCRAPE_CONFIG
from mangler.logging import get_logger

__all__ = ["download_page", "extract_words", "body_text"]

logger = get_logger(__name__)

# Elements whose text never renders on the page
_INVISIBLE_TAGS = ("script", "style", "noscript", "template")


def download_page(url: str, timeout: Optional[float] = None) -> str:
    """Return the decoded body of ``url``.

    Raises:
        requests.HTTPError: On a non-2xx response.
        requests.RequestException: On connection or timeout failures.
    """
    effective_timeout = SCRAPE_CONFIG.timeout if timeout is None else timeout
    logger.debug(f"GET {url} (timeout={effective_timeout}s)")
    response = requests.get(
        url,
        timeout=effective_timeout,
        headers={"User-Agent": SCRAPE_CONFIG.user_agent},
    )
    response.raise_for_status()
    logger.debug(f"Fetched {len(response.text)} characters from {url}")
    return response.text


def body_text(html: str) -> str:
    """Return the text inside ``<body>`` with script and style content removed.

    Falls back to the whole document when there is no body element.
    """
    soup = BeautifulSoup(html, "html.parser")
    for element in soup.find_all(_INVISIBLE_TAGS):
        element.decompose()
    root = soup.body if soup.body is not None else soup
    return root.get_text(separator=" ")


def extract_words(html: str) -> List[str]:
    """Split the visible body text of ``html`` into whitespace-separated words.

    Words are returned in page order with duplicates kept; seed sources decide
    whether to deduplicate.
    """
    return body_text(html).split()
