#!/usr/bin/env python3
"""
Static page capability backed by requests and BeautifulSoup.

Serves server-rendered markup only: no scripts run and scrolling does
nothing, so lazily loaded regions stay empty. Pages can also be served
from an in-memory map, which is how the test-suite drives the pipeline.
"""

import copy
import logging
from typing import Optional, Dict, List

import requests
from bs4 import BeautifulSoup, Tag

from .base import PageCapability, ElementSnapshot
from ..exceptions import NavigationError
from ..text import normalize_block_text

logger = logging.getLogger(__name__)

NON_CONTENT_TAGS = ["script", "style", "noscript"]


def snapshot_tag(tag: Tag) -> ElementSnapshot:
    """Copy the parts of a BeautifulSoup tag the pipeline reads."""
    attrs = {}
    for name, value in tag.attrs.items():
        attrs[name] = " ".join(value) if isinstance(value, list) else str(value)

    clone = copy.copy(tag)
    for node in clone(NON_CONTENT_TAGS):
        node.decompose()

    raw_text = tag.string if tag.string is not None else tag.get_text()

    sibling = tag.find_next_sibling()
    sibling_text = sibling.get_text(" ", strip=True) if sibling is not None else None

    return ElementSnapshot(
        tag=tag.name,
        text=normalize_block_text(clone.get_text("\n")),
        attrs=attrs,
        next_sibling_text=sibling_text or None,
        raw_text=str(raw_text).strip(),
    )


class HtmlPage(PageCapability):
    """Page capability over plain HTML documents."""

    def __init__(self,
                 pages: Optional[Dict[str, str]] = None,
                 timeout: float = 60.0,
                 user_agent: str = "Mozilla/5.0 (compatible; EntertainmentDigest/1.0)",
                 session: Optional[requests.Session] = None):
        """
        Initialize static page.

        Args:
            pages: Optional url -> html map; when given, nothing is fetched
                   and unknown URLs fail navigation
            timeout: Request timeout in seconds
            user_agent: User-Agent string for requests
            session: Preconfigured requests session
        """
        self.pages = pages
        self.timeout = timeout
        self.history: List[str] = []
        self._soup: Optional[BeautifulSoup] = None
        self._url: Optional[str] = None

        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "zh-TW,zh;q=0.9,en;q=0.8",
        })

    @property
    def current_url(self) -> Optional[str]:
        return self._url

    def _fetch(self, url: str) -> str:
        if self.pages is not None:
            if url not in self.pages:
                raise NavigationError(url, KeyError(url))
            return self.pages[url]

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise NavigationError(url, e, timeout_seconds=self.timeout) from e
        except requests.exceptions.RequestException as e:
            raise NavigationError(url, e) from e

        # requests falls back to ISO-8859-1 for text/html without a charset
        if 'charset' not in response.headers.get('Content-Type', '').lower():
            response.encoding = response.apparent_encoding
        return response.text

    def navigate(self, url: str) -> None:
        self.history.append(url)
        self._soup = None
        self._url = None

        html = self._fetch(url)
        self._soup = BeautifulSoup(html, 'html.parser')
        self._url = url
        logger.debug(f"Loaded {url} ({len(html)} chars)")

    def select(self, selector: str) -> List[ElementSnapshot]:
        if self._soup is None:
            return []
        return [snapshot_tag(tag) for tag in self._soup.select(selector)]

    def select_one(self, selector: str) -> Optional[ElementSnapshot]:
        if self._soup is None:
            return None
        tag = self._soup.select_one(selector)
        return snapshot_tag(tag) if tag is not None else None

    def scroll_to_bottom(self, settle_ms: int) -> None:
        logger.debug("Static page: scroll request ignored")

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> 'HtmlPage':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
