#!/usr/bin/env python3
"""
Playwright-backed page capability.

One headless Chromium, one context, one page for the whole run. The session
is a context manager so the browser is closed on every exit path.
"""

import logging
from typing import Optional, List, Dict, Any

from playwright.sync_api import sync_playwright
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .base import PageCapability, ElementSnapshot
from ..exceptions import BrowserLaunchError, NavigationError
from ..text import normalize_block_text

logger = logging.getLogger(__name__)

# Runs in the page; returns plain data so no element handles outlive a call.
SNAPSHOT_ELEMENT_JS = """
(el) => {
  const clone = el.cloneNode(true);
  clone.querySelectorAll('script, style, noscript').forEach((node) => node.remove());
  const attrs = {};
  for (const attr of el.attributes) {
    attrs[attr.name] = attr.value;
  }
  const sibling = el.nextElementSibling;
  return {
    tag: el.tagName.toLowerCase(),
    text: clone.textContent || '',
    attrs: attrs,
    nextSiblingText: sibling ? (sibling.textContent || '').trim() : null,
    rawText: el.textContent || '',
  };
}
"""

SNAPSHOT_ALL_JS = f"(elements) => elements.map({SNAPSHOT_ELEMENT_JS.strip()})"

SCROLL_TO_BOTTOM_JS = "window.scrollTo(0, document.body.scrollHeight)"


def _to_snapshot(data: Dict[str, Any]) -> ElementSnapshot:
    return ElementSnapshot(
        tag=data.get('tag', ''),
        text=normalize_block_text(data.get('text') or ''),
        attrs=dict(data.get('attrs') or {}),
        next_sibling_text=data.get('nextSiblingText') or None,
        raw_text=(data.get('rawText') or '').strip(),
    )


class PlaywrightPage(PageCapability):
    """Page capability over a live Playwright page."""

    def __init__(self, page, timeout_seconds: float = 60.0):
        self._page = page
        self.timeout_seconds = timeout_seconds
        self._url: Optional[str] = None

    @property
    def current_url(self) -> Optional[str]:
        return self._url

    def navigate(self, url: str) -> None:
        self._url = None
        try:
            response = self._page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self.timeout_seconds * 1000,
            )
        except PlaywrightTimeoutError as e:
            raise NavigationError(url, e, timeout_seconds=self.timeout_seconds) from e
        except PlaywrightError as e:
            raise NavigationError(url, e) from e

        if response is not None and response.status >= 400:
            raise NavigationError(url, RuntimeError(f"HTTP {response.status}"))

        self._url = url
        logger.debug(f"Loaded {url}")

    def select(self, selector: str) -> List[ElementSnapshot]:
        try:
            results = self._page.eval_on_selector_all(selector, SNAPSHOT_ALL_JS)
        except PlaywrightError as e:
            logger.debug(f"Query '{selector}' failed on {self._url}: {e}")
            return []
        return [_to_snapshot(item) for item in results or []]

    def select_one(self, selector: str) -> Optional[ElementSnapshot]:
        try:
            data = self._page.eval_on_selector(selector, SNAPSHOT_ELEMENT_JS)
        except PlaywrightError as e:
            logger.debug(f"Query '{selector}' failed on {self._url}: {e}")
            return None
        if data is None:
            return None
        return _to_snapshot(data)

    def scroll_to_bottom(self, settle_ms: int) -> None:
        try:
            self._page.evaluate(SCROLL_TO_BOTTOM_JS)
            self._page.wait_for_timeout(settle_ms)
        except PlaywrightError as e:
            logger.warning(f"Scroll failed on {self._url}: {e}")


class PlaywrightSession:
    """
    Scoped browser session.

    Usage:
        with PlaywrightSession(headless=True) as page:
            page.navigate(url)
    """

    def __init__(self, headless: bool = True, timeout_seconds: float = 60.0,
                 user_agent: Optional[str] = None, locale: str = "zh-TW"):
        self.headless = headless
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent
        self.locale = locale
        self._playwright = None
        self._browser = None

    def __enter__(self) -> PlaywrightPage:
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(headless=self.headless)
            context_kwargs = {'locale': self.locale}
            if self.user_agent:
                context_kwargs['user_agent'] = self.user_agent
            context = self._browser.new_context(**context_kwargs)
            page = context.new_page()
        except Exception as e:
            self.close()
            raise BrowserLaunchError("playwright", e) from e

        logger.info(f"Browser session started (headless={self.headless})")
        return PlaywrightPage(page, timeout_seconds=self.timeout_seconds)

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Close browser and driver; safe to call more than once."""
        if self._browser is not None:
            try:
                self._browser.close()
            except PlaywrightError as e:
                logger.warning(f"Error closing browser: {e}")
            self._browser = None
        if self._playwright is not None:
            try:
                self._playwright.stop()
            except PlaywrightError as e:
                logger.warning(f"Error stopping Playwright: {e}")
            self._playwright = None
            logger.info("Browser session closed")
