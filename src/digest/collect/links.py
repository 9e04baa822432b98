#!/usr/bin/env python3
"""
Link collection from the listing page.

Reads hrefs from each configured region, resolves relative paths against
the site origin, keeps only article detail pages on the news host and
collapses duplicates across regions.
"""

import logging
from typing import List, Optional, Iterable
from urllib.parse import urljoin, urlsplit, urlunsplit

from ..browser.base import PageCapability
from ..config import Config, LinkRegion

logger = logging.getLogger(__name__)

IGNORED_SCHEMES = ('javascript:', 'mailto:', 'tel:', 'data:')


def normalize_href(href: Optional[str], origin: str) -> Optional[str]:
    """
    Turn a raw href into an absolute http(s) URL without fragment.

    Returns None for hrefs that cannot point at a page.
    """
    if not href:
        return None
    href = href.strip()
    if not href or href.startswith('#') or href.lower().startswith(IGNORED_SCHEMES):
        return None

    if href.startswith('//'):
        href = f"{urlsplit(origin).scheme}:{href}"
    elif not href.startswith(('http://', 'https://')):
        href = urljoin(origin.rstrip('/') + '/', href)

    parts = urlsplit(href)
    if parts.scheme not in ('http', 'https') or not parts.netloc:
        return None
    return urlunsplit((parts.scheme, parts.netloc, parts.path, parts.query, ''))


def is_article_link(url: str, news_host: str, path_marker: str) -> bool:
    """Check host and article path marker of an absolute URL."""
    parts = urlsplit(url)
    return parts.netloc.lower() == news_host.lower() and parts.path.endswith(path_marker)


def dedupe(urls: Iterable[str]) -> List[str]:
    """Drop repeated URLs, keeping first appearance."""
    return list(dict.fromkeys(urls))


class LinkCollector:
    """Gathers candidate article links from named listing regions."""

    def __init__(self,
                 origin: str,
                 news_host: str,
                 regions: List[LinkRegion],
                 path_marker: str = ".html",
                 scroll_rounds: int = 2,
                 scroll_settle_ms: int = 1500):
        self.origin = origin
        self.news_host = news_host
        self.regions = regions
        self.path_marker = path_marker
        self.scroll_rounds = scroll_rounds
        self.scroll_settle_ms = scroll_settle_ms

    @classmethod
    def from_config(cls, config: Config) -> 'LinkCollector':
        return cls(
            origin=config.site.origin,
            news_host=config.site.news_host,
            regions=config.site.link_regions,
            path_marker=config.site.article_path_marker,
            scroll_rounds=config.fetch.scroll_rounds,
            scroll_settle_ms=config.fetch.scroll_settle_ms,
        )

    def load_more(self, page: PageCapability) -> None:
        """Trigger lazy loading by scrolling to the bottom a few times."""
        for round_num in range(self.scroll_rounds):
            logger.debug(f"Scroll round {round_num + 1}/{self.scroll_rounds}")
            page.scroll_to_bottom(self.scroll_settle_ms)

    def region_links(self, page: PageCapability, region: LinkRegion) -> List[str]:
        """Article links found in one region; empty when the region is missing."""
        elements = page.select(region.selector)
        if not elements:
            logger.debug(f"Region '{region.name}' ({region.selector}) not found or empty")
            return []

        links = []
        for element in elements:
            url = normalize_href(element.get('href'), self.origin)
            if url and is_article_link(url, self.news_host, self.path_marker):
                links.append(url)

        logger.info(f"Region '{region.name}': {len(links)} article links")
        return links

    def collect(self, page: PageCapability) -> List[str]:
        """Collect deduplicated links from all regions of the loaded listing page."""
        all_links = []
        for region in self.regions:
            all_links.extend(self.region_links(page, region))

        links = dedupe(all_links)
        logger.info(f"Collected {len(links)} unique article links ({len(all_links)} before dedup)")
        return links


def collect_links(page: PageCapability, config: Config, scroll: bool = True) -> List[str]:
    """Navigate to the listing page and collect its candidate links."""
    collector = LinkCollector.from_config(config)
    page.navigate(config.site.listing_url)
    if scroll:
        collector.load_more(page)
    return collector.collect(page)
