#!/usr/bin/env python3
"""
Article extraction.

Pulls the JSON-LD metadata, body text and lead image out of an article
page. Only a failed navigation abandons an article; every other piece
falls back to an empty value on its own.
"""

import json
import logging
from typing import Optional, Dict, Any, List, Tuple

from ..browser.base import PageCapability
from ..config import Config
from ..exceptions import NavigationError
from ..models.article import ArticleMetadata, ArticleRecord

logger = logging.getLogger(__name__)


def _name_of(value: Any) -> str:
    """Name from a JSON-LD person/organization (string, object or list)."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, dict):
        name = value.get('name')
        return name.strip() if isinstance(name, str) else ""
    if isinstance(value, list):
        for item in value:
            name = _name_of(item)
            if name:
                return name
    return ""


def _pick_node(data: Any) -> Optional[Dict[str, Any]]:
    """Choose the article node out of a JSON-LD document."""
    if isinstance(data, dict) and isinstance(data.get('@graph'), list):
        data = data['@graph']

    if isinstance(data, dict):
        return data

    if isinstance(data, list):
        nodes = [node for node in data if isinstance(node, dict)]
        for node in nodes:
            if node.get('headline'):
                return node
        return nodes[0] if nodes else None

    return None


def parse_structured_data(raw: Optional[str]) -> ArticleMetadata:
    """
    Parse an embedded JSON-LD block.

    Never raises; anything absent or malformed yields empty metadata
    (still carrying the raw text for audit).
    """
    raw = (raw or "").strip()
    if not raw:
        return ArticleMetadata.empty()

    try:
        data = json.loads(raw)
    except ValueError as e:
        logger.debug(f"Unparsable structured data: {e}")
        return ArticleMetadata.empty(raw)

    node = _pick_node(data)
    if node is None:
        return ArticleMetadata.empty(raw)

    headline = node.get('headline')
    published = node.get('datePublished')

    return ArticleMetadata(
        headline=headline.strip() if isinstance(headline, str) else "",
        author_name=_name_of(node.get('author')),
        # publisher is the portal itself; provider names the outlet that wrote it
        provider_name=_name_of(node.get('provider')),
        date_published=published.strip() if isinstance(published, str) and published.strip() else None,
        raw=raw,
    )


class ArticleExtractor:
    """Extracts candidate records from article detail pages."""

    def __init__(self,
                 container_selector: str = "article[id^='article-']",
                 structured_data_selector: str = "script[type='application/ld+json']",
                 image_selector: str = "img"):
        self.container_selector = container_selector
        self.structured_data_selector = f"{container_selector} {structured_data_selector}"
        self.image_selector = f"{container_selector} {image_selector}"

    @classmethod
    def from_config(cls, config: Config) -> 'ArticleExtractor':
        return cls(
            container_selector=config.site.article_container,
            structured_data_selector=config.site.structured_data_selector,
            image_selector=config.site.image_selector,
        )

    def extract_metadata(self, page: PageCapability) -> ArticleMetadata:
        try:
            block = page.select_one(self.structured_data_selector)
        except Exception as e:  # noqa: BLE001
            logger.debug(f"Structured data lookup failed on {page.current_url}: {e}")
            return ArticleMetadata.empty()
        if block is None:
            return ArticleMetadata.empty()
        return parse_structured_data(block.raw_text)

    def extract_content(self, page: PageCapability) -> str:
        try:
            container = page.select_one(self.container_selector)
        except Exception as e:  # noqa: BLE001
            logger.debug(f"Body extraction failed on {page.current_url}: {e}")
            return ""
        return container.text if container is not None else ""

    def extract_image(self, page: PageCapability) -> Tuple[Optional[str], Optional[str]]:
        try:
            images: List = page.select(self.image_selector)
        except Exception as e:  # noqa: BLE001
            logger.debug(f"Image extraction failed on {page.current_url}: {e}")
            return None, None
        if not images:
            return None, None

        image = images[0]
        image_url = image.get('src') or image.get('data-src')
        return image_url, image.next_sibling_text

    def extract(self, page: PageCapability, url: str) -> Optional[ArticleRecord]:
        """
        Extract one article.

        Returns:
            Candidate record, or None if the page could not be loaded
        """
        try:
            page.navigate(url)
        except NavigationError as e:
            logger.warning(f"Skipping {url}: {e.message} ({e.context.get('original_error')})")
            return None

        metadata = self.extract_metadata(page)
        content = self.extract_content(page)
        image_url, image_provider = self.extract_image(page)

        if metadata.is_empty:
            logger.debug(f"No structured data on {url}")

        return ArticleRecord.from_metadata(
            url,
            metadata,
            content=content,
            image_url=image_url,
            image_provider=image_provider,
        )
