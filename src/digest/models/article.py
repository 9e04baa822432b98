#!/usr/bin/env python3
"""
Article data models.

ArticleMetadata is what the page's JSON-LD block says about an article;
ArticleRecord is the unit that flows through admission and ends up in a
snapshot.
"""

from datetime import datetime
from typing import Dict, Any, Optional
from dataclasses import dataclass

from dateutil import parser as date_parser


def parse_iso_datetime(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp.

    Values without a full calendar date (e.g. "3pm", "18:00") are rejected
    rather than completed from the current day.
    """
    if isinstance(value, datetime):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        return date_parser.isoparse(value.strip())
    except (ValueError, OverflowError):
        return None


@dataclass
class ArticleMetadata:
    """Structured data embedded in an article page."""
    headline: str = ""
    author_name: str = ""
    provider_name: str = ""
    date_published: Optional[str] = None
    raw: str = ""

    @classmethod
    def empty(cls, raw: str = "") -> 'ArticleMetadata':
        return cls(raw=raw)

    @property
    def is_empty(self) -> bool:
        return not (self.headline or self.author_name or self.provider_name or self.date_published)


@dataclass
class ArticleRecord:
    """
    A scraped article.

    Serialized with the camelCase keys the dashboard reads.
    """
    link: str
    head_line: str = ""
    publish_date: str = ""
    source: str = ""
    content: str = ""
    image_url: Optional[str] = None
    image_provider: Optional[str] = None
    author_name: str = ""
    news_provider: str = ""

    def __post_init__(self):
        self.link = (self.link or "").strip()
        self.head_line = (self.head_line or "").strip()
        self.publish_date = (self.publish_date or "").strip()
        self.source = self.source or ""
        self.content = (self.content or "").strip()
        self.author_name = (self.author_name or "").strip()
        self.news_provider = (self.news_provider or "").strip()
        if isinstance(self.image_url, str):
            self.image_url = self.image_url.strip() or None
        if isinstance(self.image_provider, str):
            self.image_provider = self.image_provider.strip() or None

    @property
    def published_at(self) -> Optional[datetime]:
        return parse_iso_datetime(self.publish_date)

    @classmethod
    def from_metadata(cls, link: str, metadata: ArticleMetadata, content: str = "",
                      image_url: Optional[str] = None, image_provider: Optional[str] = None) -> 'ArticleRecord':
        """Build a candidate record from extracted page pieces."""
        return cls(
            link=link,
            head_line=metadata.headline,
            publish_date=metadata.date_published or "",
            source=metadata.raw,
            content=content,
            image_url=image_url,
            image_provider=image_provider,
            author_name=metadata.author_name,
            news_provider=metadata.provider_name,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the snapshot JSON shape."""
        return {
            'link': self.link,
            'headLine': self.head_line,
            'publishDate': self.publish_date,
            'source': self.source,
            'content': self.content,
            'imageUrl': self.image_url,
            'imageProvider': self.image_provider,
            'authorName': self.author_name,
            'newsProvider': self.news_provider,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ArticleRecord':
        """Create ArticleRecord from a snapshot entry."""
        return cls(
            link=data.get('link', ''),
            head_line=data.get('headLine', ''),
            publish_date=data.get('publishDate', ''),
            source=data.get('source', ''),
            content=data.get('content', ''),
            image_url=data.get('imageUrl'),
            image_provider=data.get('imageProvider'),
            author_name=data.get('authorName', ''),
            news_provider=data.get('newsProvider', ''),
        )

    def __repr__(self):
        return f"ArticleRecord(head_line='{self.head_line[:30]}', link='{self.link}')"
