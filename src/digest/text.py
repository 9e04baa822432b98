#!/usr/bin/env python3
"""
Text helpers for scraped article content.

Whitespace normalization for extracted text, image credit cleanup and the
share link the review desk copies out.
"""

import re
import logging
from typing import Optional
from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode

logger = logging.getLogger(__name__)

# （圖／記者攝） or (圖/翻攝自IG)
BRACKETED_CREDIT_RE = re.compile(r'[（(]([^）)]*圖[／/][^）)]*)[）)]')
BARE_CREDIT_RE = re.compile(r'圖[／/][^，。]*[^，。]')


def normalize_block_text(text: Optional[str]) -> str:
    """Strip every line and drop blank ones, keeping line structure."""
    if not text:
        return ""
    lines = [line.strip() for line in text.splitlines()]
    return "\n".join(line for line in lines if line)


def clean_image_provider(image_provider: Optional[str]) -> Optional[str]:
    """
    Reduce an image caption to its credit part.

    "女星出席活動。（圖／記者攝）" -> "圖／記者攝". Captions without a
    recognizable credit are returned unchanged.
    """
    if not image_provider:
        return image_provider

    match = BRACKETED_CREDIT_RE.search(image_provider)
    if match:
        return match.group(1)

    match = BARE_CREDIT_RE.search(image_provider)
    if match:
        return match.group(0)

    return image_provider


def truncate_content(content: str, max_length: int = 150) -> str:
    """Cut content to max_length characters with a trailing ellipsis."""
    if not content or len(content) <= max_length:
        return content or ""
    return content[:max_length] + "..."


def build_share_url(link: str, ncid: str) -> str:
    """Append the share tracking parameter, replacing any existing one."""
    if not ncid:
        return link
    parts = urlsplit(link)
    query = [(key, value) for key, value in parse_qsl(parts.query, keep_blank_values=True) if key != 'ncid']
    query.append(('ncid', ncid))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))
