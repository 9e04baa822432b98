"""
Listing page link collection.
"""

from .links import LinkCollector, collect_links, normalize_href, is_article_link

__all__ = ['LinkCollector', 'collect_links', 'normalize_href', 'is_article_link']
