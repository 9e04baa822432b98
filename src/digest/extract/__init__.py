"""
Article page extraction.
"""

from .article import ArticleExtractor, parse_structured_data

__all__ = ['ArticleExtractor', 'parse_structured_data']
