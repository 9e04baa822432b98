"""
Daily entertainment news digest: scrape, filter and snapshot articles.
"""

__version__ = "1.0.0"
