#!/usr/bin/env python3
"""
Core data models for the entertainment digest.
"""

from .article import ArticleMetadata, ArticleRecord
from .snapshot import Snapshot
from .run import RunState, RunSummary
from .review import ReviewStatus

__all__ = ['ArticleMetadata', 'ArticleRecord', 'Snapshot', 'RunState', 'RunSummary', 'ReviewStatus']
