#!/usr/bin/env python3
"""
Snapshot data model: the full output of one run for one calendar date.
"""

from typing import Dict, Any, List
from dataclasses import dataclass, field

from .article import ArticleRecord


@dataclass
class Snapshot:
    """Date-scoped set of accepted articles, in acceptance order."""
    date: str
    news_info: List[ArticleRecord] = field(default_factory=list)
    generated_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'date': self.date,
            'newsInfo': [record.to_dict() for record in self.news_info],
            'generatedAt': self.generated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Snapshot':
        return cls(
            date=data.get('date', ''),
            news_info=[ArticleRecord.from_dict(item) for item in data.get('newsInfo') or []],
            generated_at=data.get('generatedAt', ''),
        )

    def __len__(self) -> int:
        return len(self.news_info)
