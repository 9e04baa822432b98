#!/usr/bin/env python3
"""
Run state and run summary models.

RunState lives only for the duration of a single pipeline run; RunSummary
is what gets reported when it ends.
"""

from datetime import datetime
from typing import Dict, Any, List, Optional, Set
from dataclasses import dataclass, field

from .article import ArticleRecord


@dataclass
class RunState:
    """Mutable state of one run, owned by the run loop."""
    accepted: List[ArticleRecord] = field(default_factory=list)
    seen_links: Set[str] = field(default_factory=set)
    fingerprints: Set[str] = field(default_factory=set)

    @property
    def accepted_count(self) -> int:
        return len(self.accepted)

    def mark_seen(self, link: str) -> bool:
        """Record a link as visited. Returns False if it was already seen."""
        if link in self.seen_links:
            return False
        self.seen_links.add(link)
        return True

    def accept(self, record: ArticleRecord, fingerprint: str) -> None:
        self.accepted.append(record)
        self.fingerprints.add(fingerprint)


@dataclass
class RunSummary:
    """Represents a single execution run."""
    run_id: str
    run_date: str
    started_at: datetime
    finished_at: Optional[datetime] = None
    candidates: int = 0
    fetched: int = 0
    navigation_failures: int = 0
    accepted: int = 0
    rejections: Dict[str, int] = field(default_factory=dict)
    stopped_on_quota: bool = False
    snapshot_path: Optional[str] = None

    @property
    def processing_time(self) -> float:
        if not self.finished_at:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'run_id': self.run_id,
            'run_date': self.run_date,
            'started_at': self.started_at.isoformat(),
            'finished_at': self.finished_at.isoformat() if self.finished_at else None,
            'processing_time': self.processing_time,
            'candidates': self.candidates,
            'fetched': self.fetched,
            'navigation_failures': self.navigation_failures,
            'accepted': self.accepted,
            'rejections': dict(self.rejections),
            'stopped_on_quota': self.stopped_on_quota,
            'snapshot_path': self.snapshot_path,
        }
