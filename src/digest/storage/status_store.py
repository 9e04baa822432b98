#!/usr/bin/env python3
"""
Review status storage.

Keeps the review desk's per-article workflow status in a small JSON file
keyed by article link. Links without an entry are unprocessed.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Sequence, Union

from ..exceptions import StorageError, ValidationError
from ..models.article import ArticleRecord
from ..models.review import ReviewStatus

logger = logging.getLogger(__name__)


def parse_status(value: Union[str, ReviewStatus]) -> ReviewStatus:
    if isinstance(value, ReviewStatus):
        return value
    try:
        return ReviewStatus(value)
    except ValueError:
        expected = ', '.join(status.value for status in ReviewStatus)
        raise ValidationError('status', value, f"one of {expected}")


class ReviewStatusStore:
    """Link -> ReviewStatus mapping persisted as JSON."""

    def __init__(self, path: Union[str, Path] = "docs/review-status.json"):
        self.path = Path(path)
        self._statuses: Dict[str, ReviewStatus] = {}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to read review status file {self.path}",
                               context={'original_error': str(e)}) from e

        for link, value in (data or {}).items():
            try:
                self._statuses[link] = ReviewStatus(value)
            except ValueError:
                logger.warning(f"Ignoring unknown status '{value}' for {link}")

    def _save(self) -> None:
        data = {link: status.value for link, status in sorted(self._statuses.items())}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except OSError as e:
            raise StorageError(f"Failed to write review status file {self.path}",
                               context={'original_error': str(e)}) from e

    def get(self, link: str) -> ReviewStatus:
        return self._statuses.get(link, ReviewStatus.UNPROCESSED)

    def set(self, link: str, status: Union[str, ReviewStatus]) -> ReviewStatus:
        status = parse_status(status)
        if status is ReviewStatus.UNPROCESSED:
            self._statuses.pop(link, None)
        else:
            self._statuses[link] = status
        self._save()
        logger.info(f"Status of {link} set to {status.value}")
        return status

    def counts(self, records: Sequence[ArticleRecord]) -> Dict[ReviewStatus, int]:
        """Number of records per status tab."""
        counts = {status: 0 for status in ReviewStatus}
        for record in records:
            counts[self.get(record.link)] += 1
        return counts

    def filter(self, records: Sequence[ArticleRecord], status: Union[str, ReviewStatus]) -> List[ArticleRecord]:
        status = parse_status(status)
        return [record for record in records if self.get(record.link) is status]
