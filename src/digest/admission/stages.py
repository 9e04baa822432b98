#!/usr/bin/env python3
"""
Admission Stages

Each stage is one predicate a candidate article must pass before it is
accepted into the run. Stages only inspect the candidate and the run state;
recording an accepted article is the filter's job.
"""

import re
import logging
from abc import ABC, abstractmethod
from datetime import datetime, time
from enum import Enum
from typing import Callable, List, Optional, Sequence
from dataclasses import dataclass

import pytz

from ..config import SensitiveTerm
from ..models.article import ArticleRecord
from ..models.run import RunState

logger = logging.getLogger(__name__)


class Decision(Enum):
    ACCEPT = 'accept'
    REJECT = 'reject'
    STOP_RUN = 'stop_run'


@dataclass(frozen=True)
class AdmissionResult:
    """Outcome of running a candidate through the admission stages."""
    decision: Decision
    stage: Optional[str] = None
    reason: str = ""

    @property
    def accepted(self) -> bool:
        return self.decision is Decision.ACCEPT


ACCEPTED = AdmissionResult(Decision.ACCEPT)


def headline_fingerprint(headline: str, prefix_length: int) -> str:
    """First prefix_length characters of the headline."""
    return headline[:prefix_length]


class AdmissionStage(ABC):
    """Abstract base class for admission stages."""

    name: str = "stage"

    @abstractmethod
    def evaluate(self, candidate: ArticleRecord, state: RunState) -> AdmissionResult:
        """
        Check a candidate against this stage.

        Args:
            candidate: Extracted article
            state: Current run state (read only)

        Returns:
            ACCEPTED to pass the candidate on, anything else to stop here
        """
        pass

    def reject(self, reason: str) -> AdmissionResult:
        return AdmissionResult(Decision.REJECT, self.name, reason)


class ProvenanceStage(AdmissionStage):
    """Rejects articles credited to the portal itself."""

    name = "provenance"

    def __init__(self, brand_token: str, fields: Sequence[str] = ('author_name', 'news_provider')):
        self.brand_token = brand_token.lower()
        self.fields = tuple(fields)

    def evaluate(self, candidate: ArticleRecord, state: RunState) -> AdmissionResult:
        for field_name in self.fields:
            value = getattr(candidate, field_name, "") or ""
            if self.brand_token in value.lower():
                return self.reject(f"{field_name} '{value}' contains '{self.brand_token}'")
        return ACCEPTED


class HeadlinePresenceStage(AdmissionStage):
    """Rejects articles without a headline."""

    name = "headline"

    def evaluate(self, candidate: ArticleRecord, state: RunState) -> AdmissionResult:
        if not candidate.head_line.strip():
            return self.reject("empty headline")
        return ACCEPTED


class RecencyStage(AdmissionStage):
    """
    Keeps same-day articles published at or after the daily cutoff.

    Dates are compared in the target timezone. Timestamps without an
    offset are read as target-timezone local time.
    """

    name = "recency"

    def __init__(self, timezone: str, cutoff: time, now: Optional[Callable[[], datetime]] = None):
        self.tz = pytz.timezone(timezone)
        self.cutoff = cutoff
        self._now = now or (lambda: datetime.now(pytz.utc))

    def today(self):
        return self._now().astimezone(self.tz).date()

    def to_local(self, published: datetime) -> datetime:
        if published.tzinfo is None:
            return self.tz.localize(published)
        return published.astimezone(self.tz)

    def evaluate(self, candidate: ArticleRecord, state: RunState) -> AdmissionResult:
        if not candidate.publish_date:
            return self.reject("missing publish date")

        published = candidate.published_at
        if published is None:
            return self.reject(f"unparsable publish date '{candidate.publish_date}'")

        local = self.to_local(published)
        today = self.today()
        if local.date() != today:
            return self.reject(f"published {local.date().isoformat()}, not {today.isoformat()}")

        cutoff_at = self.tz.localize(datetime.combine(today, self.cutoff))
        if local < cutoff_at:
            return self.reject(f"published {local.strftime('%H:%M')} before cutoff {self.cutoff.strftime('%H:%M')}")

        return ACCEPTED


class NearDuplicateStage(AdmissionStage):
    """Rejects headlines whose prefix matches an already accepted one."""

    name = "near_duplicate"

    def __init__(self, prefix_length: int = 7):
        self.prefix_length = prefix_length

    def fingerprint(self, candidate: ArticleRecord) -> str:
        return headline_fingerprint(candidate.head_line, self.prefix_length)

    def evaluate(self, candidate: ArticleRecord, state: RunState) -> AdmissionResult:
        fingerprint = self.fingerprint(candidate)
        if fingerprint in state.fingerprints:
            return self.reject(f"headline prefix '{fingerprint}' already accepted")
        return ACCEPTED


class SensitiveKeywordStage(AdmissionStage):
    """Rejects articles whose body mentions a denylisted term."""

    name = "sensitive_keyword"

    def __init__(self, terms: List[SensitiveTerm]):
        self.terms = list(terms)
        self._patterns = [
            (term, re.compile(term.pattern if term.regex else re.escape(term.pattern),
                              re.IGNORECASE if term.ignore_case else 0))
            for term in self.terms
        ]

    def evaluate(self, candidate: ArticleRecord, state: RunState) -> AdmissionResult:
        for term, pattern in self._patterns:
            if pattern.search(candidate.content):
                return self.reject(f"content matches '{term.pattern}'")
        return ACCEPTED


class QuotaStage(AdmissionStage):
    """Signals the end of the run once the quota is filled."""

    name = "quota"

    def __init__(self, quota: int = 10):
        self.quota = quota

    def is_exhausted(self, state: RunState) -> bool:
        return state.accepted_count >= self.quota

    def evaluate(self, candidate: ArticleRecord, state: RunState) -> AdmissionResult:
        if self.is_exhausted(state):
            return AdmissionResult(Decision.STOP_RUN, self.name, f"quota of {self.quota} reached")
        return ACCEPTED
