#!/usr/bin/env python3
"""
Admission Filter

Runs a candidate through the ordered admission stages and records accepted
candidates in the run state.
"""

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from ..config import Config
from ..models.article import ArticleRecord
from ..models.run import RunState
from .stages import (
    ACCEPTED,
    AdmissionResult,
    AdmissionStage,
    Decision,
    HeadlinePresenceStage,
    NearDuplicateStage,
    ProvenanceStage,
    QuotaStage,
    RecencyStage,
    SensitiveKeywordStage,
    headline_fingerprint,
)

logger = logging.getLogger(__name__)


class AdmissionFilter:
    """
    Ordered admission pipeline.

    The first stage that does not accept decides the outcome. The quota
    stage belongs last so that it only ever sees candidates that would
    otherwise have been accepted.
    """

    def __init__(self, stages: List[AdmissionStage], prefix_length: int = 7):
        self.stages = list(stages)
        self.prefix_length = prefix_length
        self.rejections: Dict[str, int] = {}

    @classmethod
    def from_config(cls, config: Config, now: Optional[Callable[[], datetime]] = None) -> 'AdmissionFilter':
        filters = config.filters
        return cls(
            stages=[
                ProvenanceStage(filters.brand_token),
                HeadlinePresenceStage(),
                RecencyStage(filters.target_timezone, filters.daily_cutoff, now=now),
                NearDuplicateStage(filters.headline_prefix_length),
                SensitiveKeywordStage(filters.sensitive_terms),
                QuotaStage(filters.result_quota),
            ],
            prefix_length=filters.headline_prefix_length,
        )

    @property
    def quota_stage(self) -> Optional[QuotaStage]:
        for stage in self.stages:
            if isinstance(stage, QuotaStage):
                return stage
        return None

    def quota_reached(self, state: RunState) -> bool:
        quota = self.quota_stage
        return quota is not None and quota.is_exhausted(state)

    def evaluate(self, candidate: ArticleRecord, state: RunState) -> AdmissionResult:
        """Run the stages without touching the run state."""
        for stage in self.stages:
            result = stage.evaluate(candidate, state)
            if result.decision is not Decision.ACCEPT:
                return result
        return ACCEPTED

    def admit(self, candidate: ArticleRecord, state: RunState) -> AdmissionResult:
        """Decide on a candidate and record it when accepted."""
        result = self.evaluate(candidate, state)

        if result.decision is Decision.ACCEPT:
            state.accept(candidate, headline_fingerprint(candidate.head_line, self.prefix_length))
            logger.info(f"Accepted ({state.accepted_count}): {candidate.head_line}")
        elif result.decision is Decision.REJECT:
            self.rejections[result.stage] = self.rejections.get(result.stage, 0) + 1
            logger.info(f"Rejected at {result.stage}: {candidate.link} ({result.reason})")
        else:
            logger.info(f"Stopping run: {result.reason}")

        return result
