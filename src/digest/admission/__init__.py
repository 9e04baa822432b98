#!/usr/bin/env python3
"""
Admission package: ordered accept/reject stages for scraped articles.
"""

from .stages import (
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
from .filter import AdmissionFilter

__all__ = [
    'AdmissionFilter',
    'AdmissionResult',
    'AdmissionStage',
    'Decision',
    'HeadlinePresenceStage',
    'NearDuplicateStage',
    'ProvenanceStage',
    'QuotaStage',
    'RecencyStage',
    'SensitiveKeywordStage',
    'headline_fingerprint',
]
