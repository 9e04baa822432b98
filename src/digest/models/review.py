#!/usr/bin/env python3
"""
Review workflow status for snapshot articles.
"""

from enum import Enum


class ReviewStatus(Enum):
    """Where an article sits in the editor's review workflow."""
    UNPROCESSED = 'unprocessed'
    SELECTED_PIC = 'selected-pic'
    SELECTED_STA = 'selected-sta'
    COMPLETED = 'completed'
    REJECTED = 'rejected'

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


STATUS_LABELS = {
    ReviewStatus.UNPROCESSED: '未處理',
    ReviewStatus.SELECTED_PIC: '已選圖',
    ReviewStatus.SELECTED_STA: '已選文',
    ReviewStatus.COMPLETED: '已完成',
    ReviewStatus.REJECTED: '不採用',
}
