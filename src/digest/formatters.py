#!/usr/bin/env python3
"""
Formatting utilities for console display of records, snapshots and runs.
"""

from typing import Dict, Optional

from .models.article import ArticleRecord
from .models.review import ReviewStatus
from .models.run import RunSummary
from .models.snapshot import Snapshot
from .text import clean_image_provider, truncate_content


def format_record(record: ArticleRecord, index: Optional[int] = None,
                  status: Optional[ReviewStatus] = None, preview_length: int = 80) -> str:
    """Format a single article for display."""
    published = record.published_at
    timestamp = published.strftime("%Y-%m-%d %H:%M") if published else "----------------"
    prefix = f"{index:2d}. " if index is not None else ""
    status_tag = f" [{status.value}]" if status else ""

    lines = [
        f"{prefix}[{timestamp}] {record.head_line}{status_tag}",
        f"    {record.news_provider or '-'} / {record.author_name or '-'}",
        f"    {record.link}",
    ]
    if record.image_url:
        credit = clean_image_provider(record.image_provider) or ""
        lines.append(f"    🖼  {record.image_url} {credit}".rstrip())
    if record.content and preview_length:
        lines.append(f"    {truncate_content(record.content.replace(chr(10), ' '), preview_length)}")
    return "\n".join(lines)


def format_snapshot(snapshot: Snapshot, statuses: Optional[Dict[str, ReviewStatus]] = None) -> str:
    """Format a whole snapshot with an optional status per link."""
    statuses = statuses or {}
    lines = [
        f"=== {snapshot.date} ===",
        f"{len(snapshot)} articles (generated {snapshot.generated_at or 'unknown'})",
        "",
    ]
    for index, record in enumerate(snapshot.news_info, 1):
        lines.append(format_record(record, index, statuses.get(record.link)))
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def format_run_summary(summary: RunSummary) -> str:
    """Format the end-of-run report."""
    lines = [
        f"\n=== Run {summary.run_id} ({summary.run_date}) ===",
        f"🔗 Candidate links: {summary.candidates}",
        f"📄 Articles fetched: {summary.fetched}",
        f"⚠️  Navigation failures: {summary.navigation_failures}",
        f"✅ Accepted: {summary.accepted}" + (" (quota reached)" if summary.stopped_on_quota else ""),
    ]
    if summary.rejections:
        lines.append("🚫 Rejected:")
        for stage, count in sorted(summary.rejections.items()):
            lines.append(f"   • {stage}: {count}")
    if summary.snapshot_path:
        lines.append(f"💾 Snapshot: {summary.snapshot_path}")
    lines.append(f"⏱  {summary.processing_time:.1f}s")
    return "\n".join(lines)
