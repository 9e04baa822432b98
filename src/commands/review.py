#!/usr/bin/env python3
"""
Review command endpoints for the per-article workflow status.
"""

import logging
from argparse import Namespace

from .base import BaseCommand
from digest.formatters import format_record
from digest.models.review import ReviewStatus
from digest.text import build_share_url

logger = logging.getLogger(__name__)


class ReviewCommand(BaseCommand):
    """Track review status of snapshot articles."""

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute review subcommand."""
        try:
            if subcommand == "status":
                return self.status(args)
            elif subcommand == "set":
                return self.set(args)
            elif subcommand == "share":
                return self.share(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except Exception as e:
            return self.handle_error(e, f"review {subcommand}")

    def status(self, args: Namespace) -> int:
        """Show per-status counts and the articles of one status tab."""
        day = self.resolve_date(args)
        snapshot = self.snapshot_store.load(day)
        if snapshot is None:
            print(f"📭 No news for {day}")
            return 0

        store = self.status_store
        counts = store.counts(snapshot.news_info)
        print(f"\n=== Review {day} ===")
        for status in ReviewStatus:
            print(f"  {status.label} ({status.value}): {counts[status]}")

        wanted = getattr(args, 'status', None) or ReviewStatus.UNPROCESSED.value
        records = store.filter(snapshot.news_info, wanted)
        print(f"\n--- {wanted} ---")
        for index, record in enumerate(records, 1):
            print(format_record(record, index, preview_length=0))
        return 0

    def set(self, args: Namespace) -> int:
        """Set the status of one article."""
        status = self.status_store.set(args.link, args.status)
        print(f"✅ {args.link} → {status.label} ({status.value})")
        return 0

    def share(self, args: Namespace) -> int:
        """Print the share link of an article."""
        print(build_share_url(args.link, self.config.storage.share_ncid))
        return 0
