#!/usr/bin/env python3
"""
Snapshot command endpoints for reading stored daily snapshots.
"""

import logging
from argparse import Namespace
from datetime import date

from .base import BaseCommand
from digest.formatters import format_snapshot

logger = logging.getLogger(__name__)


class SnapshotCommand(BaseCommand):
    """Read and list stored daily snapshots."""

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute snapshot subcommand."""
        try:
            if subcommand == "show":
                return self.show(args)
            elif subcommand == "recent":
                return self.recent(args)
            elif subcommand == "list":
                return self.list(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except Exception as e:
            return self.handle_error(e, f"snapshot {subcommand}")

    def show(self, args: Namespace) -> int:
        """Show the snapshot of one date."""
        day = self.resolve_date(args)
        snapshot = self.snapshot_store.load(day)
        if snapshot is None:
            print(f"📭 No news for {day}")
            return 0

        statuses = {record.link: self.status_store.get(record.link) for record in snapshot.news_info}
        print(format_snapshot(snapshot, statuses))
        return 0

    def recent(self, args: Namespace) -> int:
        """Show article counts for the last N days."""
        days = getattr(args, 'days', 7)
        today = date.fromisoformat(self.today())
        snapshots = self.snapshot_store.recent(days=days, today=today)

        print(f"\n=== Last {days} days ===")
        if not snapshots:
            print("📭 No snapshots found")
            return 0

        for snapshot in snapshots:
            print(f"📅 {snapshot.date}: {len(snapshot)} articles (generated {snapshot.generated_at})")
        return 0

    def list(self, args: Namespace) -> int:
        """List every date with a snapshot."""
        dates = self.snapshot_store.list_dates()
        if not dates:
            print("📭 No snapshots found")
            return 0
        for day in dates:
            print(day)
        return 0
