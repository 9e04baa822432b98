#!/usr/bin/env python3
"""
Snapshot Store

One JSON file per calendar date under a fixed output directory. Each write
fully replaces the file for its date; readers see either the old or the new
snapshot, never a partial one.
"""

import json
import logging
import os
import stat
import tempfile
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import List, Optional, Sequence, Union

import pytz

from ..exceptions import SnapshotReadError, SnapshotWriteError
from ..models.article import ArticleRecord
from ..models.snapshot import Snapshot

logger = logging.getLogger(__name__)

DateLike = Union[str, date]


def _date_key(value: DateLike) -> str:
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.isoformat()
    return date.fromisoformat(value).isoformat()


def _file_mode(path: Path) -> int:
    """Mode of the existing snapshot, else 0666 minus the process umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class SnapshotStore:
    """Reads and writes date-keyed snapshot files."""

    def __init__(self, output_dir: Union[str, Path] = "docs/json"):
        self.output_dir = Path(output_dir)

    def path_for(self, day: DateLike) -> Path:
        return self.output_dir / f"{_date_key(day)}.json"

    def persist(self, day: DateLike, records: Sequence[ArticleRecord],
                generated_at: Optional[datetime] = None) -> Path:
        """
        Write the snapshot for a date, replacing any earlier one.

        Raises:
            SnapshotWriteError: If the directory or file cannot be written
        """
        snapshot = Snapshot(
            date=_date_key(day),
            news_info=list(records),
            generated_at=(generated_at or datetime.now(pytz.utc)).isoformat(),
        )
        path = self.path_for(day)
        payload = json.dumps(snapshot.to_dict(), ensure_ascii=False, indent=2)

        tmp_name = None
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.output_dir, prefix=f".{path.stem}.", suffix=".tmp")
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(payload)
                f.write("\n")
            # mkstemp creates 0600; keep the previous mode or the umask default
            os.chmod(tmp_name, _file_mode(path))
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            logger.error(f"Failed to write snapshot {path}: {e}")
            raise SnapshotWriteError(str(path), e) from e
        finally:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        logger.info(f"Wrote {len(snapshot)} articles to {path}")
        return path

    def load(self, day: DateLike) -> Optional[Snapshot]:
        """
        Read the snapshot for a date.

        Returns:
            Snapshot, or None when there is no data for that date

        Raises:
            SnapshotReadError: If the file exists but is not a valid snapshot
        """
        path = self.path_for(day)
        if not path.exists():
            logger.info(f"No snapshot for {_date_key(day)}")
            return None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise SnapshotReadError(str(path), e) from e

        if not isinstance(data, dict):
            raise SnapshotReadError(str(path), ValueError("snapshot root is not an object"))

        return Snapshot.from_dict(data)

    def list_dates(self) -> List[str]:
        """Dates that have a snapshot file, newest first."""
        if not self.output_dir.is_dir():
            return []

        dates = []
        for path in self.output_dir.glob("*.json"):
            try:
                dates.append(date.fromisoformat(path.stem).isoformat())
            except ValueError:
                continue
        return sorted(dates, reverse=True)

    def recent(self, days: int = 7, today: Optional[date] = None) -> List[Snapshot]:
        """Existing snapshots of the last `days` calendar days, newest first."""
        today = today or date.today()
        snapshots = []
        for offset in range(days):
            snapshot = self.load(today - timedelta(days=offset))
            if snapshot is not None:
                snapshots.append(snapshot)
        return snapshots
