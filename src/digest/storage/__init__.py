"""
Persistent storage: daily snapshots and review status.
"""

from .snapshot_store import SnapshotStore
from .status_store import ReviewStatusStore

__all__ = ['SnapshotStore', 'ReviewStatusStore']
