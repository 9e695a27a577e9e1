"""
Persistence Module

JSON snapshots that let a host carry topology state between invocations.
"""

from .snapshot import SnapshotStore, SNAPSHOT_VERSION

__all__ = [
    'SnapshotStore',
    'SNAPSHOT_VERSION'
]
