"""
SiteWatch - site safety and workforce administration

Workers, incidents, zones, devices and attendance kept in a local
key-value store, with dashboard and report aggregates on top.
"""

__version__ = "1.0.0"

from .models.schemas import RecordValidationError, Snapshot
from .storage import SnapshotStorage
from .store import AppStore

__all__ = [
    "AppStore",
    "RecordValidationError",
    "Snapshot",
    "SnapshotStorage",
]
