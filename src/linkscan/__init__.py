"""
Public API for the linkscan package.
"""

from .audit import LinkAuditor
from .diff import diff_snapshots
from .inspection import LinkClassifier, walk
from .models import (
    Discrepancy,
    DiscrepancyKind,
    LinkCategory,
    LinkInspection,
    LinkPair,
    LinkRecord,
    Snapshot,
)
from .scanner import SnapshotScanner
from .store import SnapshotStore

__all__ = [
    "diff_snapshots",
    "walk",
    "Discrepancy",
    "DiscrepancyKind",
    "LinkAuditor",
    "LinkCategory",
    "LinkClassifier",
    "LinkInspection",
    "LinkPair",
    "LinkRecord",
    "Snapshot",
    "SnapshotScanner",
    "SnapshotStore",
]
