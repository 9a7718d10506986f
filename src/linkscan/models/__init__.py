from .audit import Discrepancy, DiscrepancyKind
from .inspection import LinkInspection
from .links import LinkCategory, LinkPair, LinkRecord
from .snapshot import SNAPSHOT_NAME_PATTERN, SNAPSHOT_TIME_FORMAT, Snapshot

__all__ = [
    "Discrepancy",
    "DiscrepancyKind",
    "LinkCategory",
    "LinkInspection",
    "LinkPair",
    "LinkRecord",
    "Snapshot",
    "SNAPSHOT_NAME_PATTERN",
    "SNAPSHOT_TIME_FORMAT",
]
