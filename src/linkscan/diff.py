"""
Diff engine: which paths changed between two snapshots.

Comparison is structural on (target, category); timestamps play no role.
The result covers the symmetric difference of the two snapshots:

- path only in the newer snapshot        -> LinkPair(old=None, new=record)
- path in both with a different record   -> LinkPair(old=record, new=record)
- path only in the older snapshot        -> LinkPair(old=record, new=None)

Unchanged paths are omitted, so diffing a snapshot against itself is empty.
"""

from __future__ import annotations

from .logging import logger
from .models import LinkPair, Snapshot


def diff_snapshots(newer: Snapshot, older: Snapshot) -> dict[str, LinkPair]:
    """Map every path whose link appeared, disappeared or changed to its LinkPair."""
    changes: dict[str, LinkPair] = {}

    for path, record in newer.links.items():
        previous = older.links.get(path)
        if previous != record:
            changes[path] = LinkPair(old=previous, new=record)

    for path, previous in older.links.items():
        if path not in newer.links:
            changes[path] = LinkPair(old=previous, new=None)

    logger.info(
        "diff_snapshots: %d changed paths between %s and %s",
        len(changes),
        older.filename,
        newer.filename,
    )
    return changes
