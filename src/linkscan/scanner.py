"""
Scan orchestrator: walk the filesystem and build a Snapshot.

Flow:
1. Walk every root depth first, honoring the skip set
2. Classify each visited entry
3. Record every symbolic link (valid, dangling or malformed) by absolute path
4. Persist the finished snapshot once (``scan_and_save``)

Any error raised while walking or classifying aborts the scan before
anything is written.
"""

from pathlib import Path
from typing import Callable, Iterable, Optional

from .inspection import LinkClassifier, walk
from .logging import logger
from .models import LinkCategory, Snapshot
from .store import SnapshotStore

DEFAULT_PROGRESS_INTERVAL = 1000

ProgressCallback = Callable[[int], None]


class SnapshotScanner:
    """
    Build a Snapshot of every symbolic link under a set of roots.

    The scanner owns the snapshot while it is being filled; nothing else
    writes to it until the scan returns.
    """

    def __init__(
        self,
        classifier: Optional[LinkClassifier] = None,
        on_progress: Optional[ProgressCallback] = None,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    ):
        if progress_interval <= 0:
            raise ValueError(f"progress_interval must be positive, got {progress_interval}")
        self.classifier = classifier or LinkClassifier()
        self.on_progress = on_progress
        self.progress_interval = progress_interval

    def scan(self, roots: Iterable[str], skip: Iterable[str] = ()) -> Snapshot:
        """
        Walk ``roots`` and record every symbolic link found.

        Args:
            roots: Paths to walk (files or directories)
            skip: Absolute paths to leave out; directories are pruned

        Returns:
            Populated Snapshot (not yet persisted)
        """
        snapshot = Snapshot.new()
        visited = 0
        for path in walk(roots, skip):
            visited += 1
            if self.on_progress is not None and visited % self.progress_interval == 0:
                self.on_progress(visited)

            inspection = self.classifier.inspect(path)
            if inspection.is_link:
                # Malformed targets arrive already quoted from the classifier.
                snapshot.add(path, inspection.to_record())

        counts = {category.value: 0 for category in LinkCategory}
        for record in snapshot.links.values():
            counts[record.category.value] += 1
        logger.info(
            "SnapshotScanner: visited %d entries, found %d links %s",
            visited,
            len(snapshot),
            counts,
        )
        return snapshot

    def scan_and_save(
        self,
        store: SnapshotStore,
        roots: Iterable[str],
        skip: Iterable[str] = (),
    ) -> Path:
        """Scan, then persist the snapshot. Returns the written file."""
        snapshot = self.scan(roots, skip)
        return store.save(snapshot)
