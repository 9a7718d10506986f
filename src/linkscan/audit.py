"""
Audit engine: compare a recorded snapshot with the filesystem as it is now.

Every recorded path is classified again. A path is reported when:
- it no longer exists (MISSING)
- it exists but is no longer a symbolic link (NOT_A_LINK)
- its target or category changed (CHANGED)

Read-only: the snapshot is neither updated nor saved again.
"""

from __future__ import annotations

from typing import Optional

from .errors import PathNotFoundError
from .inspection import LinkClassifier
from .logging import logger
from .models import Discrepancy, DiscrepancyKind, Snapshot


class LinkAuditor:
    """Re-inspect the links of a snapshot against the current filesystem."""

    def __init__(self, classifier: Optional[LinkClassifier] = None):
        self.classifier = classifier or LinkClassifier()

    def audit(self, snapshot: Snapshot) -> list[Discrepancy]:
        discrepancies: list[Discrepancy] = []
        for path in sorted(snapshot.links):
            recorded = snapshot.links[path]
            try:
                inspection = self.classifier.inspect(path)
            except PathNotFoundError:
                discrepancies.append(
                    Discrepancy(path=path, kind=DiscrepancyKind.MISSING, recorded=recorded)
                )
                continue

            if not inspection.is_link:
                discrepancies.append(
                    Discrepancy(path=path, kind=DiscrepancyKind.NOT_A_LINK, recorded=recorded)
                )
                continue

            current = inspection.to_record()
            if current != recorded:
                discrepancies.append(
                    Discrepancy(
                        path=path,
                        kind=DiscrepancyKind.CHANGED,
                        recorded=recorded,
                        current=current,
                    )
                )

        logger.info(
            "LinkAuditor: %d of %d recorded links differ from the filesystem",
            len(discrepancies),
            len(snapshot),
        )
        return discrepancies
