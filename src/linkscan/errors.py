"""
Error hierarchy for link scanning.

Library code raises these and never exits the process. The command layer
(``linkscan.cli``) is the only place that decides an error is fatal.

A dangling or malformed link is NOT an error: it is a classification result.
"""

from __future__ import annotations


class LinkScanError(Exception):
    """Base class for every error raised by linkscan."""


class LinkInspectionError(LinkScanError):
    """Raised when a path (or a link's target) cannot be inspected."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{message}: {path}")
        self.path = path


class PathNotFoundError(LinkInspectionError):
    """The inspected path itself does not exist."""


class TargetAccessError(LinkInspectionError):
    """A link's target exists but could not be examined (e.g. permission denied)."""


class WalkError(LinkScanError):
    """Raised when a directory cannot be listed during a walk."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{message}: {path}")
        self.path = path


class DuplicatePathError(LinkScanError):
    """A path was added twice to the same snapshot."""

    def __init__(self, path: str):
        super().__init__(f"duplicate path: {path}")
        self.path = path


class SnapshotStoreError(LinkScanError):
    """Base class for snapshot persistence errors."""


class SnapshotFormatError(SnapshotStoreError):
    """A snapshot file could not be read or does not match the file format."""


class SnapshotExistsError(SnapshotStoreError):
    """A snapshot with the same timestamp is already stored."""


class NotEnoughSnapshotsError(SnapshotStoreError):
    """Fewer snapshots are stored than the operation requires."""

    def __init__(self, required: int, found: int, directory: str):
        plural = "scan" if required == 1 else "scans"
        super().__init__(
            f"need at least {required} {plural} in {directory}, found {found}"
        )
        self.required = required
        self.found = found
