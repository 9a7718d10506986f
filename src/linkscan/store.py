"""
Snapshot store: timestamped snapshot files in one directory.

Layout:
    <directory>/<YYYY-MM-DD-HH-MM-SS.ffffff>

Filenames encode the scan timestamp, so sorting by name sorts by time.
Files whose names do not match the format are ignored.

Snapshots are written atomically (temporary file, then rename) so a failed
write never leaves a partial snapshot behind.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from .errors import NotEnoughSnapshotsError, SnapshotExistsError, SnapshotFormatError, SnapshotStoreError
from .logging import logger
from .models import SNAPSHOT_NAME_PATTERN, Snapshot


class SnapshotStore:
    """List, load and save snapshots kept in ``directory``."""

    def __init__(self, directory: str | os.PathLike[str]):
        self.directory = Path(directory)

    def ensure_directory(self) -> Path:
        """Create the store directory (and parents) if absent."""
        try:
            self.directory.mkdir(mode=0o755, parents=True, exist_ok=True)
        except OSError as exc:
            raise SnapshotStoreError(f"cannot create snapshot directory {self.directory}: {exc.strerror}") from exc
        logger.info("SnapshotStore: using %s", self.directory)
        return self.directory

    def list_snapshots(self) -> list[Path]:
        """Snapshot files, oldest first."""
        try:
            names = os.listdir(self.directory)
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise SnapshotStoreError(f"cannot list snapshot directory {self.directory}: {exc.strerror}") from exc
        return [
            self.directory / name
            for name in sorted(names)
            if SNAPSHOT_NAME_PATTERN.match(name) and (self.directory / name).is_file()
        ]

    def latest(self, count: int = 1) -> list[Snapshot]:
        """
        Load the ``count`` most recent snapshots, newest first.

        Raises:
            NotEnoughSnapshotsError: If fewer than ``count`` snapshots are stored
        """
        paths = self.list_snapshots()
        if len(paths) < count:
            raise NotEnoughSnapshotsError(count, len(paths), str(self.directory))
        return [self.load(path) for path in reversed(paths[-count:])]

    def load(self, path: str | os.PathLike[str]) -> Snapshot:
        """
        Load one snapshot file.

        Raises:
            SnapshotFormatError: If the file cannot be read or is not a valid snapshot
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as exc:
            raise SnapshotFormatError(f"cannot read snapshot {path}: {exc.strerror}") from exc
        except UnicodeDecodeError as exc:
            raise SnapshotFormatError(f"snapshot {path} is not UTF-8 text") from exc

        try:
            snapshot = Snapshot.from_json(text)
        except ValueError as exc:
            # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors.
            detail = exc.errors()[0]["msg"] if isinstance(exc, ValidationError) else str(exc)
            raise SnapshotFormatError(f"invalid snapshot {path}: {detail}") from exc

        logger.debug("SnapshotStore: loaded %d links from %s", len(snapshot), path)
        return snapshot

    def save(self, snapshot: Snapshot) -> Path:
        """
        Write ``snapshot`` as ``<directory>/<snapshot.filename>``.

        Raises:
            SnapshotExistsError: If a snapshot with the same timestamp exists
        """
        self.ensure_directory()
        destination = self.directory / snapshot.filename
        if destination.exists():
            raise SnapshotExistsError(f"snapshot already exists: {destination}")

        payload = snapshot.to_json()
        fd, temp_name = tempfile.mkstemp(dir=self.directory, prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.chmod(temp_name, 0o644)
            os.replace(temp_name, destination)
        except OSError as exc:
            Path(temp_name).unlink(missing_ok=True)
            raise SnapshotStoreError(f"cannot write snapshot {destination}: {exc.strerror}") from exc

        logger.info("SnapshotStore: saved %d links to %s", len(snapshot), destination)
        return destination
