"""
Snapshot model: every link found during one scan.

A Snapshot is created fresh per scan, filled by the scanner while it walks,
persisted once and then treated as read-only data.
"""

from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import DuplicatePathError
from .links import LinkCategory, LinkRecord

# Lexically sortable: directory listing order == chronological order.
SNAPSHOT_TIME_FORMAT = "%Y-%m-%d-%H-%M-%S.%f"
SNAPSHOT_NAME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}-\d{2}-\d{2}-\d{2}\.\d{6}$")

# Nanosecond timestamps (older scanner output) are cut down to microseconds.
_EXCESS_FRACTION = re.compile(r"(T\d{2}:\d{2}:\d{2}\.\d{6})\d+")


class Snapshot(BaseModel):
    """Timestamped mapping from absolute path to the link observed there."""

    model_config = ConfigDict(populate_by_name=True)

    timestamp: datetime = Field(alias="TimeStamp", description="When the scan started.")
    links: dict[str, LinkRecord] = Field(
        default_factory=dict,
        alias="Links",
        description="Absolute path -> observed link.",
    )

    @field_validator("timestamp", mode="before")
    @classmethod
    def _truncate_fraction(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _EXCESS_FRACTION.sub(r"\1", value)
        return value

    @classmethod
    def new(cls) -> "Snapshot":
        """Empty snapshot stamped with the current local time."""
        return cls(timestamp=datetime.now().astimezone())

    def add(self, path: str, record: LinkRecord) -> None:
        """Insert ``record`` for ``path``. A path may only be added once."""
        if path in self.links:
            raise DuplicatePathError(path)
        self.links[path] = record

    @property
    def filename(self) -> str:
        return self.timestamp.strftime(SNAPSHOT_TIME_FORMAT)

    def by_category(self, category: LinkCategory) -> list[tuple[str, LinkRecord]]:
        return sorted(
            (path, record) for path, record in self.links.items() if record.category == category
        )

    def to_json(self) -> str:
        # Python mode keeps surrogate-escaped names intact; json.dumps writes
        # them as \udcNN escapes and json.loads restores the same str.
        payload = self.model_dump(mode="python", by_alias=True)
        payload["TimeStamp"] = self.timestamp.isoformat()
        for record in payload["Links"].values():
            record["Typ"] = record["Typ"].value
        return json.dumps(payload, indent="\t", ensure_ascii=True)

    @classmethod
    def from_json(cls, text: str) -> "Snapshot":
        return cls.model_validate(json.loads(text))

    def __len__(self) -> int:
        return len(self.links)
