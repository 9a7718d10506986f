"""
Data models for observed symbolic links.

A LinkRecord is what a scan stores for one symlink. A LinkPair is the
before/after view of one path across two snapshots and only exists as diff
output.

External vocabulary
-------------------
The snapshot file format predates these models and uses its own field
names and category tokens:

- ``Target`` / ``Typ`` for the record fields
- ``Good`` / ``Broken`` / ``Bad`` for valid / dangling / malformed

The aliases below keep files written by older scanners readable.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..text import quote


class LinkCategory(str, Enum):
    """
    Validity category of a symbolic link.

    - VALID: target resolves (relative to the link's directory) to an existing entry
    - DANGLING: target is valid text but does not resolve
    - MALFORMED: target is not valid text; stored quoted and escaped
    """

    VALID = "Good"
    DANGLING = "Broken"
    MALFORMED = "Bad"

    def __str__(self) -> str:
        return self.value


class LinkRecord(BaseModel):
    """
    One symbolic link observed at scan time. Immutable.

    Equality is structural on (target, category).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    target: str = Field(
        alias="Target",
        description="Raw link target text; pre-escaped and quoted for malformed links.",
    )
    category: LinkCategory = Field(alias="Typ", description="Validity category of the link.")

    def __str__(self) -> str:
        return f"{self.category}:{quote(self.target)}"


class LinkPair(BaseModel):
    """
    Before/after state of one path across two snapshots.

    Exactly one side may be absent (link added or removed), never both.
    """

    model_config = ConfigDict(frozen=True)

    old: Optional[LinkRecord] = Field(default=None, description="Record in the older snapshot.")
    new: Optional[LinkRecord] = Field(default=None, description="Record in the newer snapshot.")

    @model_validator(mode="after")
    def _require_one_side(self) -> "LinkPair":
        if self.old is None and self.new is None:
            raise ValueError("LinkPair needs at least one of old/new")
        return self

    @property
    def is_added(self) -> bool:
        return self.old is None

    @property
    def is_removed(self) -> bool:
        return self.new is None

    @property
    def is_repairable(self) -> bool:
        """The link used to be valid and the path is still a link."""
        return self.old is not None and self.old.category == LinkCategory.VALID and self.new is not None

    def involves(self, category: LinkCategory) -> bool:
        return any(
            record is not None and record.category == category for record in (self.old, self.new)
        )
