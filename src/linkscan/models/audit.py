"""
Models for audit results (recorded snapshot vs. current filesystem).
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .links import LinkRecord


class DiscrepancyKind(str, Enum):
    MISSING = "missing"
    NOT_A_LINK = "not_a_link"
    CHANGED = "changed"


class Discrepancy(BaseModel):
    """A recorded link that no longer matches the filesystem."""

    path: str = Field(description="Absolute path recorded in the snapshot.")
    kind: DiscrepancyKind = Field(description="How the current state differs.")
    recorded: LinkRecord = Field(description="Record stored in the snapshot.")
    current: Optional[LinkRecord] = Field(
        default=None,
        description="Record for the current state; absent when the path is no longer a link.",
    )
