"""
Internal result of inspecting one filesystem path.
"""

from dataclasses import dataclass
from typing import Optional

from .links import LinkCategory, LinkRecord


@dataclass(frozen=True)
class LinkInspection:
    """
    What the classifier found at a path.

    ``target`` and ``category`` are only meaningful when ``is_link`` is set.
    ``is_dir`` is the path's own directory flag for non-links, and the
    resolved target's directory flag for valid links.
    """
    is_link: bool
    is_dir: bool
    target: str = ""
    category: Optional[LinkCategory] = None

    def to_record(self) -> LinkRecord:
        if not self.is_link or self.category is None:
            raise ValueError("only symbolic links can be recorded")
        return LinkRecord(target=self.target, category=self.category)
