"""
Text rendering for scan results, diffs and audits.

All formatters are pure: they return text and leave printing to the caller.
Paths and targets are always shown quoted so unusual bytes stay visible.
"""

from __future__ import annotations

import sys
from typing import Iterable, Mapping

from .models import Discrepancy, DiscrepancyKind, LinkCategory, LinkPair, Snapshot
from .text import quote

_AUDIT_TITLES = {
    DiscrepancyKind.MISSING: "Missing:",
    DiscrepancyKind.NOT_A_LINK: "No longer a link:",
    DiscrepancyKind.CHANGED: "Link changed:",
}

_REPORT_SECTIONS = (
    (LinkCategory.MALFORMED, "Bad Links"),
    (LinkCategory.DANGLING, "Broken Links"),
    (LinkCategory.VALID, "Good Links"),
)


def format_title(text: str) -> str:
    return f"{text}\n{'-' * len(text)}"


def format_diff(pairs: Mapping[str, LinkPair], show_all: bool = False) -> str:
    """
    Render diff output.

    By default only paths whose old or new record is malformed are shown.
    A path that used to be valid and is still a link gets a ``ln -sF``
    command restoring the old target; everything else shows both records.
    """
    lines: list[str] = []
    for path in sorted(pairs):
        pair = pairs[path]
        if not show_all and not pair.involves(LinkCategory.MALFORMED):
            continue
        lines.append("")
        lines.append(format_title(path))
        if pair.is_repairable:
            lines.append(f"ln -sF {quote(pair.old.target)} {quote(path)}")
            continue
        if pair.old is not None:
            lines.append(f"Old: {pair.old}")
        if pair.new is not None:
            lines.append(f"New: {pair.new}")
    return "\n".join(lines)


def format_bad(snapshot: Snapshot) -> str:
    blocks = [
        f"{format_title(path)}\n{record.category}: {quote(record.target)}\n"
        for path, record in snapshot.by_category(LinkCategory.MALFORMED)
    ]
    return "\n".join(blocks)


def format_audit(discrepancies: Iterable[Discrepancy]) -> str:
    blocks = []
    for item in discrepancies:
        target = item.current.target if item.current is not None else item.recorded.target
        blocks.append(
            f"{format_title(_AUDIT_TITLES[item.kind])}\n"
            f"Src: {quote(item.path)}\n"
            f"Trg: {quote(target)}\n"
        )
    return "\n".join(blocks)


def format_report(snapshot: Snapshot) -> str:
    """Every link of a snapshot, grouped by category."""
    sections = []
    for category, heading in _REPORT_SECTIONS:
        lines = [heading, "=" * len(heading)]
        lines.extend(
            f"{quote(path)}->{quote(record.target)}"
            for path, record in snapshot.by_category(category)
        )
        sections.append("\n".join(lines) + "\n")
    return "\n".join(sections)


def progress_dot(count: int) -> None:
    sys.stdout.write(".")
    sys.stdout.flush()
