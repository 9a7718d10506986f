"""
Command configuration.

Parsed command-line options are turned into one explicit CommandConfig that
is handed to the command handler; nothing reads argparse state globally.
"""

from __future__ import annotations

import argparse
import os
from pathlib import Path

from pydantic import BaseModel, Field

from .inspection import normalize_path

DEFAULT_DB_DIR = "/usr/local/share/linkdb"
DEFAULT_SKIP = "/Volumes,/dev"
DB_DIR_ENV = "LINKSCAN_DB_DIR"


def default_db_dir() -> str:
    return os.getenv(DB_DIR_ENV) or DEFAULT_DB_DIR


def parse_skip_list(text: str | None) -> frozenset[str]:
    """Split a comma-separated skip list into absolute, normalized paths."""
    if not text:
        return frozenset()
    return frozenset(normalize_path(item.strip()) for item in text.split(",") if item.strip())


class CommandConfig(BaseModel):
    """Options shared by the linkscan subcommands."""

    db_dir: Path = Field(description="Directory holding snapshot files.")
    paths: list[str] = Field(default_factory=list, description="Roots to scan (scan only).")
    skip: frozenset[str] = Field(
        default_factory=frozenset,
        description="Absolute paths excluded from the scan; directories are pruned.",
    )
    show_progress: bool = Field(default=False, description="Print a dot every 1000 entries.")
    show_all: bool = Field(
        default=False,
        description="Show every changed link in diff output, not only malformed ones.",
    )

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "CommandConfig":
        paths = list(getattr(args, "paths", None) or [])
        if not paths and getattr(args, "command", None) == "scan":
            paths = [os.getcwd()]
        return cls(
            db_dir=Path(args.db),
            paths=paths,
            skip=parse_skip_list(getattr(args, "skip", None)),
            show_progress=bool(getattr(args, "progress", False)),
            show_all=bool(getattr(args, "all", False)),
        )
