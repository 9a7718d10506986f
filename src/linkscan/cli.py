"""
Command line entry point for linkscan.

Subcommands:
    scan    scan paths and store a new snapshot
    diff    show malformed-link changes between the two most recent snapshots
    bad     list malformed links from the most recent snapshot
    audit   compare the most recent snapshot with the filesystem as it is now
    report  list every link of the most recent snapshot by category
"""

from __future__ import annotations

import argparse
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import Callable

from loguru import logger

from .audit import LinkAuditor
from .config import DEFAULT_SKIP, CommandConfig, default_db_dir
from .diff import diff_snapshots
from .errors import LinkScanError
from .logging import configure_logging
from .report import format_audit, format_bad, format_diff, format_report, progress_dot
from .scanner import SnapshotScanner
from .store import SnapshotStore


def _add_db_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-db",
        "--db",
        default=default_db_dir(),
        help="Snapshot directory (default: %(default)s).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linkscan",
        description="linkscan CLI: find broken symbolic links and track them across scans.",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print the installed linkscan version and exit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-v for INFO, -vv for DEBUG).",
    )
    parser.add_argument(
        "--log-level",
        help="Explicit log level (DEBUG, INFO, WARNING, ERROR); overrides -v.",
    )
    subparsers = parser.add_subparsers(dest="command")

    scan = subparsers.add_parser("scan", help="Scan paths and create a new snapshot.")
    _add_db_argument(scan)
    scan.add_argument(
        "-p",
        "--progress",
        action="store_true",
        help="Show a progress dot every 1000 entries.",
    )
    scan.add_argument(
        "-skip",
        "--skip",
        default=DEFAULT_SKIP,
        help="Comma-separated absolute paths of directories and files to skip (default: %(default)s).",
    )
    scan.add_argument("paths", nargs="*", help="Paths to scan (default: current directory).")

    diff = subparsers.add_parser("diff", help="Diff the two most recent snapshots.")
    _add_db_argument(diff)
    diff.add_argument(
        "-a",
        "--all",
        action="store_true",
        help="Show every changed link, not only malformed ones.",
    )

    bad = subparsers.add_parser("bad", help="Show the malformed links from the most recent snapshot.")
    _add_db_argument(bad)

    audit = subparsers.add_parser(
        "audit",
        help="Audit the most recent snapshot against the filesystem and show any changes.",
    )
    _add_db_argument(audit)

    report = subparsers.add_parser("report", help="List every link of the most recent snapshot.")
    _add_db_argument(report)
    return parser


def _configure_error_output() -> None:
    # Bind to the current stderr so redirected streams receive the messages.
    logger.remove()
    logger.add(sys.stderr, level="WARNING", format="linkscan: {level}: {message}", colorize=False)


def _emit(text: str) -> None:
    if text:
        print(text)


def _run_scan(config: CommandConfig) -> int:
    store = SnapshotStore(config.db_dir)
    store.ensure_directory()
    scanner = SnapshotScanner(on_progress=progress_dot if config.show_progress else None)
    try:
        saved = scanner.scan_and_save(store, config.paths, config.skip)
    finally:
        if config.show_progress:
            print()
    print(f"Saved snapshot {saved}")
    return 0


def _run_diff(config: CommandConfig) -> int:
    newer, older = SnapshotStore(config.db_dir).latest(2)
    _emit(format_diff(diff_snapshots(newer, older), show_all=config.show_all))
    return 0


def _run_bad(config: CommandConfig) -> int:
    (snapshot,) = SnapshotStore(config.db_dir).latest(1)
    _emit(format_bad(snapshot))
    return 0


def _run_audit(config: CommandConfig) -> int:
    (snapshot,) = SnapshotStore(config.db_dir).latest(1)
    _emit(format_audit(LinkAuditor().audit(snapshot)))
    return 0


def _run_report(config: CommandConfig) -> int:
    (snapshot,) = SnapshotStore(config.db_dir).latest(1)
    _emit(format_report(snapshot))
    return 0


_COMMANDS: dict[str, Callable[[CommandConfig], int]] = {
    "scan": _run_scan,
    "diff": _run_diff,
    "bad": _run_bad,
    "audit": _run_audit,
    "report": _run_report,
}


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        try:
            print(version("linkscan"))
        except PackageNotFoundError:
            print("linkscan (not installed)")
        return 0

    configure_logging(args.log_level, args.verbose)
    _configure_error_output()

    if args.command is None:
        parser.print_usage(sys.stderr)
        return 2

    config = CommandConfig.from_args(args)
    try:
        return _COMMANDS[args.command](config)
    except LinkScanError as exc:
        logger.error(f"{args.command}: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
