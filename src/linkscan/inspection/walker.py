"""
Directory walker.

Enumerates every filesystem entry under one or more roots, depth first,
visiting each entry exactly once. Symbolic links are yielded but never
descended into, so a link cycle cannot make the walk revisit a path.

Skip rules are applied before an entry is visited: a skipped directory
prunes its whole subtree, a skipped file (or link) is left out alone.
"""

from __future__ import annotations

import os
import stat
from typing import Iterable, Iterator

from ..errors import WalkError
from ..logging import logger


def normalize_path(path: str) -> str:
    return os.path.normpath(os.path.abspath(path))


def normalize_roots(roots: Iterable[str]) -> list[str]:
    """Absolute, de-duplicated roots with nested roots dropped.

    A root inside another root would be walked twice.
    """
    ordered: list[str] = []
    for root in roots:
        normalized = normalize_path(root)
        if normalized not in ordered:
            ordered.append(normalized)

    kept: list[str] = []
    for root in ordered:
        parent = next((other for other in ordered if other != root and _is_within(root, other)), None)
        if parent is not None:
            logger.warning("Root %s is inside %s; walking it once", root, parent)
            continue
        kept.append(root)
    return kept


def _is_within(path: str, ancestor: str) -> bool:
    prefix = ancestor if ancestor.endswith(os.sep) else ancestor + os.sep
    return path.startswith(prefix)


def walk(roots: Iterable[str], skip: Iterable[str] = ()) -> Iterator[str]:
    """Yield the absolute path of every entry under ``roots`` not excluded by ``skip``."""
    skip_set = frozenset(normalize_path(path) for path in skip)
    for root in normalize_roots(roots):
        if root in skip_set:
            logger.info("Skipping root %s", root)
            continue
        try:
            info = os.lstat(root)
        except OSError as exc:
            raise WalkError(root, f"cannot access root ({exc.strerror})") from exc
        yield from _walk_tree(root, stat.S_ISDIR(info.st_mode), skip_set)


def _walk_tree(root: str, root_is_dir: bool, skip_set: frozenset[str]) -> Iterator[str]:
    # Explicit stack keeps deep trees clear of the recursion limit.
    stack = [(root, root_is_dir)]
    while stack:
        path, is_dir = stack.pop()
        yield path
        if not is_dir:
            continue
        children = []
        for name, child_is_dir in _list_directory(path):
            child = os.path.join(path, name)
            if child in skip_set:
                logger.debug("Skipping %s", child)
                continue
            children.append((child, child_is_dir))
        stack.extend(reversed(children))


def _list_directory(directory: str) -> list[tuple[str, bool]]:
    """Sorted (name, is_real_directory) pairs for one directory."""
    try:
        with os.scandir(directory) as entries:
            children = [(entry.name, entry.is_dir(follow_symlinks=False)) for entry in entries]
    except OSError as exc:
        raise WalkError(directory, f"cannot list directory ({exc.strerror})") from exc
    children.sort()
    return children
