"""
Link classifier: decides what kind of entry lives at a path.

Classification rules
--------------------

1. Non-link: report only whether the path is a directory.

2. Symbolic link: read the raw target bytes and resolve them
   (relative targets are joined with the link's parent directory),
   then ``stat`` the candidate, following any chain of links.

   - stat succeeds            -> VALID, is_dir from the resolved target
   - target does not resolve  -> DANGLING if the target bytes are valid
                                 UTF-8, MALFORMED otherwise (target stored
                                 quoted and escaped)

3. "Does not resolve" means ENOENT, ENOTDIR, ELOOP or ENAMETOOLONG.
   Any other failure (EACCES, EIO, ...) says nothing about the link being
   broken and is raised as TargetAccessError.

Failures while examining the path itself are raised as well; the caller
decides whether they are fatal.
"""

from __future__ import annotations

import errno
import os
import stat

from ..errors import LinkInspectionError, PathNotFoundError, TargetAccessError
from ..logging import logger
from ..models import LinkCategory, LinkInspection
from ..text import is_valid_text, quote_bytes

UNRESOLVED_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR, errno.ELOOP, errno.ENAMETOOLONG})


class LinkClassifier:
    """Inspect one path and classify it as non-link, valid, dangling or malformed link."""

    def inspect(self, path: str) -> LinkInspection:
        try:
            info = os.lstat(path)
        except OSError as exc:
            # ENOTDIR: a parent component has been replaced by a non-directory.
            if exc.errno in (errno.ENOENT, errno.ENOTDIR):
                raise PathNotFoundError(path, "path does not exist") from exc
            raise LinkInspectionError(path, f"cannot lstat ({exc.strerror})") from exc

        if not stat.S_ISLNK(info.st_mode):
            return LinkInspection(is_link=False, is_dir=stat.S_ISDIR(info.st_mode))

        raw_path = os.fsencode(path)
        try:
            raw_target = os.readlink(raw_path)
        except OSError as exc:
            raise LinkInspectionError(path, f"cannot read link ({exc.strerror})") from exc

        candidate = raw_target
        if not os.path.isabs(candidate):
            candidate = os.path.join(os.path.dirname(raw_path), raw_target)

        try:
            target_info = os.stat(candidate)
        except OSError as exc:
            if exc.errno not in UNRESOLVED_ERRNOS:
                raise TargetAccessError(path, f"cannot stat link target ({exc.strerror})") from exc
            return self._unresolved(path, raw_target)

        return LinkInspection(
            is_link=True,
            is_dir=stat.S_ISDIR(target_info.st_mode),
            # Undecodable bytes survive as lone surrogates, so the raw target is kept.
            target=raw_target.decode("utf-8", errors="surrogateescape"),
            category=LinkCategory.VALID,
        )

    def _unresolved(self, path: str, raw_target: bytes) -> LinkInspection:
        if is_valid_text(raw_target):
            logger.debug("Dangling link %s -> %s", path, raw_target.decode("utf-8"))
            return LinkInspection(
                is_link=True,
                is_dir=False,
                target=raw_target.decode("utf-8"),
                category=LinkCategory.DANGLING,
            )
        target = quote_bytes(raw_target)
        logger.debug("Malformed link %s -> %s", path, target)
        return LinkInspection(
            is_link=True,
            is_dir=False,
            target=target,
            category=LinkCategory.MALFORMED,
        )
