# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Best-effort disk usage accounting for artifact directories."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

LOGGER = logging.getLogger(__name__)


def size_of(path: Path) -> int:
    """Return the total size in bytes of regular files beneath ``path``.

    Symbolic links are never followed, so the total cannot escape the tree or
    count a file twice. A missing path sizes to zero and unreadable entries are
    skipped; the result may undercount but never raises.

    Args:
        path: File or directory to measure.

    Returns:
        int: Sum of regular-file sizes reachable from ``path``.
    """

    try:
        info = path.lstat()
    except OSError:
        return 0
    if stat.S_ISREG(info.st_mode):
        return info.st_size
    if not stat.S_ISDIR(info.st_mode):
        return 0

    total = 0
    pending: list[str] = [os.fspath(path)]
    while pending:
        directory = pending.pop()
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    total += _entry_size(entry, pending)
        except OSError as exc:
            LOGGER.debug("Skipping unreadable directory %s: %s", directory, exc)
    return total


def _entry_size(entry: os.DirEntry[str], pending: list[str]) -> int:
    """Return the size contributed by ``entry``, queueing subdirectories on ``pending``."""

    try:
        if entry.is_dir(follow_symlinks=False):
            pending.append(entry.path)
            return 0
        if entry.is_file(follow_symlinks=False):
            return entry.stat(follow_symlinks=False).st_size
    except OSError as exc:
        LOGGER.debug("Skipping unreadable entry %s: %s", entry.path, exc)
    return 0


__all__ = ["size_of"]
