# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Guarded removal of artifact directories."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Final

from .classifier import is_orphaned, matches
from .errors import DeletionError
from .kinds import BUILD_CACHE_KINDS, ArtifactKind
from .sizing import size_of

LOGGER = logging.getLogger(__name__)

DRY_RUN_SIZE: Final[int] = 0


def delete_artifact(
    kind: ArtifactKind,
    path: Path,
    *,
    dry_run: bool = False,
    orphaned: bool = False,
) -> int | None:
    """Remove ``path`` after re-validating it as an artifact directory of ``kind``.

    Classification is repeated here rather than trusted from discovery because
    the tree may have changed in between. For compiled-build-cache kinds the
    ownership of the directory must also agree with ``orphaned``.

    Args:
        kind: Artifact kind the caller believes ``path`` to be.
        path: Directory to remove.
        dry_run: When ``True`` classify only and report :data:`DRY_RUN_SIZE`.
        orphaned: Build-cache kinds only; ``True`` targets directories whose
            owning project is gone, ``False`` targets owned directories.

    Returns:
        int | None: Bytes freed (the dry-run sentinel in dry-run mode), or
        ``None`` when ``path`` no longer classifies and nothing was done.

    Raises:
        DeletionError: If the directory matched but could not be removed.
    """

    if not matches(kind, path):
        return None
    if kind in BUILD_CACHE_KINDS and is_orphaned(path) != orphaned:
        return None
    if dry_run:
        return DRY_RUN_SIZE

    size = size_of(path)
    try:
        shutil.rmtree(path)
    except OSError as exc:
        raise DeletionError(path, exc) from exc
    LOGGER.debug("Removed %s (%s, %d bytes)", path, kind.value, size)
    return size


def delete_target_dir(path: Path, *, dry_run: bool = False) -> int | None:
    """Remove a build-cache directory that still belongs to a Cargo project."""

    kind = _build_cache_kind(path)
    if kind is None:
        return None
    return delete_artifact(kind, path, dry_run=dry_run, orphaned=False)


def delete_orphaned_target_dir(path: Path, *, dry_run: bool = False) -> int | None:
    """Remove a build-cache directory whose ``Cargo.toml`` sibling is gone."""

    kind = _build_cache_kind(path)
    if kind is None:
        return None
    return delete_artifact(kind, path, dry_run=dry_run, orphaned=True)


def _build_cache_kind(path: Path) -> ArtifactKind | None:
    for kind in BUILD_CACHE_KINDS:
        if matches(kind, path):
            return kind
    return None


__all__ = [
    "DRY_RUN_SIZE",
    "delete_artifact",
    "delete_orphaned_target_dir",
    "delete_target_dir",
]
