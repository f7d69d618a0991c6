# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Concurrent single-pass discovery of projects and artifact directories."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Mapping
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from .classifier import classify, is_orphaned
from .kinds import BUILD_CACHE_KINDS, CARGO_MANIFEST, ArtifactKind

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DiscoveredPaths:
    """Immutable snapshot of everything found during one discovery pass.

    Attributes:
        projects: Directories holding a ``Cargo.toml`` manifest.
        orphaned: Build-cache directories whose parent lacks ``Cargo.toml``.
        artifacts: Every classified artifact directory keyed by kind. The
            build-cache buckets list owned and orphaned directories alike.
    """

    projects: tuple[Path, ...] = ()
    orphaned: tuple[Path, ...] = ()
    artifacts: Mapping[ArtifactKind, tuple[Path, ...]] = field(
        default_factory=lambda: MappingProxyType({kind: () for kind in ArtifactKind})
    )

    def of(self, kind: ArtifactKind) -> tuple[Path, ...]:
        """Return the paths classified as ``kind``."""

        return self.artifacts.get(kind, ())

    @property
    def is_empty(self) -> bool:
        return not self.projects and not self.orphaned and not any(self.artifacts.values())


class _Bucket:
    """Append-only path collection guarded by its own lock."""

    __slots__ = ("_items", "_lock")

    def __init__(self) -> None:
        self._items: list[Path] = []
        self._lock = threading.Lock()

    def append(self, path: Path) -> None:
        with self._lock:
            self._items.append(path)

    def freeze(self) -> tuple[Path, ...]:
        with self._lock:
            return tuple(sorted(self._items))


@dataclass(slots=True)
class _Accumulator:
    """Shared result buckets written by the traversal workers."""

    projects: _Bucket = field(default_factory=_Bucket)
    orphaned: _Bucket = field(default_factory=_Bucket)
    artifacts: dict[ArtifactKind, _Bucket] = field(
        default_factory=lambda: {kind: _Bucket() for kind in ArtifactKind}
    )

    def snapshot(self) -> DiscoveredPaths:
        return DiscoveredPaths(
            projects=self.projects.freeze(),
            orphaned=self.orphaned.freeze(),
            artifacts=MappingProxyType({kind: bucket.freeze() for kind, bucket in self.artifacts.items()}),
        )


def discover(root: Path, *, jobs: int | None = None) -> DiscoveredPaths:
    """Walk ``root`` once on a worker pool and classify every entry.

    Symbolic links are not followed, ignore files are not consulted, and
    hidden entries are visited. Unreadable directories are skipped without
    aborting the scan. Each bucket of the returned snapshot is sorted; the
    traversal itself guarantees no order.

    Args:
        root: Directory to scan.
        jobs: Worker count; ``None`` lets the executor pick a default.

    Returns:
        DiscoveredPaths: Snapshot of discovered projects and artifacts.
    """

    root = root.absolute()
    accumulator = _Accumulator()
    _classify_directory(root, accumulator)

    with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="wd40-walk") as executor:
        pending: set[Future[list[Path]]] = {executor.submit(_scan_directory, root, accumulator)}
        while pending:
            done, pending = wait(pending, return_when=FIRST_COMPLETED)
            for future in done:
                for child in future.result():
                    pending.add(executor.submit(_scan_directory, child, accumulator))

    discovered = accumulator.snapshot()
    LOGGER.debug(
        "Discovery under %s: %d projects, %d orphaned, %d artifact directories",
        root,
        len(discovered.projects),
        len(discovered.orphaned),
        sum(len(paths) for paths in discovered.artifacts.values()),
    )
    return discovered


def find_cargo_projects(root: Path, *, jobs: int | None = None) -> tuple[Path, ...]:
    """Return every directory under ``root`` that holds a ``Cargo.toml``."""

    return discover(root, jobs=jobs).projects


def _scan_directory(directory: Path, accumulator: _Accumulator) -> list[Path]:
    """Classify the children of ``directory`` and return subdirectories to visit."""

    try:
        with os.scandir(directory) as iterator:
            entries = list(iterator)
    except OSError as exc:
        LOGGER.debug("Skipping unreadable directory %s: %s", directory, exc)
        return []

    subdirectories: list[Path] = []
    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_manifest = not is_dir and entry.name == CARGO_MANIFEST and entry.is_file()
        except OSError:
            continue
        if is_dir:
            path = Path(entry.path)
            _classify_directory(path, accumulator)
            subdirectories.append(path)
        elif is_manifest:
            accumulator.projects.append(directory)
    return subdirectories


def _classify_directory(path: Path, accumulator: _Accumulator) -> None:
    kind = classify(path)
    if kind is None:
        return
    accumulator.artifacts[kind].append(path)
    if kind in BUILD_CACHE_KINDS and is_orphaned(path):
        accumulator.orphaned.append(path)


__all__ = ["DiscoveredPaths", "discover", "find_cargo_projects"]
