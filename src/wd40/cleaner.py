# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-item cleanup decisions and run-level aggregation."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TypeAlias

from .deleter import delete_artifact, delete_orphaned_target_dir, delete_target_dir
from .errors import DeletionError, ValidationError
from .kinds import BUILD_CACHE_KINDS, ArtifactKind, build_cache_dirname
from .selection import STANDALONE_KINDS
from .validation import ProjectValidator
from .walker import DiscoveredPaths

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Success:
    """Artifacts removed; ``bytes_freed`` is ``None`` for dry runs or when nothing existed."""

    bytes_freed: int | None = None


@dataclass(frozen=True, slots=True)
class TargetOnly:
    """Project failed validation but its build cache was still removed."""

    bytes_freed: int
    reason: str


@dataclass(frozen=True, slots=True)
class Failed:
    """Removal was attempted and failed."""

    message: str


@dataclass(frozen=True, slots=True)
class Skipped:
    """Nothing was removed."""

    reason: str


CleanStatus: TypeAlias = Success | TargetOnly | Failed | Skipped


class Scope(str, Enum):
    """Discovery bucket an item was taken from."""

    PROJECT = "project"
    ORPHANED = "orphaned"
    ARTIFACT = "artifact"


@dataclass(frozen=True, slots=True)
class CleanResult:
    """Terminal outcome for one processed item."""

    path: Path
    status: CleanStatus
    kind: ArtifactKind = ArtifactKind.RUST_TARGET
    scope: Scope = Scope.PROJECT

    @property
    def is_success(self) -> bool:
        return isinstance(self.status, Success)

    @property
    def is_target_only(self) -> bool:
        return isinstance(self.status, TargetOnly)

    @property
    def is_skipped(self) -> bool:
        return isinstance(self.status, Skipped)

    @property
    def is_failed(self) -> bool:
        return isinstance(self.status, Failed)

    @property
    def bytes_freed(self) -> int | None:
        """Return the bytes released by this item, if any were measured."""

        if isinstance(self.status, (Success, TargetOnly)):
            return self.status.bytes_freed
        return None


@dataclass(frozen=True, slots=True)
class CleanOptions:
    """Flags steering the per-project state machine."""

    dry_run: bool = False
    force: bool = False
    strict: bool = False


ResultCallback = Callable[[CleanResult], None]


def clean_project(
    project_dir: Path,
    *,
    options: CleanOptions,
    validator: ProjectValidator,
) -> CleanResult:
    """Clean the build caches owned by the Cargo project at ``project_dir``.

    Unless ``force`` is set the project is validated first. An invalid project
    is skipped in strict mode; otherwise only its primary build cache is
    removed and the outcome is :class:`TargetOnly`. A valid project has every
    build-cache variant removed and the freed bytes summed.

    Args:
        project_dir: Directory holding ``Cargo.toml``.
        options: Dry-run, force and strict flags.
        validator: Toolchain-backed project validator.

    Returns:
        CleanResult: Exactly one terminal status for the project.
    """

    if not options.force:
        try:
            validator.validate(project_dir)
        except ValidationError as exc:
            return _clean_invalid_project(project_dir, exc.reason, options)

    if options.dry_run:
        return CleanResult(project_dir, Success(None))

    total = 0
    found_any = False
    errors: list[str] = []
    for kind in BUILD_CACHE_KINDS:
        target = project_dir / build_cache_dirname(kind)
        try:
            freed = delete_artifact(kind, target, orphaned=False)
        except DeletionError as exc:
            errors.append(str(exc))
            continue
        if freed is not None:
            found_any = True
            total += freed

    if errors:
        return CleanResult(project_dir, Failed("; ".join(errors)))
    return CleanResult(project_dir, Success(total if found_any else None))


def _clean_invalid_project(project_dir: Path, reason: str, options: CleanOptions) -> CleanResult:
    if options.strict:
        return CleanResult(project_dir, Skipped(reason))

    target = project_dir / build_cache_dirname(ArtifactKind.RUST_TARGET)
    try:
        freed = delete_target_dir(target, dry_run=options.dry_run)
    except DeletionError as exc:
        return CleanResult(project_dir, Failed(str(exc)))
    if freed is None:
        return CleanResult(project_dir, Skipped(reason))
    return CleanResult(project_dir, TargetOnly(freed, reason))


def clean_orphaned(path: Path, *, dry_run: bool = False) -> CleanResult:
    """Remove an orphaned build-cache directory."""

    kind = ArtifactKind.RUST_ANALYZER_TARGET if path.name == "target-ra" else ArtifactKind.RUST_TARGET
    try:
        freed = delete_orphaned_target_dir(path, dry_run=dry_run)
    except DeletionError as exc:
        return CleanResult(path, Failed(str(exc)), kind, Scope.ORPHANED)
    return CleanResult(path, _status_for(freed, kind, dry_run), kind, Scope.ORPHANED)


def clean_artifact(kind: ArtifactKind, path: Path, *, dry_run: bool = False) -> CleanResult:
    """Remove a standalone artifact directory of ``kind``."""

    try:
        freed = delete_artifact(kind, path, dry_run=dry_run)
    except DeletionError as exc:
        return CleanResult(path, Failed(str(exc)), kind, Scope.ARTIFACT)
    return CleanResult(path, _status_for(freed, kind, dry_run), kind, Scope.ARTIFACT)


def _status_for(freed: int | None, kind: ArtifactKind, dry_run: bool) -> CleanStatus:
    if freed is None:
        return Skipped(f"no longer matches {kind.value}")
    return Success(None if dry_run else freed)


def run_cleanup(
    work: DiscoveredPaths,
    *,
    options: CleanOptions,
    validator: ProjectValidator,
    on_result: ResultCallback | None = None,
) -> list[CleanResult]:
    """Process every bucket of ``work`` sequentially.

    Projects run first, then orphaned build caches, then each standalone kind.
    Items are independent; a failure is recorded and processing continues.

    Args:
        work: Selected discovery buckets.
        options: Dry-run, force and strict flags.
        validator: Validator used for owning projects.
        on_result: Optional callback invoked with each terminal result.

    Returns:
        list[CleanResult]: One result per processed item, in processing order.
    """

    results: list[CleanResult] = []

    def _record(result: CleanResult) -> None:
        LOGGER.debug("%s %s -> %s", result.scope.value, result.path, result.status)
        results.append(result)
        if on_result is not None:
            on_result(result)

    for project in work.projects:
        _record(clean_project(project, options=options, validator=validator))
    for orphan in work.orphaned:
        _record(clean_orphaned(orphan, dry_run=options.dry_run))
    for kind in STANDALONE_KINDS:
        for path in work.of(kind):
            _record(clean_artifact(kind, path, dry_run=options.dry_run))
    return results


@dataclass(slots=True)
class RunSummary:
    """Aggregated counters for a completed run."""

    total: int = 0
    projects: int = 0
    successful: int = 0
    target_only: int = 0
    skipped: int = 0
    failed: int = 0
    orphaned_cleaned: int = 0
    cleaned_by_kind: Counter[ArtifactKind] = field(default_factory=Counter)
    bytes_freed: int = 0

    def add(self, result: CleanResult) -> None:
        """Fold ``result`` into the counters."""

        self.total += 1
        freed = result.bytes_freed
        if freed is not None:
            self.bytes_freed += freed
        if result.is_skipped:
            self.skipped += 1
        elif result.is_failed:
            self.failed += 1
        elif result.scope is Scope.PROJECT:
            if result.is_target_only:
                self.target_only += 1
            else:
                self.successful += 1
        elif result.scope is Scope.ORPHANED:
            self.orphaned_cleaned += 1
        else:
            self.cleaned_by_kind[result.kind] += 1
        if result.scope is Scope.PROJECT:
            self.projects += 1


def summarize(results: list[CleanResult]) -> RunSummary:
    """Return the :class:`RunSummary` for ``results``."""

    summary = RunSummary()
    for result in results:
        summary.add(result)
    return summary


__all__ = [
    "CleanOptions",
    "CleanResult",
    "CleanStatus",
    "Failed",
    "ResultCallback",
    "RunSummary",
    "Scope",
    "Skipped",
    "Success",
    "TargetOnly",
    "clean_artifact",
    "clean_orphaned",
    "clean_project",
    "run_cleanup",
    "summarize",
]
