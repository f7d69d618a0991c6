# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-run log file recording discovery, outcomes and the final summary."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Final

from .cleaner import CleanResult, Failed, RunSummary, Scope, Skipped, TargetOnly
from .errors import Wd40Error
from .formatting import human_bytes
from .kinds import RULES, ArtifactKind
from .selection import STANDALONE_KINDS

LOGGER_NAME: Final[str] = "wd40"
LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(message)s"
_RULE_LINE: Final[str] = "=" * 26

# Log tags and summary labels for standalone kinds.
KIND_TAGS: Final[dict[ArtifactKind, str]] = {
    ArtifactKind.NODE_MODULES: "NODE_MODULES",
    ArtifactKind.PYTHON_VENV: "PYTHON_VENV",
    ArtifactKind.SCCACHE: "SCCACHE",
    ArtifactKind.STACK_WORK: "STACK_WORK",
    ArtifactKind.RUSTUP: "RUSTUP",
    ArtifactKind.NEXT_BUILD: "NEXT",
    ArtifactKind.CARGO_NIX: "CARGO_NIX",
}
SUMMARY_LABELS: Final[dict[ArtifactKind, str]] = {
    ArtifactKind.NODE_MODULES: "Node modules cleaned",
    ArtifactKind.PYTHON_VENV: "Python venvs cleaned",
    ArtifactKind.SCCACHE: "Sccache dirs cleaned",
    ArtifactKind.STACK_WORK: "Stack work dirs cleaned",
    ArtifactKind.RUSTUP: "Rustup dirs cleaned",
    ArtifactKind.NEXT_BUILD: "Next.js builds cleaned",
    ArtifactKind.CARGO_NIX: "Cargo-nix dirs cleaned",
}


def default_log_path(log_dir: Path, *, now: datetime | None = None) -> Path:
    """Return ``<log_dir>/clean-YYYYmmdd-HHMMSS.log`` for the current time."""

    stamp = (now or datetime.now()).strftime("%Y%m%d-%H%M%S")
    return log_dir / f"clean-{stamp}.log"


class RunLog:
    """Attach a file handler to the ``wd40`` logger for the duration of a run.

    Use as a context manager; the handler is detached and the file closed on
    exit. Verbose runs also record debug traversal details from submodules.
    """

    def __init__(self, path: Path, *, verbose: bool = False) -> None:
        """Create the log file at ``path``.

        Args:
            path: Destination file; parent directories are created.
            verbose: Record debug-level module messages as well.

        Raises:
            Wd40Error: If the log file cannot be created.
        """

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self._handler = logging.FileHandler(path, mode="w", encoding="utf-8")
        except OSError as exc:
            raise Wd40Error(f"Failed to create log file: {path}: {exc}") from exc
        self._handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        self.path = path
        self._verbose = verbose
        self._logger = logging.getLogger(LOGGER_NAME)
        self._previous_level = self._logger.level

    def __enter__(self) -> RunLog:
        self._logger.addHandler(self._handler)
        self._logger.setLevel(logging.DEBUG if self._verbose else logging.INFO)
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Detach and close the file handler."""

        self._logger.removeHandler(self._handler)
        self._logger.setLevel(self._previous_level)
        self._handler.close()

    def _write(self, message: str = "") -> None:
        self._logger.info(message)

    def header(self, root: Path) -> None:
        self._write("WD-40 Rust Project Cleaner")
        self._write(_RULE_LINE)
        self._write(f"Started: {datetime.now():%Y-%m-%d %H:%M:%S}")
        self._write(f"Root: {root}")

    def found(self, label: str, paths: Sequence[Path]) -> None:
        """Record one discovery bucket and its members."""

        self._write(f"Found {len(paths)} {label}:")
        for path in paths:
            self._write(f"  - {path}")

    def nothing_found(self) -> None:
        self._write("No artifacts found.")

    def cleaning_start(self) -> None:
        self._write("Starting cleanup...")

    def result(self, result: CleanResult) -> None:
        """Record the terminal outcome of one processed item."""

        status = result.status
        freed = result.bytes_freed
        if isinstance(status, Failed):
            self._logger.error("FAILED: %s - %s", result.path, status.message)
        elif isinstance(status, Skipped):
            self._logger.warning("SKIPPED: %s - %s", result.path, status.reason)
        elif isinstance(status, TargetOnly):
            self._write(f"TARGET ONLY: {result.path} (freed {human_bytes(status.bytes_freed)}) - {status.reason}")
        else:
            tag = _tag_for(result)
            suffix = f" (freed {human_bytes(freed)})" if freed is not None else ""
            self._write(f"{tag}: {result.path}{suffix}")

    def summary(self, summary: RunSummary, *, dry_run: bool = False) -> None:
        """Record the end-of-run summary block and completion time."""

        self._write(_RULE_LINE)
        self._write("Summary")
        self._write(_RULE_LINE)
        if dry_run:
            self._write(f"Dry run: {summary.total} items would be cleaned")
        self._write(f"Total projects found: {summary.projects}")
        self._write(f"Successfully cleaned: {summary.successful}")
        self._write(f"Target-only cleaned: {summary.target_only}")
        self._write(f"Skipped: {summary.skipped}")
        self._write(f"Failed: {summary.failed}")
        self._write(f"Orphaned targets cleaned: {summary.orphaned_cleaned}")
        for kind in STANDALONE_KINDS:
            self._write(f"{SUMMARY_LABELS[kind]}: {summary.cleaned_by_kind[kind]}")
        self._write(f"Total space freed: {human_bytes(summary.bytes_freed)}")
        self._write(f"Completed: {datetime.now():%Y-%m-%d %H:%M:%S}")

    def aborted(self) -> None:
        self._write("Aborted by user.")


def _tag_for(result: CleanResult) -> str:
    if result.scope is Scope.PROJECT:
        return "SUCCESS"
    if result.scope is Scope.ORPHANED:
        return "ORPHANED"
    return KIND_TAGS[result.kind]


def bucket_label(kind: ArtifactKind) -> str:
    """Return the plural label used when reporting a discovered bucket."""

    return RULES[kind].plural


__all__ = [
    "KIND_TAGS",
    "LOGGER_NAME",
    "LOG_FORMAT",
    "RunLog",
    "SUMMARY_LABELS",
    "bucket_label",
    "default_log_path",
]
