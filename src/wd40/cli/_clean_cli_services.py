# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helper services for the wd-40 command."""

from __future__ import annotations

from pathlib import Path
from typing import Final

import typer

from ..cleaner import CleanResult, Failed, RunSummary, Scope, Skipped, TargetOnly
from ..config import CleanerConfig, apply_overrides, load_config
from ..errors import ConfigError
from ..formatting import human_bytes, pluralize
from ..kinds import RULES
from ..runlog import KIND_TAGS, RunLog, bucket_label
from ..selection import STANDALONE_KINDS, Selection
from ..walker import DiscoveredPaths
from ._clean_cli_models import CleanCLIOptions
from .shared import CLIError, CLILogger

CONFIRM_PROMPT: Final[str] = "Proceed with cleaning? (y/N)"
_PROJECT_LABELS: Final[tuple[str, str]] = ("Rust project", "Rust projects")
_ORPHANED_LABELS: Final[tuple[str, str]] = ("orphaned target directory", "orphaned target directories")


def load_cleaner_config(options: CleanCLIOptions) -> CleanerConfig:
    """Return the configuration for this run with CLI overrides applied.

    Raises:
        CLIError: If the configuration file is unreadable or invalid.
    """

    try:
        config = load_config(options.config)
        return apply_overrides(config, jobs=options.jobs, validation_timeout=options.timeout)
    except ConfigError as exc:
        raise CLIError(str(exc), exit_code=1) from exc


def report_found(
    work: DiscoveredPaths,
    *,
    selection: Selection,
    verbose: bool,
    logger: CLILogger,
    runlog: RunLog,
) -> None:
    """Print and log a "Found" line for every non-empty bucket in ``work``."""

    if work.projects:
        logger.ok(f"Found {pluralize(len(work.projects), *_PROJECT_LABELS)}")
        runlog.found("projects", work.projects)
        _list_paths(work.projects, show=verbose, logger=logger)
    if work.orphaned:
        logger.warn(f"Found {pluralize(len(work.orphaned), *_ORPHANED_LABELS)}")
        runlog.found("orphaned target directories", work.orphaned)
        _list_paths(work.orphaned, show=verbose or selection is Selection.ORPHANED, logger=logger)
    for kind in STANDALONE_KINDS:
        paths = work.of(kind)
        if not paths:
            continue
        rule = RULES[kind]
        logger.ok(f"Found {pluralize(len(paths), rule.label, rule.plural)}")
        runlog.found(bucket_label(kind), paths)
        _list_paths(paths, show=verbose, logger=logger)


def _list_paths(paths: tuple[Path, ...], *, show: bool, logger: CLILogger) -> None:
    if show:
        for path in paths:
            logger.echo(f"  {path}")


def confirm_cleanup() -> bool:
    """Ask for confirmation; only ``y`` or ``Y`` proceeds."""

    typer.echo("")
    try:
        answer = typer.prompt(CONFIRM_PROMPT, default="", show_default=False, prompt_suffix=" ")
    except typer.Abort:
        return False
    return answer.strip().lower() == "y"


def emit_result(result: CleanResult, *, dry_run: bool, logger: CLILogger) -> None:
    """Print the outcome of one processed item."""

    status = result.status
    if isinstance(status, Failed):
        logger.fail(f"{result.path} ({status.message})")
    elif isinstance(status, Skipped):
        logger.warn(f"{result.path} skipped: {status.reason}")
    elif isinstance(status, TargetOnly):
        logger.warn(f"{result.path} target only ({human_bytes(status.bytes_freed)}): {status.reason}")
    elif dry_run:
        logger.echo(f"[{_dry_run_tag(result)}] {result.path}")
    elif status.bytes_freed is not None:
        logger.ok(f"{result.path} ({human_bytes(status.bytes_freed)})")
    else:
        logger.ok(f"{result.path}")


def _dry_run_tag(result: CleanResult) -> str:
    if result.scope is Scope.PROJECT:
        return "DRY RUN"
    if result.scope is Scope.ORPHANED:
        return "DRY RUN ORPHANED"
    return f"DRY RUN {KIND_TAGS[result.kind]}"


def emit_summary(summary: RunSummary, *, dry_run: bool, logger: CLILogger) -> None:
    """Print the end-of-run summary."""

    logger.echo("")
    if dry_run:
        logger.echo(f"Summary: {pluralize(summary.total, 'item', 'items')} would be cleaned")
        return

    lines: list[str] = []
    if summary.successful:
        lines.append(f"{pluralize(summary.successful, *_PROJECT_LABELS)} cleaned")
    if summary.target_only:
        lines.append(f"{pluralize(summary.target_only, *_PROJECT_LABELS)} cleaned (target only - invalid config)")
    if summary.orphaned_cleaned:
        lines.append(f"{pluralize(summary.orphaned_cleaned, 'orphaned target', 'orphaned targets')} cleaned")
    for kind in STANDALONE_KINDS:
        count = summary.cleaned_by_kind[kind]
        if count:
            rule = RULES[kind]
            lines.append(f"{pluralize(count, rule.label, rule.plural)} cleaned")
    if summary.bytes_freed:
        lines.append(f"{human_bytes(summary.bytes_freed)} total space freed")
    if summary.skipped:
        lines.append(f"{pluralize(summary.skipped, 'item', 'items')} skipped")
    if summary.failed:
        lines.append(f"{pluralize(summary.failed, 'item', 'items')} failed")

    logger.ok("Summary:")
    for line in lines:
        logger.echo(f"  {line}")


__all__ = [
    "CONFIRM_PROMPT",
    "confirm_cleanup",
    "emit_result",
    "emit_summary",
    "load_cleaner_config",
    "report_found",
]
