# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared data structures for the wd-40 command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

from ..selection import Selection
from .shared import CLIError

PATH_ARGUMENT = Annotated[
    Path | None,
    typer.Argument(help="Directory to scan (defaults to the current directory).", show_default=False),
]
DRY_RUN_OPTION = Annotated[
    bool,
    typer.Option("--dry-run", "-n", help="Show what would be cleaned without deleting anything."),
]
VERBOSE_OPTION = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="List discovered paths and record debug details."),
]
NO_CONFIRM_OPTION = Annotated[
    bool,
    typer.Option("--no-confirm", "-y", help="Skip the confirmation prompt."),
]
FORCE_OPTION = Annotated[
    bool,
    typer.Option("--force", "-f", help="Skip project validation."),
]
STRICT_OPTION = Annotated[
    bool,
    typer.Option("--strict", "-s", help="Skip invalid projects instead of cleaning their target directory."),
]
ORPHANED_ONLY_OPTION = Annotated[
    bool,
    typer.Option("--orphaned-only", help="Only clean target directories without a Cargo.toml sibling."),
]
RUST_ONLY_OPTION = Annotated[bool, typer.Option("--rust-only", help="Only clean Rust artifacts.")]
NODE_ONLY_OPTION = Annotated[bool, typer.Option("--node-only", help="Only clean node_modules directories.")]
PYTHON_ONLY_OPTION = Annotated[bool, typer.Option("--python-only", help="Only clean Python virtual environments.")]
SCCACHE_ONLY_OPTION = Annotated[bool, typer.Option("--sccache-only", help="Only clean sccache directories.")]
HASKELL_ONLY_OPTION = Annotated[bool, typer.Option("--haskell-only", help="Only clean Stack work directories.")]
RUSTUP_ONLY_OPTION = Annotated[bool, typer.Option("--rustup-only", help="Only clean rustup directories.")]
NEXT_ONLY_OPTION = Annotated[bool, typer.Option("--next-only", help="Only clean Next.js build directories.")]
CARGO_NIX_ONLY_OPTION = Annotated[bool, typer.Option("--cargo-nix-only", help="Only clean cargo-nix directories.")]
LOG_FILE_OPTION = Annotated[
    Path | None,
    typer.Option("--log-file", help="Write the run log to this file.", show_default=False),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", help="Read settings from this TOML file.", show_default=False),
]
JOBS_OPTION = Annotated[
    int | None,
    typer.Option("--jobs", "-j", min=1, help="Discovery worker count.", show_default=False),
]
TIMEOUT_OPTION = Annotated[
    float | None,
    typer.Option("--timeout", min=0.001, help="Seconds allowed per project validation.", show_default=False),
]
EMOJI_OPTION = Annotated[
    bool | None,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output.", show_default=False),
]


@dataclass(slots=True)
class SelectorFlags:
    """Raw selector switches as supplied on the command line."""

    orphaned_only: bool = False
    rust_only: bool = False
    node_only: bool = False
    python_only: bool = False
    sccache_only: bool = False
    haskell_only: bool = False
    rustup_only: bool = False
    next_only: bool = False
    cargo_nix_only: bool = False

    def resolve(self) -> Selection:
        """Return the single selection requested, or :attr:`Selection.ALL`.

        Raises:
            CLIError: If more than one selector is set (usage error, exit 2).
        """

        candidates = (
            ("--orphaned-only", self.orphaned_only, Selection.ORPHANED),
            ("--rust-only", self.rust_only, Selection.RUST),
            ("--node-only", self.node_only, Selection.NODE),
            ("--python-only", self.python_only, Selection.PYTHON),
            ("--sccache-only", self.sccache_only, Selection.SCCACHE),
            ("--haskell-only", self.haskell_only, Selection.HASKELL),
            ("--rustup-only", self.rustup_only, Selection.RUSTUP),
            ("--next-only", self.next_only, Selection.NEXT),
            ("--cargo-nix-only", self.cargo_nix_only, Selection.CARGO_NIX),
        )
        chosen = [(flag, selection) for flag, enabled, selection in candidates if enabled]
        if len(chosen) > 1:
            names = ", ".join(flag for flag, _ in chosen)
            raise CLIError(f"Selectors are mutually exclusive: {names}", exit_code=2)
        return chosen[0][1] if chosen else Selection.ALL


@dataclass(slots=True)
class CleanCLIOptions:
    """Capture CLI overrides supplied to the wd-40 command."""

    root: Path
    dry_run: bool
    verbose: bool
    no_confirm: bool
    force: bool
    strict: bool
    selectors: SelectorFlags
    log_file: Path | None
    config: Path | None
    jobs: int | None
    timeout: float | None
    emoji: bool | None


def build_clean_options(
    path: Path | None,
    *,
    dry_run: bool,
    verbose: bool,
    no_confirm: bool,
    force: bool,
    strict: bool,
    selectors: SelectorFlags,
    log_file: Path | None,
    config: Path | None,
    jobs: int | None,
    timeout: float | None,
    emoji: bool | None,
) -> CleanCLIOptions:
    """Construct ``CleanCLIOptions`` from Typer command parameters."""

    return CleanCLIOptions(
        root=(path if path is not None else Path.cwd()).absolute(),
        dry_run=dry_run,
        verbose=verbose,
        no_confirm=no_confirm,
        force=force,
        strict=strict,
        selectors=selectors,
        log_file=log_file,
        config=config,
        jobs=jobs,
        timeout=timeout,
        emoji=emoji,
    )


__all__ = [
    "CARGO_NIX_ONLY_OPTION",
    "CONFIG_OPTION",
    "CleanCLIOptions",
    "DRY_RUN_OPTION",
    "EMOJI_OPTION",
    "FORCE_OPTION",
    "HASKELL_ONLY_OPTION",
    "JOBS_OPTION",
    "LOG_FILE_OPTION",
    "NEXT_ONLY_OPTION",
    "NODE_ONLY_OPTION",
    "NO_CONFIRM_OPTION",
    "ORPHANED_ONLY_OPTION",
    "PATH_ARGUMENT",
    "PYTHON_ONLY_OPTION",
    "RUSTUP_ONLY_OPTION",
    "RUST_ONLY_OPTION",
    "SCCACHE_ONLY_OPTION",
    "STRICT_OPTION",
    "SelectorFlags",
    "TIMEOUT_OPTION",
    "VERBOSE_OPTION",
    "build_clean_options",
]
