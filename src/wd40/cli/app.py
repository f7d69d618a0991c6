# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Typer application exposing the ``wd-40`` command."""

from __future__ import annotations

from typing import Annotated

import typer

from .. import __version__
from ..cleaner import CleanOptions, CleanResult, run_cleanup, summarize
from ..errors import Wd40Error
from ..runlog import RunLog, default_log_path
from ..selection import select
from ..validation import CargoProjectValidator
from ..walker import discover
from ._clean_cli_models import (
    CARGO_NIX_ONLY_OPTION,
    CONFIG_OPTION,
    DRY_RUN_OPTION,
    EMOJI_OPTION,
    FORCE_OPTION,
    HASKELL_ONLY_OPTION,
    JOBS_OPTION,
    LOG_FILE_OPTION,
    NEXT_ONLY_OPTION,
    NO_CONFIRM_OPTION,
    NODE_ONLY_OPTION,
    ORPHANED_ONLY_OPTION,
    PATH_ARGUMENT,
    PYTHON_ONLY_OPTION,
    RUST_ONLY_OPTION,
    RUSTUP_ONLY_OPTION,
    SCCACHE_ONLY_OPTION,
    STRICT_OPTION,
    TIMEOUT_OPTION,
    VERBOSE_OPTION,
    CleanCLIOptions,
    SelectorFlags,
    build_clean_options,
)
from ._clean_cli_services import (
    confirm_cleanup,
    emit_result,
    emit_summary,
    load_cleaner_config,
    report_found,
)
from .shared import CLIError, CLILogger, build_cli_logger

app = typer.Typer(
    name="wd-40",
    help="Find and remove regenerable build artifacts (Rust, Node.js, Python, Haskell and more).",
    add_completion=False,
    no_args_is_help=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"wd-40 {__version__}")
        raise typer.Exit(code=0)


@app.command()
def main(
    path: PATH_ARGUMENT = None,
    dry_run: DRY_RUN_OPTION = False,
    verbose: VERBOSE_OPTION = False,
    no_confirm: NO_CONFIRM_OPTION = False,
    force: FORCE_OPTION = False,
    strict: STRICT_OPTION = False,
    orphaned_only: ORPHANED_ONLY_OPTION = False,
    rust_only: RUST_ONLY_OPTION = False,
    node_only: NODE_ONLY_OPTION = False,
    python_only: PYTHON_ONLY_OPTION = False,
    sccache_only: SCCACHE_ONLY_OPTION = False,
    haskell_only: HASKELL_ONLY_OPTION = False,
    rustup_only: RUSTUP_ONLY_OPTION = False,
    next_only: NEXT_ONLY_OPTION = False,
    cargo_nix_only: CARGO_NIX_ONLY_OPTION = False,
    log_file: LOG_FILE_OPTION = None,
    config: CONFIG_OPTION = None,
    jobs: JOBS_OPTION = None,
    timeout: TIMEOUT_OPTION = None,
    emoji: EMOJI_OPTION = None,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Clean build artifacts beneath PATH."""

    options = build_clean_options(
        path,
        dry_run=dry_run,
        verbose=verbose,
        no_confirm=no_confirm,
        force=force,
        strict=strict,
        selectors=SelectorFlags(
            orphaned_only=orphaned_only,
            rust_only=rust_only,
            node_only=node_only,
            python_only=python_only,
            sccache_only=sccache_only,
            haskell_only=haskell_only,
            rustup_only=rustup_only,
            next_only=next_only,
            cargo_nix_only=cargo_nix_only,
        ),
        log_file=log_file,
        config=config,
        jobs=jobs,
        timeout=timeout,
        emoji=emoji,
    )
    logger = build_cli_logger(emoji=emoji if emoji is not None else True, debug=verbose)
    try:
        _execute(options, logger)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    raise typer.Exit(code=0)


def _execute(options: CleanCLIOptions, logger: CLILogger) -> None:
    """Run one cleanup pass; setup failures surface as :class:`CLIError`."""

    selection = options.selectors.resolve()
    cfg = load_cleaner_config(options)
    if options.emoji is None:
        logger.use_emoji = cfg.emoji

    log_path = options.log_file or default_log_path(cfg.log_dir)
    try:
        runlog = RunLog(log_path, verbose=options.verbose)
    except Wd40Error as exc:
        raise CLIError(str(exc), exit_code=1) from exc

    with runlog:
        runlog.header(options.root)
        if not options.root.is_dir():
            raise CLIError(f"Path is not a directory: {options.root}", exit_code=1)

        logger.info("WD-40 - Project Artifact Cleaner")
        logger.debug(f"Searching for project artifacts in: {options.root}")
        work = select(discover(options.root, jobs=cfg.jobs), selection)

        if work.is_empty:
            logger.warn("No artifacts found.")
            runlog.nothing_found()
            _emit_log_location(runlog, logger)
            return

        report_found(work, selection=selection, verbose=options.verbose, logger=logger, runlog=runlog)

        if not options.no_confirm and not options.dry_run and not confirm_cleanup():
            logger.fail("Aborted.")
            runlog.aborted()
            return

        runlog.cleaning_start()

        def _on_result(result: CleanResult) -> None:
            emit_result(result, dry_run=options.dry_run, logger=logger)
            runlog.result(result)

        results = run_cleanup(
            work,
            options=CleanOptions(dry_run=options.dry_run, force=options.force, strict=options.strict),
            validator=CargoProjectValidator(timeout=cfg.validation_timeout),
            on_result=_on_result,
        )
        summary = summarize(results)
        emit_summary(summary, dry_run=options.dry_run, logger=logger)
        runlog.summary(summary, dry_run=options.dry_run)
        _emit_log_location(runlog, logger)


def _emit_log_location(runlog: RunLog, logger: CLILogger) -> None:
    logger.echo("")
    logger.echo(f"Log file: {runlog.path}")


def run() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "main", "run"]
