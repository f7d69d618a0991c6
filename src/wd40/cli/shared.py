# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for the CLI (console output and errors)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

import typer
from rich.console import Console
from rich.text import Text


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


class Tone(str, Enum):
    """Kinds of status line printed by :class:`CLILogger`."""

    INFO = "info"
    OK = "ok"
    WARN = "warn"
    FAIL = "fail"


# Emoji prefix and Rich style per tone.
_TONES: Final[dict[Tone, tuple[str, str]]] = {
    Tone.INFO: ("ℹ️ ", "cyan"),
    Tone.OK: ("✅ ", "green"),
    Tone.WARN: ("⚠️ ", "yellow"),
    Tone.FAIL: ("❌ ", "red"),
}


@dataclass(slots=True)
class CLILogger:
    """Print status lines for one wd-40 run.

    Colour follows Rich's own terminal detection, so piped or captured output
    stays plain.
    """

    console: Console
    use_emoji: bool
    debug_enabled: bool = False

    def fail(self, message: str) -> None:
        self._line(Tone.FAIL, message)

    def warn(self, message: str) -> None:
        self._line(Tone.WARN, message)

    def ok(self, message: str) -> None:
        self._line(Tone.OK, message)

    def info(self, message: str) -> None:
        self._line(Tone.INFO, message)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout using Typer's echo helper."""

        typer.echo(message)

    def debug(self, message: str) -> None:
        """Emit ``message`` only when verbose output was requested."""

        if self.debug_enabled:
            text = Text("[debug] ", style="bold cyan")
            text.append(message, style="dim")
            self.console.print(text)

    def _line(self, tone: Tone, message: str) -> None:
        prefix, style = _TONES[tone]
        self.console.print(Text(f"{prefix if self.use_emoji else ''}{message}", style=style))


def build_cli_logger(*, emoji: bool, debug: bool = False) -> CLILogger:
    """Return a ``CLILogger`` writing to a fresh Rich console on stdout.

    Args:
        emoji: Whether status lines carry emoji prefixes.
        debug: Whether debug (verbose) output should be enabled.

    Returns:
        CLILogger: Logger instance bound to a dedicated Rich console.
    """

    console = Console(highlight=False, soft_wrap=True)
    return CLILogger(console=console, use_emoji=emoji, debug_enabled=debug)


__all__ = ["CLIError", "CLILogger", "Tone", "build_cli_logger"]
