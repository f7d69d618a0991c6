# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Ask a project's own toolchain whether its metadata loads."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final, Protocol

from .errors import ValidationError
from .process import TIMEOUT_RETURNCODE, CommandOptions, run_command

LOGGER = logging.getLogger(__name__)

CARGO_METADATA_COMMAND: Final[tuple[str, ...]] = ("cargo", "metadata", "--format-version=1", "--no-deps")
DEFAULT_VALIDATION_TIMEOUT: Final[float] = 120.0
_FALLBACK_REASON: Final[str] = "Invalid project"


class ProjectValidator(Protocol):
    """Validate an owning-project directory before its artifacts are removed."""

    def validate(self, project_dir: Path) -> None:
        """Raise :class:`ValidationError` when ``project_dir`` is not a loadable project."""
        ...


class CargoProjectValidator:
    """Validate Cargo projects with a read-only ``cargo metadata`` query."""

    def __init__(
        self,
        *,
        timeout: float | None = DEFAULT_VALIDATION_TIMEOUT,
        command: tuple[str, ...] = CARGO_METADATA_COMMAND,
    ) -> None:
        """Create a validator bound to an optional wall-clock limit.

        Args:
            timeout: Seconds to wait for the toolchain; ``None`` waits forever.
                A timeout counts as a validation failure.
            command: Metadata query executed inside the project directory.
        """

        self._timeout = timeout
        self._command = command

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def validate(self, project_dir: Path) -> None:
        """Run the metadata query inside ``project_dir``.

        Args:
            project_dir: Directory holding ``Cargo.toml``.

        Raises:
            ValidationError: If the query cannot run, fails, or times out. The
                reason carries the first line of the tool's diagnostics.
        """

        options = CommandOptions(cwd=project_dir, timeout=self._timeout)
        try:
            completed = run_command(self._command, options=options)
        except OSError as exc:
            raise ValidationError(f"Failed to execute {' '.join(self._command[:2])}: {exc}") from exc

        if completed.returncode == 0:
            return
        lines = [line.strip() for line in (completed.stderr or "").splitlines() if line.strip()]
        if completed.returncode == TIMEOUT_RETURNCODE and lines:
            reason = lines[-1]
        else:
            reason = lines[0] if lines else _FALLBACK_REASON
        LOGGER.debug("Validation failed for %s: %s", project_dir, reason)
        raise ValidationError(reason)


__all__ = [
    "CARGO_METADATA_COMMAND",
    "CargoProjectValidator",
    "DEFAULT_VALIDATION_TIMEOUT",
    "ProjectValidator",
]
