# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared across the cleaner."""

from __future__ import annotations

from pathlib import Path


class Wd40Error(RuntimeError):
    """Base class for errors raised by wd-40."""


class ConfigError(Wd40Error):
    """Raised when configuration files cannot be read or fail validation."""


class ValidationError(Wd40Error):
    """Raised when a project's own toolchain rejects its metadata."""

    def __init__(self, reason: str) -> None:
        """Initialise the error with the first diagnostic line from the toolchain.

        Args:
            reason: Single-line explanation reported to the user.
        """

        super().__init__(reason)
        self.reason = reason


class DeletionError(Wd40Error):
    """Raised when an artifact directory cannot be removed."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        """Initialise the error with the failing path and the underlying cause.

        Args:
            path: Directory whose removal failed.
            cause: Exception raised by the filesystem layer.
        """

        super().__init__(f"Failed to delete {path}: {cause}")
        self.path = path
        self.cause = cause


__all__ = ["ConfigError", "DeletionError", "ValidationError", "Wd40Error"]
