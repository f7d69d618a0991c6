# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model and TOML loading for wd-40."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigError
from .validation import DEFAULT_VALIDATION_TIMEOUT

APP_DIR_NAME: Final[str] = "wd-40"
CONFIG_FILENAME: Final[str] = "config.toml"
CONFIG_SECTION_KEY: Final[str] = "wd40"


def default_jobs() -> int:
    """Return the number of available CPU cores (minimum of 1)."""
    return os.cpu_count() or 1


def _xdg_dir(env_var: str, fallback: str, env: Mapping[str, str]) -> Path:
    value = env.get(env_var)
    if value:
        return Path(value)
    return Path.home() / fallback


def default_log_dir(env: Mapping[str, str] | None = None) -> Path:
    """Return the directory holding per-run log files."""

    return _xdg_dir("XDG_CACHE_HOME", ".cache", env if env is not None else os.environ) / APP_DIR_NAME


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Return the user-level configuration file location."""

    return _xdg_dir("XDG_CONFIG_HOME", ".config", env if env is not None else os.environ) / APP_DIR_NAME / CONFIG_FILENAME


class CleanerConfig(BaseModel):
    """Runtime settings shared by discovery, validation and reporting."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    jobs: int = Field(default_factory=default_jobs, ge=1)
    validation_timeout: float | None = Field(default=DEFAULT_VALIDATION_TIMEOUT, gt=0)
    log_dir: Path = Field(default_factory=default_log_dir)
    emoji: bool = True


def load_config(path: Path | None = None, *, env: Mapping[str, str] | None = None) -> CleanerConfig:
    """Load :class:`CleanerConfig` from ``path`` or the user configuration file.

    An explicit ``path`` must exist. Without one the XDG location is read when
    present and the built-in defaults are used otherwise. Settings may sit at
    the top level of the document or inside a ``[wd40]`` table.

    Args:
        path: Explicit configuration file supplied on the command line.
        env: Environment used to resolve XDG directories.

    Returns:
        CleanerConfig: Validated configuration.

    Raises:
        ConfigError: If the file cannot be read, is not valid TOML, or holds
            unknown or invalid settings.
    """

    if path is None:
        candidate = default_config_path(env)
        if not candidate.is_file():
            return CleanerConfig()
        path = candidate
    elif not path.is_file():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read configuration at {path}: {exc}") from exc
    return config_from_mapping(document, source=str(path))


def config_from_mapping(document: Mapping[str, Any], *, source: str = "<memory>") -> CleanerConfig:
    """Validate a parsed configuration document."""

    payload: dict[str, Any] = dict(document)
    section = payload.pop(CONFIG_SECTION_KEY, None)
    if section is not None:
        if not isinstance(section, Mapping):
            raise ConfigError(f"Configuration at {source}: [{CONFIG_SECTION_KEY}] must be a table")
        payload.update(section)
    try:
        return CleanerConfig.model_validate(payload)
    except PydanticValidationError as exc:
        raise ConfigError(f"Invalid configuration at {source}: {exc}") from exc


def apply_overrides(
    config: CleanerConfig,
    *,
    jobs: int | None = None,
    validation_timeout: float | None = None,
) -> CleanerConfig:
    """Return ``config`` with command-line overrides applied."""

    updated = config.model_copy()
    try:
        if jobs is not None:
            updated.jobs = jobs
        if validation_timeout is not None:
            updated.validation_timeout = validation_timeout
    except PydanticValidationError as exc:
        raise ConfigError(f"Invalid command-line override: {exc}") from exc
    return updated


__all__ = [
    "APP_DIR_NAME",
    "CleanerConfig",
    "apply_overrides",
    "config_from_mapping",
    "default_config_path",
    "default_jobs",
    "default_log_dir",
    "load_config",
]
