# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Formatting helpers shared by the console and the run log."""

from __future__ import annotations

from typing import Final

_BYTE_UNITS: Final[tuple[str, ...]] = ("B", "KB", "MB", "GB", "TB")
_STEP: Final[float] = 1024.0


def human_bytes(size: int) -> str:
    """Return ``size`` rendered with binary units, e.g. ``512 B`` or ``1.50 KB``."""

    if size <= 0:
        return "0 B"
    value = float(size)
    unit = 0
    while value >= _STEP and unit < len(_BYTE_UNITS) - 1:
        value /= _STEP
        unit += 1
    if unit == 0:
        return f"{size} {_BYTE_UNITS[0]}"
    return f"{value:.2f} {_BYTE_UNITS[unit]}"


def pluralize(count: int, singular: str, plural: str) -> str:
    """Return ``"<count> <label>"`` choosing the label by ``count``."""

    return f"{count} {singular if count == 1 else plural}"


__all__ = ["human_bytes", "pluralize"]
