# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Predicates deciding whether a directory is a disposable artifact directory.

Every check is read-only. Filesystem errors count as "marker absent", so an
unreadable candidate is never classified as disposable.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

from .kinds import (
    BUILD_CACHE_KINDS,
    CARGO_MANIFEST,
    RULES,
    ArtifactKind,
    ArtifactRule,
    ContentRule,
    kinds_for_basename,
)

_GLOB_CHARS: Final[frozenset[str]] = frozenset("*?[")


def matches(kind: ArtifactKind, path: Path) -> bool:
    """Return whether ``path`` is a genuine artifact directory of ``kind``.

    Checks run cheapest first and short-circuit: basename, negative markers,
    positive evidence, then the parent relationship. A symlinked candidate
    never matches.

    Args:
        kind: Artifact kind to test against.
        path: Candidate directory.

    Returns:
        bool: ``True`` only when every check of the kind's rule passes.
    """

    rule = RULES[kind]
    if path.name not in rule.basenames:
        return False
    if _is_symlink(path):
        return False
    if any(_exists(path / marker) for marker in rule.negative_markers):
        return False
    if not _has_positive_evidence(path, rule):
        return False
    if rule.parent_markers and not _satisfies_parent(path, rule):
        return False
    return True


def classify(path: Path) -> ArtifactKind | None:
    """Return the artifact kind of ``path`` or ``None`` when nothing matches."""

    for kind in kinds_for_basename(path.name):
        if matches(kind, path):
            return kind
    return None


def is_owned(path: Path) -> bool:
    """Return whether the build-cache directory ``path`` sits beside a ``Cargo.toml``."""

    parent = path.parent
    if parent == path:
        return False
    return _exists(parent / CARGO_MANIFEST)


def is_orphaned(path: Path) -> bool:
    """Return whether the build-cache directory ``path`` lost its owning project."""

    return not is_owned(path)


def is_rust_target_dir(path: Path) -> bool:
    """Return whether ``path`` is a Cargo ``target`` or ``target-ra`` directory."""

    return any(matches(kind, path) for kind in BUILD_CACHE_KINDS)


def is_node_modules_dir(path: Path) -> bool:
    return matches(ArtifactKind.NODE_MODULES, path)


def is_python_venv_dir(path: Path) -> bool:
    return matches(ArtifactKind.PYTHON_VENV, path)


def is_sccache_dir(path: Path) -> bool:
    return matches(ArtifactKind.SCCACHE, path)


def is_stack_work_dir(path: Path) -> bool:
    return matches(ArtifactKind.STACK_WORK, path)


def is_rustup_dir(path: Path) -> bool:
    return matches(ArtifactKind.RUSTUP, path)


def is_next_dir(path: Path) -> bool:
    return matches(ArtifactKind.NEXT_BUILD, path)


def is_cargo_nix_dir(path: Path) -> bool:
    return matches(ArtifactKind.CARGO_NIX, path)


def _is_symlink(path: Path) -> bool:
    try:
        return path.is_symlink()
    except OSError:
        return False


def _exists(path: Path) -> bool:
    """Return whether ``path`` exists, treating filesystem errors as absence."""

    try:
        return path.exists()
    except OSError:
        return False


def _has_positive_evidence(path: Path, rule: ArtifactRule) -> bool:
    """Return whether ``path`` carries the positive evidence demanded by ``rule``.

    Args:
        path: Candidate directory.
        rule: Rule describing marker groups and the structural fallback.

    Returns:
        bool: ``True`` when every marker group is satisfied or, failing that,
        the structural content rule holds.
    """

    if rule.marker_groups and all(
        any(_exists(path / marker) for marker in group) for group in rule.marker_groups
    ):
        return True
    return _has_content(path, rule.content)


def _has_content(path: Path, content: ContentRule) -> bool:
    """Return whether ``path`` holds the structural content described by ``content``."""

    if content is ContentRule.NONE:
        return False
    try:
        with os.scandir(path) as entries:
            for entry in entries:
                if content is ContentRule.ANY_ENTRY:
                    return True
                try:
                    if entry.is_dir():
                        return True
                except OSError:
                    continue
    except OSError:
        return False
    return False


def _satisfies_parent(path: Path, rule: ArtifactRule) -> bool:
    """Return whether the parent of ``path`` carries a project marker for ``rule``.

    A root candidate has no parent and fails closed unless the rule's
    definitive marker is present.
    """

    parent = path.parent
    if parent != path and any(_parent_has(parent, pattern) for pattern in rule.parent_markers):
        return True
    return rule.definitive_marker is not None and _exists(path / rule.definitive_marker)


def _parent_has(parent: Path, pattern: str) -> bool:
    """Return whether ``parent`` contains an entry matching ``pattern``."""

    if _GLOB_CHARS.isdisjoint(pattern):
        return _exists(parent / pattern)
    try:
        return any(True for _ in parent.glob(pattern))
    except OSError:
        return False


__all__ = [
    "classify",
    "is_cargo_nix_dir",
    "is_next_dir",
    "is_node_modules_dir",
    "is_orphaned",
    "is_owned",
    "is_python_venv_dir",
    "is_rust_target_dir",
    "is_rustup_dir",
    "is_sccache_dir",
    "is_stack_work_dir",
    "matches",
]
