# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Mutually exclusive selectors narrowing which discovery buckets are cleaned."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Final

from .kinds import BUILD_CACHE_KINDS, ArtifactKind
from .walker import DiscoveredPaths


class Selection(str, Enum):
    """Bucket selector chosen on the command line."""

    ALL = "all"
    ORPHANED = "orphaned"
    RUST = "rust"
    NODE = "node"
    PYTHON = "python"
    SCCACHE = "sccache"
    HASKELL = "haskell"
    RUSTUP = "rustup"
    NEXT = "next"
    CARGO_NIX = "cargo-nix"


SELECTION_KINDS: Final[dict[Selection, ArtifactKind]] = {
    Selection.NODE: ArtifactKind.NODE_MODULES,
    Selection.PYTHON: ArtifactKind.PYTHON_VENV,
    Selection.SCCACHE: ArtifactKind.SCCACHE,
    Selection.HASKELL: ArtifactKind.STACK_WORK,
    Selection.RUSTUP: ArtifactKind.RUSTUP,
    Selection.NEXT: ArtifactKind.NEXT_BUILD,
    Selection.CARGO_NIX: ArtifactKind.CARGO_NIX,
}

# Build-cache directories are cleaned through their projects or the orphan bucket.
STANDALONE_KINDS: Final[tuple[ArtifactKind, ...]] = tuple(
    kind for kind in ArtifactKind if kind not in BUILD_CACHE_KINDS
)


def select(discovered: DiscoveredPaths, selection: Selection) -> DiscoveredPaths:
    """Return the part of ``discovered`` that ``selection`` asks to process.

    The result keeps only buckets that the orchestrator acts on: projects,
    orphaned build caches, and the standalone artifact kinds.
    """

    keep_projects = selection in (Selection.ALL, Selection.RUST)
    keep_orphaned = selection in (Selection.ALL, Selection.RUST, Selection.ORPHANED)
    if selection is Selection.ALL:
        kinds = set(STANDALONE_KINDS)
    elif selection in SELECTION_KINDS:
        kinds = {SELECTION_KINDS[selection]}
    else:
        kinds = set()

    return DiscoveredPaths(
        projects=discovered.projects if keep_projects else (),
        orphaned=discovered.orphaned if keep_orphaned else (),
        artifacts=MappingProxyType(
            {kind: discovered.of(kind) if kind in kinds else () for kind in ArtifactKind}
        ),
    )


__all__ = ["SELECTION_KINDS", "STANDALONE_KINDS", "Selection", "select"]
