# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for bucket selection."""

from __future__ import annotations

import pytest

from wd40.kinds import BUILD_CACHE_KINDS, ArtifactKind
from wd40.selection import SELECTION_KINDS, STANDALONE_KINDS, Selection, select
from wd40.walker import discover


@pytest.fixture
def discovered(seeded_tree):
    return discover(seeded_tree.root)


def test_all_keeps_every_actionable_bucket(discovered) -> None:
    work = select(discovered, Selection.ALL)
    assert work.projects == discovered.projects
    assert work.orphaned == discovered.orphaned
    for kind in STANDALONE_KINDS:
        assert work.of(kind) == discovered.of(kind)
    for kind in BUILD_CACHE_KINDS:
        assert work.of(kind) == ()


def test_rust_keeps_projects_and_orphans_only(discovered) -> None:
    work = select(discovered, Selection.RUST)
    assert len(work.projects) == 3
    assert len(work.orphaned) == 1
    assert all(work.of(kind) == () for kind in ArtifactKind)


def test_orphaned_keeps_only_orphans(discovered) -> None:
    work = select(discovered, Selection.ORPHANED)
    assert work.projects == ()
    assert work.orphaned == discovered.orphaned


@pytest.mark.parametrize("selection", list(SELECTION_KINDS))
def test_ecosystem_selector_keeps_a_single_kind(discovered, selection: Selection) -> None:
    work = select(discovered, selection)
    kept = SELECTION_KINDS[selection]
    assert work.projects == () and work.orphaned == ()
    assert work.of(kept) == discovered.of(kept)
    assert all(work.of(kind) == () for kind in ArtifactKind if kind is not kept)
