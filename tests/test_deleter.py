# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for guarded artifact removal."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from wd40.deleter import (
    DRY_RUN_SIZE,
    delete_artifact,
    delete_orphaned_target_dir,
    delete_target_dir,
)
from wd40.errors import DeletionError
from wd40.kinds import ArtifactKind
from wd40.sizing import size_of


def _build(tree, kind: ArtifactKind) -> Path:
    if kind is ArtifactKind.RUST_TARGET:
        return tree.rust_project("app") / "target"
    if kind is ArtifactKind.RUST_ANALYZER_TARGET:
        return tree.rust_project("app", variant="target-ra") / "target-ra"
    builders = {
        ArtifactKind.NODE_MODULES: tree.node_project,
        ArtifactKind.PYTHON_VENV: tree.venv,
        ArtifactKind.SCCACHE: tree.sccache,
        ArtifactKind.STACK_WORK: tree.stack_work,
        ArtifactKind.RUSTUP: tree.rustup,
        ArtifactKind.NEXT_BUILD: tree.next_build,
        ArtifactKind.CARGO_NIX: tree.cargo_nix,
    }
    return builders[kind]("proj")


def _snapshot(root: Path) -> set[tuple[str, int]]:
    return {(str(path), path.stat().st_size if path.is_file() else -1) for path in root.rglob("*")}


@pytest.mark.parametrize("kind", list(ArtifactKind))
def test_delete_removes_directory_and_reports_size(tree, kind: ArtifactKind) -> None:
    path = _build(tree, kind)
    expected = size_of(path)
    assert expected > 0
    assert delete_artifact(kind, path) == expected
    assert not path.exists()
    assert path.parent.exists()


@pytest.mark.parametrize("kind", list(ArtifactKind))
def test_dry_run_leaves_tree_untouched(tree, kind: ArtifactKind) -> None:
    path = _build(tree, kind)
    before = _snapshot(tree.root)
    assert delete_artifact(kind, path, dry_run=True) == DRY_RUN_SIZE
    assert _snapshot(tree.root) == before


@pytest.mark.parametrize("kind", list(ArtifactKind))
def test_second_delete_is_a_no_op(tree, kind: ArtifactKind) -> None:
    path = _build(tree, kind)
    assert delete_artifact(kind, path) is not None
    assert delete_artifact(kind, path) is None


def test_non_matching_directory_is_left_alone(tmp_path: Path) -> None:
    target = tmp_path / "target"
    (target / "keep").mkdir(parents=True)
    assert delete_artifact(ArtifactKind.RUST_TARGET, target) is None
    assert (target / "keep").exists()


def test_owned_target_is_not_deleted_as_orphan(tree) -> None:
    target = tree.rust_project("app") / "target"
    assert delete_orphaned_target_dir(target) is None
    assert target.exists()
    assert delete_target_dir(target) is not None
    assert not target.exists()


def test_orphaned_target_is_not_deleted_as_owned(tree) -> None:
    target = tree.orphaned_target()
    assert delete_target_dir(target) is None
    assert target.exists()
    assert delete_orphaned_target_dir(target) is not None
    assert not target.exists()


def test_target_dir_helpers_accept_analyzer_variant(tree) -> None:
    target = tree.rust_project("app", variant="target-ra") / "target-ra"
    assert delete_target_dir(target, dry_run=True) == DRY_RUN_SIZE
    assert delete_target_dir(target) is not None


def test_removal_failure_raises_deletion_error(tree, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tree.rust_project("app") / "target"

    def _refuse(path: Path) -> None:
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr(shutil, "rmtree", _refuse)
    with pytest.raises(DeletionError) as excinfo:
        delete_artifact(ArtifactKind.RUST_TARGET, target)
    assert excinfo.value.path == target
    assert "Failed to delete" in str(excinfo.value)
    assert target.exists()
