# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the per-project cleanup state machine and run aggregation."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

import pytest

from wd40.cleaner import (
    CleanOptions,
    CleanResult,
    Failed,
    Scope,
    Skipped,
    Success,
    TargetOnly,
    clean_artifact,
    clean_orphaned,
    clean_project,
    run_cleanup,
    summarize,
)
from wd40.errors import ValidationError
from wd40.kinds import ArtifactKind
from wd40.selection import Selection, select
from wd40.sizing import size_of
from wd40.walker import discover


class StubValidator:
    """Validator returning a fixed verdict and recording its calls."""

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason
        self.calls: list[Path] = []

    def validate(self, project_dir: Path) -> None:
        self.calls.append(project_dir)
        if self.reason is not None:
            raise ValidationError(self.reason)


def test_valid_project_is_cleaned(tree) -> None:
    project = tree.rust_project("app")
    expected = size_of(project / "target")
    result = clean_project(project, options=CleanOptions(), validator=StubValidator())
    assert result.status == Success(expected)
    assert not (project / "target").exists()
    assert (project / "Cargo.toml").exists()


def test_valid_project_sums_every_build_cache_variant(tree) -> None:
    project = tree.rust_project("app")
    tree.build_cache(project / "target-ra", payload=500)
    expected = size_of(project / "target") + size_of(project / "target-ra")
    result = clean_project(project, options=CleanOptions(), validator=StubValidator())
    assert result.bytes_freed == expected
    assert not (project / "target").exists()
    assert not (project / "target-ra").exists()


def test_valid_project_without_target_reports_nothing_freed(tree) -> None:
    project = tree.rust_project("app", target=False)
    result = clean_project(project, options=CleanOptions(), validator=StubValidator())
    assert result.status == Success(None)


def test_valid_project_dry_run_reports_success_without_size(tree) -> None:
    project = tree.rust_project("app")
    result = clean_project(project, options=CleanOptions(dry_run=True), validator=StubValidator())
    assert result.status == Success(None)
    assert (project / "target").exists()


def test_force_skips_validation(tree) -> None:
    project = tree.rust_project("app")
    validator = StubValidator("broken manifest")
    result = clean_project(project, options=CleanOptions(force=True), validator=validator)
    assert result.is_success
    assert validator.calls == []


def test_invalid_project_in_strict_mode_is_skipped(tree) -> None:
    project = tree.rust_project("app")
    result = clean_project(project, options=CleanOptions(strict=True), validator=StubValidator("broken"))
    assert result.status == Skipped("broken")
    assert (project / "target").exists()


def test_invalid_project_cleans_target_only(tree) -> None:
    project = tree.rust_project("app")
    tree.build_cache(project / "target-ra")
    expected = size_of(project / "target")
    result = clean_project(project, options=CleanOptions(), validator=StubValidator("broken"))
    assert result.status == TargetOnly(expected, "broken")
    assert not (project / "target").exists()
    assert (project / "target-ra").exists()


def test_invalid_project_dry_run_reports_zero(tree) -> None:
    project = tree.rust_project("app")
    result = clean_project(project, options=CleanOptions(dry_run=True), validator=StubValidator("broken"))
    assert result.status == TargetOnly(0, "broken")
    assert (project / "target").exists()


def test_invalid_project_without_target_is_skipped(tree) -> None:
    project = tree.rust_project("app", target=False)
    result = clean_project(project, options=CleanOptions(), validator=StubValidator("broken"))
    assert result.status == Skipped("broken")


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlinked_target_is_left_alone(tree, tmp_path_factory: pytest.TempPathFactory) -> None:
    project = tree.rust_project("app", target=False)
    real = tree.build_cache(tmp_path_factory.mktemp("tmpfs") / "target")
    (project / "target").symlink_to(real, target_is_directory=True)
    result = clean_project(project, options=CleanOptions(), validator=StubValidator())
    assert result.status == Success(None)
    assert (project / "target").is_symlink()
    assert (real / "CACHEDIR.TAG").exists()


def test_deletion_failure_yields_failed(tree, monkeypatch: pytest.MonkeyPatch) -> None:
    project = tree.rust_project("app")

    def _refuse(path: Path) -> None:
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr(shutil, "rmtree", _refuse)
    result = clean_project(project, options=CleanOptions(), validator=StubValidator())
    assert isinstance(result.status, Failed)
    assert "Failed to delete" in result.status.message
    assert result.bytes_freed is None


def test_orphan_and_artifact_outcomes(tree) -> None:
    orphan = tree.orphaned_target()
    modules = tree.node_project("web")

    cleaned = clean_orphaned(orphan)
    assert cleaned.scope is Scope.ORPHANED
    assert cleaned.is_success and cleaned.bytes_freed

    removed = clean_artifact(ArtifactKind.NODE_MODULES, modules)
    assert removed.scope is Scope.ARTIFACT and removed.is_success
    gone = clean_artifact(ArtifactKind.NODE_MODULES, modules)
    assert gone.status == Skipped("no longer matches node-modules")


def test_artifact_dry_run_is_success_without_size(tree) -> None:
    venv = tree.venv("py")
    result = clean_artifact(ArtifactKind.PYTHON_VENV, venv, dry_run=True)
    assert result.status == Success(None)
    assert venv.exists()


def test_run_cleanup_processes_every_bucket_in_order(seeded_tree) -> None:
    work = select(discover(seeded_tree.root), Selection.ALL)
    seen: list[CleanResult] = []
    results = run_cleanup(work, options=CleanOptions(), validator=StubValidator(), on_result=seen.append)

    assert results == seen
    scopes = [result.scope for result in results]
    assert scopes[:3] == [Scope.PROJECT] * 3
    assert scopes[3] is Scope.ORPHANED
    assert all(scope is Scope.ARTIFACT for scope in scopes[4:])

    summary = summarize(results)
    assert summary.total == 18
    assert summary.projects == 3
    assert summary.successful == 3
    assert summary.orphaned_cleaned == 1
    assert summary.cleaned_by_kind[ArtifactKind.NODE_MODULES] == 2
    assert summary.cleaned_by_kind[ArtifactKind.CARGO_NIX] == 2
    assert summary.failed == summary.skipped == 0
    assert summary.bytes_freed == sum(result.bytes_freed or 0 for result in results)
    assert not any((seeded_tree.root / f"rust-project-{index}" / "target").exists() for index in (1, 2, 3))


def test_summary_counts_each_status() -> None:
    results = [
        CleanResult(Path("/a"), Success(10)),
        CleanResult(Path("/b"), TargetOnly(5, "bad")),
        CleanResult(Path("/c"), Skipped("bad")),
        CleanResult(Path("/d"), Failed("boom")),
        CleanResult(Path("/e/target"), Success(7), ArtifactKind.RUST_TARGET, Scope.ORPHANED),
        CleanResult(Path("/f/.venv"), Success(None), ArtifactKind.PYTHON_VENV, Scope.ARTIFACT),
    ]
    summary = summarize(results)
    assert (summary.successful, summary.target_only, summary.skipped, summary.failed) == (1, 1, 1, 1)
    assert summary.projects == 4
    assert summary.orphaned_cleaned == 1
    assert summary.cleaned_by_kind[ArtifactKind.PYTHON_VENV] == 1
    assert summary.bytes_freed == 22
