# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


def write_bytes(path: Path, size: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


class ArtifactTree:
    """Builder for on-disk project and artifact layouts."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def rust_project(self, name: str, *, target: bool = True, variant: str = "target", payload: int = 100) -> Path:
        project = self.root / name
        (project / "src").mkdir(parents=True, exist_ok=True)
        (project / "Cargo.toml").write_text(f'[package]\nname = "{name}"\nversion = "0.1.0"\n', encoding="utf-8")
        (project / "src" / "main.rs").write_text("fn main() {}\n", encoding="utf-8")
        if target:
            self.build_cache(project / variant, payload=payload)
        return project

    def build_cache(self, target: Path, *, payload: int = 100) -> Path:
        write_bytes(target / "CACHEDIR.TAG", 10)
        write_bytes(target / ".rustc_info.json", 20)
        write_bytes(target / "debug" / "app", payload)
        return target

    def orphaned_target(self, name: str = "orphaned-workspace") -> Path:
        return self.build_cache(self.root / name / "target")

    def node_project(self, name: str) -> Path:
        project = self.root / name
        project.mkdir(parents=True, exist_ok=True)
        (project / "package.json").write_text('{"name": "%s"}\n' % name, encoding="utf-8")
        modules = project / "node_modules"
        write_bytes(modules / "lodash" / "index.js", 50)
        (modules / ".bin").mkdir(exist_ok=True)
        return modules

    def venv(self, name: str, dirname: str = ".venv") -> Path:
        venv = self.root / name / dirname
        write_bytes(venv / "pyvenv.cfg", 30)
        write_bytes(venv / "bin" / "activate", 40)
        (venv / "lib" / "python3.12" / "site-packages").mkdir(parents=True)
        return venv

    def sccache(self, name: str) -> Path:
        return write_bytes(self.root / name / ".sccache" / "0" / "entry", 25).parent.parent

    def stack_work(self, name: str) -> Path:
        project = self.root / name
        project.mkdir(parents=True, exist_ok=True)
        (project / "stack.yaml").write_text("resolver: lts-21.0\n", encoding="utf-8")
        return write_bytes(project / ".stack-work" / "stack.sqlite3", 60).parent

    def rustup(self, name: str) -> Path:
        rustup = self.root / name / ".rustup"
        write_bytes(rustup / "settings.toml", 15)
        (rustup / "toolchains").mkdir(parents=True)
        return rustup

    def next_build(self, name: str, config: str = "next.config.js") -> Path:
        project = self.root / name
        project.mkdir(parents=True, exist_ok=True)
        (project / config).write_text("module.exports = {}\n", encoding="utf-8")
        return write_bytes(project / ".next" / "BUILD_ID", 12).parent

    def cargo_nix(self, name: str) -> Path:
        return write_bytes(self.root / name / ".cargo-nix" / "result", 33).parent


@pytest.fixture
def tree(tmp_path: Path) -> ArtifactTree:
    """Return a builder rooted at a fresh temporary directory."""
    return ArtifactTree(tmp_path)


@pytest.fixture
def seeded_tree(tree: ArtifactTree) -> ArtifactTree:
    """Populate a workspace holding every supported artifact kind."""
    for index in (1, 2, 3):
        tree.rust_project(f"rust-project-{index}")
    tree.orphaned_target()
    for index in (1, 2):
        tree.node_project(f"node-project-{index}")
        tree.venv(f"python-project-{index}")
        tree.sccache(f"sccache-project-{index}")
        tree.stack_work(f"haskell-project-{index}")
        tree.rustup(f"home-sim-{index}")
        tree.cargo_nix(f"rust-nix-project-{index}")
    tree.next_build("nextjs-project-1")
    tree.next_build("nextjs-project-2", config="next.config.mjs")
    return tree


@pytest.fixture
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and cache lookups at a private directory."""
    home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(home / "cache"))
    return home
