# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Declarative rule table describing every recognised artifact directory."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final


class ArtifactKind(str, Enum):
    """Artifact directory kinds recognised by the cleaner."""

    RUST_TARGET = "rust-target"
    RUST_ANALYZER_TARGET = "rust-analyzer-target"
    NODE_MODULES = "node-modules"
    PYTHON_VENV = "python-venv"
    SCCACHE = "sccache"
    STACK_WORK = "stack-work"
    RUSTUP = "rustup"
    NEXT_BUILD = "next-build"
    CARGO_NIX = "cargo-nix"


class ContentRule(str, Enum):
    """Structural evidence accepted in place of explicit marker files."""

    NONE = "none"
    ANY_SUBDIRECTORY = "any-subdirectory"
    ANY_ENTRY = "any-entry"


@dataclass(frozen=True, slots=True)
class ArtifactRule:
    """Classification rule for a single :class:`ArtifactKind`.

    Attributes:
        kind: Kind described by the rule.
        label: Human readable singular label used in reports.
        plural: Human readable plural label used in reports.
        basenames: Directory names accepted for the kind, primary name first.
        negative_markers: Children whose presence proves the directory is a
            real project rather than an artifact directory.
        marker_groups: Positive evidence. Every group must have at least one
            member present inside the candidate.
        content: Structural evidence accepted when the marker groups fail.
        parent_markers: Glob patterns of which at least one must match inside
            the candidate's parent directory.
        definitive_marker: Child proving the kind on its own, waiving the
            parent requirement.
    """

    kind: ArtifactKind
    label: str
    plural: str
    basenames: tuple[str, ...]
    negative_markers: tuple[str, ...] = ()
    marker_groups: tuple[tuple[str, ...], ...] = ()
    content: ContentRule = ContentRule.NONE
    parent_markers: tuple[str, ...] = ()
    definitive_marker: str | None = None

    @property
    def primary_basename(self) -> str:
        return self.basenames[0]


CARGO_MANIFEST: Final[str] = "Cargo.toml"
RUST_TARGET_MARKERS: Final[tuple[str, ...]] = ("CACHEDIR.TAG", ".rustc_info.json")
_GENERIC_PROJECT_MARKERS: Final[tuple[str, ...]] = (CARGO_MANIFEST, "package.json", ".git")

RULES: Final[dict[ArtifactKind, ArtifactRule]] = {
    rule.kind: rule
    for rule in (
        ArtifactRule(
            kind=ArtifactKind.RUST_TARGET,
            label="Rust target directory",
            plural="Rust target directories",
            basenames=("target",),
            negative_markers=(CARGO_MANIFEST,),
            marker_groups=(RUST_TARGET_MARKERS,),
        ),
        ArtifactRule(
            kind=ArtifactKind.RUST_ANALYZER_TARGET,
            label="rust-analyzer target directory",
            plural="rust-analyzer target directories",
            basenames=("target-ra",),
            negative_markers=(CARGO_MANIFEST,),
            marker_groups=(RUST_TARGET_MARKERS,),
        ),
        ArtifactRule(
            kind=ArtifactKind.NODE_MODULES,
            label="node_modules directory",
            plural="node_modules directories",
            basenames=("node_modules",),
            negative_markers=(CARGO_MANIFEST, "setup.py"),
            marker_groups=((".bin", ".package-lock.json"),),
            content=ContentRule.ANY_SUBDIRECTORY,
            parent_markers=("package.json", "package-lock.json", "yarn.lock", "pnpm-lock.yaml"),
        ),
        ArtifactRule(
            kind=ArtifactKind.PYTHON_VENV,
            label="Python virtual environment",
            plural="Python virtual environments",
            # ``.env`` is deliberately absent: it is usually a dotenv file.
            basenames=("venv", ".venv", "env", "ENV", "virtualenv", ".virtualenv"),
            negative_markers=(".git",),
            marker_groups=(
                ("pyvenv.cfg",),
                ("bin", "Scripts"),
                ("bin/activate", "Scripts/activate.bat"),
                ("lib", "Lib"),
            ),
        ),
        ArtifactRule(
            kind=ArtifactKind.SCCACHE,
            label="sccache directory",
            plural="sccache directories",
            basenames=(".sccache",),
            negative_markers=_GENERIC_PROJECT_MARKERS,
            content=ContentRule.ANY_ENTRY,
        ),
        ArtifactRule(
            kind=ArtifactKind.STACK_WORK,
            label="Stack work directory",
            plural="Stack work directories",
            basenames=(".stack-work",),
            negative_markers=(*_GENERIC_PROJECT_MARKERS, "setup.py"),
            marker_groups=(("stack.sqlite3", "dist", "install"),),
            parent_markers=("stack.yaml", "package.yaml", "*.cabal"),
            definitive_marker="stack.sqlite3",
        ),
        ArtifactRule(
            kind=ArtifactKind.RUSTUP,
            label="rustup directory",
            plural="rustup directories",
            basenames=(".rustup",),
            negative_markers=_GENERIC_PROJECT_MARKERS,
            marker_groups=(("settings.toml", "toolchains", "downloads", "update-hashes"),),
        ),
        ArtifactRule(
            kind=ArtifactKind.NEXT_BUILD,
            label="Next.js build directory",
            plural="Next.js build directories",
            basenames=(".next",),
            negative_markers=_GENERIC_PROJECT_MARKERS,
            marker_groups=(("BUILD_ID", "cache", "server", "static"),),
            parent_markers=("next.config.js", "next.config.mjs", "next.config.ts", "package.json"),
        ),
        ArtifactRule(
            kind=ArtifactKind.CARGO_NIX,
            label="cargo-nix directory",
            plural="cargo-nix directories",
            basenames=(".cargo-nix",),
            negative_markers=_GENERIC_PROJECT_MARKERS,
            content=ContentRule.ANY_ENTRY,
        ),
    )
}

BUILD_CACHE_KINDS: Final[tuple[ArtifactKind, ...]] = (
    ArtifactKind.RUST_TARGET,
    ArtifactKind.RUST_ANALYZER_TARGET,
)


def _index_basenames(rules: dict[ArtifactKind, ArtifactRule]) -> dict[str, tuple[ArtifactKind, ...]]:
    """Return a lookup from directory basename to the kinds accepting it."""

    index: dict[str, tuple[ArtifactKind, ...]] = {}
    for rule in rules.values():
        for name in rule.basenames:
            index[name] = (*index.get(name, ()), rule.kind)
    return index


_KINDS_BY_BASENAME: Final[dict[str, tuple[ArtifactKind, ...]]] = _index_basenames(RULES)


def rule_for(kind: ArtifactKind) -> ArtifactRule:
    """Return the classification rule registered for ``kind``."""

    return RULES[kind]


def kinds_for_basename(name: str) -> tuple[ArtifactKind, ...]:
    """Return the kinds whose accepted basenames include ``name``."""

    return _KINDS_BY_BASENAME.get(name, ())


def build_cache_dirname(kind: ArtifactKind) -> str:
    """Return the directory name used by a compiled-build-cache ``kind``."""

    return RULES[kind].primary_basename


__all__ = [
    "ArtifactKind",
    "ArtifactRule",
    "BUILD_CACHE_KINDS",
    "CARGO_MANIFEST",
    "ContentRule",
    "RULES",
    "RUST_TARGET_MARKERS",
    "build_cache_dirname",
    "kinds_for_basename",
    "rule_for",
]
