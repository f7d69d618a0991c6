# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for disk usage accounting."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from wd40.sizing import size_of


def test_size_sums_nested_regular_files(tmp_path: Path) -> None:
    (tmp_path / "a" / "b").mkdir(parents=True)
    (tmp_path / "top.bin").write_bytes(b"x" * 10)
    (tmp_path / "a" / "mid.bin").write_bytes(b"x" * 200)
    (tmp_path / "a" / "b" / "leaf.bin").write_bytes(b"x" * 3000)
    assert size_of(tmp_path) == 3210


def test_missing_path_sizes_to_zero(tmp_path: Path) -> None:
    assert size_of(tmp_path / "nope") == 0


def test_single_file_reports_its_size(tmp_path: Path) -> None:
    target = tmp_path / "file.bin"
    target.write_bytes(b"x" * 42)
    assert size_of(target) == 42


def test_empty_directory_is_zero(tmp_path: Path) -> None:
    assert size_of(tmp_path) == 0


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlinks_are_not_followed(tmp_path: Path) -> None:
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "big.bin").write_bytes(b"x" * 5000)
    measured = tmp_path / "measured"
    measured.mkdir()
    (measured / "small.bin").write_bytes(b"x" * 7)
    (measured / "dir-link").symlink_to(outside, target_is_directory=True)
    (measured / "file-link").symlink_to(outside / "big.bin")
    assert size_of(measured) == 7
