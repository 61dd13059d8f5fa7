"""Tests for starguard.filesearch."""

from __future__ import annotations

from pathlib import Path

import pytest

from starguard.filesearch import find


@pytest.fixture
def project(write_file, tmp_path: Path) -> Path:
    write_file("go.mod", "module m\n")
    write_file("main.go", "package main\n")
    write_file("main_test.go", "package main\n")
    write_file("README.md", "# readme\n")
    write_file("pkg/lib/lib.go", "package lib\n")
    write_file("pkg/lib/lib_test.go", "package lib\n")
    write_file("pkg/lib/testdata/fixture.go", "package fixture\n")
    write_file("vendor/github.com/x/y/y.go", "package y\n")
    write_file(".hidden/h.go", "package h\n")
    return tmp_path


def test_find_defaults_to_recursive_search(project: Path) -> None:
    assert find(project, no_test=False) == [
        "go.mod",
        "main.go",
        "main_test.go",
        "pkg/lib/lib.go",
        "pkg/lib/lib_test.go",
    ]


def test_find_skips_tests(project: Path) -> None:
    assert find(project, no_test=True, args=["./..."]) == ["go.mod", "main.go", "pkg/lib/lib.go"]


def test_find_directory_is_not_recursive(project: Path) -> None:
    assert find(project, no_test=True, args=["pkg/lib"]) == ["pkg/lib/lib.go"]
    assert find(project, no_test=True, args=["."]) == ["go.mod", "main.go"]


def test_find_recursive_pattern_below_directory(project: Path) -> None:
    assert find(project, no_test=False, args=["pkg/..."]) == ["pkg/lib/lib.go", "pkg/lib/lib_test.go"]


def test_find_explicit_files_are_deduplicated(project: Path) -> None:
    assert find(project, no_test=False, args=["main.go", "./main.go", "README.md"]) == ["main.go"]
