"""Tests for virejo.paths."""

from __future__ import annotations

from pathlib import Path

from virejo import paths


def test_test_file_path_keeps_directory_and_extension() -> None:
    assert paths.test_file_path("/project/src/math.ts") == Path("/project/src/math.test.ts")
    assert paths.test_file_path("/project/src/App.tsx") == Path("/project/src/App.test.tsx")


def test_test_file_path_accepts_custom_suffix() -> None:
    assert paths.test_file_path("lib/utils.ts", ".spec") == Path("lib/utils.spec.ts")


def test_typescript_and_react_detection() -> None:
    assert paths.is_typescript_file("a.ts") is True
    assert paths.is_typescript_file("a.tsx") is True
    assert paths.is_typescript_file("a.js") is False
    assert paths.is_typescript_file("README.md") is False
    assert paths.is_react_file("a.tsx") is True
    assert paths.is_react_file("a.ts") is False
