"""Path helpers for locating source files and their generated tests."""

from __future__ import annotations

from pathlib import Path

TYPESCRIPT_SUFFIXES = (".ts", ".tsx")
DEFAULT_TEST_SUFFIX = ".test"


def is_typescript_file(path: str | Path) -> bool:
    """Return True for ``.ts`` and ``.tsx`` files."""
    return Path(path).suffix in TYPESCRIPT_SUFFIXES


def is_react_file(path: str | Path) -> bool:
    return Path(path).suffix == ".tsx"


def test_file_path(source: str | Path, suffix: str = DEFAULT_TEST_SUFFIX) -> Path:
    """Return ``<dir>/<base><suffix><ext>`` next to ``source``."""
    source = Path(source)
    return source.with_name(f"{source.stem}{suffix}{source.suffix}")


# Keep pytest from collecting the helper when it is imported into a test module.
test_file_path.__test__ = False  # type: ignore[attr-defined]


__all__ = ["TYPESCRIPT_SUFFIXES", "is_react_file", "is_typescript_file", "test_file_path"]
