from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

SourceWriter = Callable[[str, str], Path]


@pytest.fixture
def write_source(tmp_path: Path) -> SourceWriter:
    """Write a TypeScript source file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
