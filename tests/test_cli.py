"""CLI parser and entrypoint tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from virejo.cli import _build_parser, main

MATH_SOURCE = "export function add(a: number, b: number): number {\n  return a + b;\n}\n"


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "generate", "math.ts"])
    assert args.verbose is True
    assert args.command == "generate"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["analyze", "math.ts", "--verbose"])
    assert args.verbose is True
    assert args.command == "analyze"


def test_cli_generate_flags() -> None:
    parser = _build_parser()
    args = parser.parse_args(["generate", "math.ts", "--force", "--dry-run", "--config", "x.yml"])
    assert args.force is True
    assert args.dry_run is True
    assert args.config == Path("x.yml")


def test_cli_serve_defaults() -> None:
    parser = _build_parser()
    args = parser.parse_args(["serve"])
    assert args.host == "127.0.0.1"
    assert args.port == 8000


def test_generate_reports_the_written_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source = tmp_path / "math.ts"
    source.write_text(MATH_SOURCE, encoding="utf-8")

    main(["generate", str(source)])

    assert capsys.readouterr().out.strip() == "Test file generated: math.test.ts"
    assert (tmp_path / "math.test.ts").exists()


def test_generate_dry_run_prints_content(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source = tmp_path / "math.ts"
    source.write_text(MATH_SOURCE, encoding="utf-8")

    main(["generate", str(source), "--dry-run"])

    assert "describe('math', () => {" in capsys.readouterr().out
    assert not (tmp_path / "math.test.ts").exists()


def test_generate_existing_test_exits_with_one_error_line(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source = tmp_path / "math.ts"
    source.write_text(MATH_SOURCE, encoding="utf-8")
    (tmp_path / "math.test.ts").write_text("// old\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(source)])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    error_lines = [line for line in err.splitlines() if line and not line.startswith("[virejo]")]
    assert len(error_lines) == 1
    assert "already exists" in error_lines[0]


def test_generate_unsupported_file_exits(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source = tmp_path / "notes.md"
    source.write_text("# notes\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(source)])

    assert excinfo.value.code == 1
    assert "only works with .ts and .tsx files" in capsys.readouterr().err


def test_analyze_prints_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "math.ts"
    source.write_text(MATH_SOURCE, encoding="utf-8")

    main(["analyze", str(source)])

    payload = json.loads(capsys.readouterr().out)
    assert payload["functions"][0]["name"] == "add"
    assert payload["isReactFile"] is False


def test_analyze_undecodable_source_exits_with_one_error_line(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source = tmp_path / "broken.ts"
    source.write_bytes(b"export const x = '\xff\xfe';\n")

    with pytest.raises(SystemExit) as excinfo:
        main(["analyze", str(source)])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    error_lines = [line for line in err.splitlines() if line and not line.startswith("[virejo]")]
    assert len(error_lines) == 1
    assert error_lines[0].startswith(f"Failed to analyze {source}:")
