"""Configuration loading for virejo (.virejo.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .paths import DEFAULT_TEST_SUFFIX

CONFIG_FILENAME = ".virejo.yml"
OVERWRITE_MODES = ("ask", "always", "never")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class OutputConfig:
    """Where generated tests go and what happens when one already exists."""

    suffix: str = DEFAULT_TEST_SUFFIX
    overwrite: str = "ask"


@dataclass
class MockConfig:
    """Mock generation switches."""

    enabled: bool = True
    include_other: bool = False


@dataclass
class VirejoConfig:
    """Represents the settings defined in .virejo.yml."""

    root: Path
    output: OutputConfig = field(default_factory=OutputConfig)
    mocks: MockConfig = field(default_factory=MockConfig)
    templates_dir: Optional[Path] = None
    source: Optional[Path] = None


def find_config(start: Path) -> Optional[Path]:
    """Walk up from ``start`` and return the first .virejo.yml found."""
    start = start.expanduser().resolve()
    directory = start if start.is_dir() else start.parent
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(config_path: Path | None, *, default_root: Path | None = None) -> VirejoConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    if config_path is None or not config_path.exists():
        root = (default_root or Path.cwd()).resolve()
        return VirejoConfig(root=root)

    config_file = config_path.expanduser().resolve()
    root = config_file.parent
    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    output = OutputConfig()
    output_data = _as_dict(data.get("output"))
    suffix = _as_str(output_data.get("suffix"))
    if suffix:
        output.suffix = suffix if suffix.startswith(".") else f".{suffix}"
    overwrite = _as_str(output_data.get("overwrite"))
    if overwrite is not None:
        overwrite = overwrite.strip().lower()
        if overwrite not in OVERWRITE_MODES:
            raise ConfigError(
                f"output.overwrite must be one of {', '.join(OVERWRITE_MODES)} (got {overwrite!r})"
            )
        output.overwrite = overwrite

    mocks = MockConfig()
    mocks_data = _as_dict(data.get("mocks"))
    enabled = _as_bool(mocks_data.get("enabled"))
    if enabled is not None:
        mocks.enabled = enabled
    include_other = _as_bool(mocks_data.get("include_other"))
    if include_other is not None:
        mocks.include_other = include_other

    templates_dir_str = _as_str(data.get("templates_dir"))
    templates_dir = root / templates_dir_str if templates_dir_str else None

    return VirejoConfig(
        root=root,
        output=output,
        mocks=mocks,
        templates_dir=templates_dir,
        source=config_file,
    )


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "MockConfig",
    "OutputConfig",
    "VirejoConfig",
    "find_config",
    "load_config",
]
