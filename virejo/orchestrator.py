"""Pipeline orchestration for the generate/analyze flows."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .analyzers import SourceAnalyzer
from .config import VirejoConfig, find_config, load_config
from .generator import MockStrategy, ScaffoldGenerator
from .generator.builder import DEFAULT_MOCK_STRATEGIES
from .logging import get_logger
from .models import AnalysisResult
from .paths import is_typescript_file, test_file_path

ConfirmOverwrite = Callable[[Path], bool]


class UnsupportedFileError(ValueError):
    """Raised when the source file is not a .ts or .tsx file."""


@dataclass
class GenerateOutcome:
    """Result of a test-file generation."""

    path: Path
    content: str
    written: bool


class Orchestrator:
    """Coordinates reading, analysis, generation and writing of one test file."""

    def __init__(
        self,
        analyzer: SourceAnalyzer | None = None,
        generator: ScaffoldGenerator | None = None,
        *,
        confirm_overwrite: ConfirmOverwrite | None = None,
        config_path: Path | None = None,
    ) -> None:
        self.analyzer = analyzer or SourceAnalyzer()
        self._generator_override = generator
        self.confirm_overwrite = confirm_overwrite
        self.config_path = config_path
        self.logger = get_logger("orchestrator")

    def run_generate(
        self, path: str | Path, *, force: bool = False, dry_run: bool = False
    ) -> Optional[GenerateOutcome]:
        """Generate the test file for ``path``; ``None`` means the overwrite was declined."""
        source_path = self._resolve_source(path)
        config = self._load_config(source_path)
        target = test_file_path(source_path, config.output.suffix)
        self.logger.info("Generating %s from %s", target.name, source_path)

        if target.exists() and not force and not dry_run:
            if not self._should_overwrite(target, config):
                self.logger.info("Keeping existing test file %s", target)
                return None

        content = self._render(source_path.read_text(encoding="utf-8"), str(source_path), config)

        if dry_run:
            self.logger.info("Dry run: %s not written", target.name)
            return GenerateOutcome(path=target, content=content, written=False)

        target.write_text(content, encoding="utf-8")
        self.logger.info("Wrote %s", target)
        return GenerateOutcome(path=target, content=content, written=True)

    def run_analyze(self, path: str | Path) -> AnalysisResult:
        """Return the structural model of the source file at ``path``."""
        source_path = self._resolve_source(path)
        return self.analyzer.analyze(source_path.read_text(encoding="utf-8"), str(source_path))

    def analyze_source(self, content: str, file_path: str) -> AnalysisResult:
        if not is_typescript_file(file_path):
            raise UnsupportedFileError(_UNSUPPORTED_MESSAGE)
        return self.analyzer.analyze(content, file_path)

    def render_source(self, content: str, file_path: str) -> GenerateOutcome:
        """Render the test file for in-memory ``content`` without touching the disk."""
        if not is_typescript_file(file_path):
            raise UnsupportedFileError(_UNSUPPORTED_MESSAGE)
        config = self._load_config(Path(file_path))
        text = self._render(content, file_path, config)
        return GenerateOutcome(
            path=test_file_path(file_path, config.output.suffix), content=text, written=False
        )

    # Internal helpers

    def _resolve_source(self, path: str | Path) -> Path:
        source_path = Path(path).expanduser().resolve()
        if not is_typescript_file(source_path):
            raise UnsupportedFileError(_UNSUPPORTED_MESSAGE)
        if not source_path.is_file():
            raise FileNotFoundError(f"Source file not found: {source_path}")
        return source_path

    def _load_config(self, source_path: Path) -> VirejoConfig:
        config_path = self.config_path
        if config_path is None and source_path.is_absolute():
            config_path = find_config(source_path)
        config = load_config(config_path, default_root=source_path.parent)
        if config.source is not None:
            self.logger.debug("Loaded configuration from %s", config.source)
        return config

    def _should_overwrite(self, target: Path, config: VirejoConfig) -> bool:
        mode = config.output.overwrite
        if mode == "always":
            return True
        if mode == "ask" and self.confirm_overwrite is not None:
            return self.confirm_overwrite(target)
        raise FileExistsError(
            f"Test file already exists: {target}. Use --force to overwrite."
        )

    def _render(self, content: str, file_path: str, config: VirejoConfig) -> str:
        analysis = self.analyzer.analyze(content, file_path)
        generator = self._generator_override or self._build_generator(config)
        return generator.generate(analysis, file_path, content)

    @staticmethod
    def _build_generator(config: VirejoConfig) -> ScaffoldGenerator:
        strategies = set(DEFAULT_MOCK_STRATEGIES)
        if config.mocks.include_other:
            strategies.add(MockStrategy.OTHER)
        return ScaffoldGenerator(
            templates_dir=config.templates_dir,
            mocks_enabled=config.mocks.enabled,
            mock_strategies=strategies,
        )


_UNSUPPORTED_MESSAGE = "This command only works with .ts and .tsx files"


__all__ = ["ConfirmOverwrite", "GenerateOutcome", "Orchestrator", "UnsupportedFileError"]
