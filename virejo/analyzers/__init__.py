"""Source analysis for TypeScript and TSX files."""

from __future__ import annotations

from .source import SourceAnalyzer, analyze
from .tree_sitter import TypeScriptParser

__all__ = ["SourceAnalyzer", "TypeScriptParser", "analyze"]
