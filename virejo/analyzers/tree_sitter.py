"""Tree-sitter parser adapter for TypeScript and TSX sources."""

from __future__ import annotations

from pathlib import PurePath
from typing import Dict, Optional

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

_DIALECTS = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}


def dialect_for_path(path: str) -> str:
    """Return the grammar name used for ``path``: ``tsx`` for .tsx files, else ``typescript``."""
    return "tsx" if PurePath(path).suffix.lower() == ".tsx" else "typescript"


class TypeScriptParser:
    """Parses TypeScript text into tree-sitter syntax trees, caching one parser per dialect."""

    def __init__(self) -> None:
        self._parsers: Dict[str, Parser] = {}

    def parse(self, content: str, file_path: str) -> Tree:
        parser = self._get_parser(dialect_for_path(file_path))
        return parser.parse(content.encode("utf-8"))

    def _get_parser(self, dialect: str) -> Parser:
        parser = self._parsers.get(dialect)
        if parser is not None:
            return parser
        parser = Parser(Language(_DIALECTS[dialect]()))
        self._parsers[dialect] = parser
        return parser


def node_text(node: Optional[Node]) -> str:
    """Return the source text covered by ``node`` (empty for ``None``)."""
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="ignore")


def has_token(node: Node, token: str) -> bool:
    """Return True when ``node`` has a direct anonymous child spelled ``token``."""
    return any(not child.is_named and child.type == token for child in node.children)


def annotation_text(node: Optional[Node]) -> Optional[str]:
    """Return the type text of a ``type_annotation`` node without its leading colon."""
    text = node_text(node).strip()
    if text.startswith(":"):
        text = text[1:].strip()
    return text or None


__all__ = [
    "TypeScriptParser",
    "annotation_text",
    "dialect_for_path",
    "has_token",
    "node_text",
]
