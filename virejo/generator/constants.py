"""Shared constants for generated Vitest files."""

from __future__ import annotations

FRAMEWORK_IMPORT = "import { describe, it, expect } from 'vitest';"
RENDER_IMPORT = "import { render, screen } from '@testing-library/react';"

INDENT = "  "
MOCK_INDENT = "    "

ASSERTION_HINT = "// Add your assertions here"

# Ordered: the first rule whose marker occurs in the normalised type wins.
PLACEHOLDER_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("string",), "'test'"),
    (("number",), "0"),
    (("boolean",), "false"),
    (("array", "[]"), "[]"),
    (("object", "{"), "{}"),
    (("function", "=>"), "vi.fn()"),
    (("promise",), "Promise.resolve()"),
    (("date",), "new Date()"),
)
UNDEFINED_PLACEHOLDER = "undefined"

ANY_PROPS = "any"


__all__ = [
    "ANY_PROPS",
    "ASSERTION_HINT",
    "FRAMEWORK_IMPORT",
    "INDENT",
    "MOCK_INDENT",
    "PLACEHOLDER_RULES",
    "RENDER_IMPORT",
    "UNDEFINED_PLACEHOLDER",
]
