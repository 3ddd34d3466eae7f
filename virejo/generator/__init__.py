"""Test-file generation and dependency mocking."""

from .builder import ScaffoldGenerator, generate, module_name_for, placeholder_value
from .mocks import MockSet, MockStrategy, generate_mocks, select_strategy

__all__ = [
    "MockSet",
    "MockStrategy",
    "ScaffoldGenerator",
    "generate",
    "generate_mocks",
    "module_name_for",
    "placeholder_value",
    "select_strategy",
]
