"""Unit-test scaffolding for TypeScript and React source files."""

from .analyzers import analyze
from .generator import generate

__version__ = "0.3.0"

__all__ = ["analyze", "generate", "__version__"]
