"""Loggers for the analyzer, generator, orchestrator and CLI.

Every module asks for a child of the ``virejo`` logger; the CLI configures the
root of that hierarchy once per invocation.
"""

from __future__ import annotations

import logging
from pathlib import Path

ROOT_LOGGER = "virejo"
CONSOLE_FORMAT = "[virejo] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``virejo.<name>``, or the ``virejo`` logger itself."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send virejo records to stderr (DEBUG with ``verbose``) and optionally to ``log_file``."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    # One console handler per process, even when main() runs repeatedly.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [_with_format(logging.StreamHandler(), CONSOLE_FORMAT)]
    if log_file is not None:
        handlers.append(_with_format(logging.FileHandler(log_file, encoding="utf-8"), FILE_FORMAT))
    for handler in handlers:
        handler.setLevel(level)
        logger.addHandler(handler)
    return logger


def _with_format(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    return handler


__all__ = ["configure_logging", "get_logger"]
