# lo_importer/logging/logger.py
"""
Logging setup for lo_importer.

Modules log through the package namespace:
    from lo_importer.logging.logger import get_logger
    logger = get_logger(__name__)

As a library, lo_importer only installs a NullHandler on its own "lo_importer"
logger; the host application decides where records go. The CLI is the one
caller of configure_logging(), which attaches a stderr handler to that same
package logger and leaves the root logger alone.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional, Union

PACKAGE_LOGGER = "lo_importer"

DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def resolve_level(level: Union[int, str]) -> int:
    """'debug' / 'DEBUG' / 10 -> 10. Unknown names raise ValueError."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def verbosity_level(verbose: bool = False) -> int:
    """CLI verbosity switch: debug output with -v, warnings and errors otherwise."""
    return logging.DEBUG if verbose else logging.WARNING


def configure_logging(
    level: Union[int, str] = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Attach a stream handler to the package logger and set its level.

    Repeated calls replace the handler installed by the previous call, so
    there is never more than one. The stream defaults to sys.stderr as it
    is at call time.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(resolve_level(level))

    for existing in list(package_logger.handlers):
        if getattr(existing, "_lo_importer_cli", False):
            package_logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    handler._lo_importer_cli = True  # type: ignore[attr-defined]
    package_logger.addHandler(handler)

    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a module; configuration stays with configure_logging()."""
    return logging.getLogger(name)


__all__ = [
    "PACKAGE_LOGGER",
    "DEFAULT_FORMAT",
    "resolve_level",
    "verbosity_level",
    "configure_logging",
    "get_logger",
]
