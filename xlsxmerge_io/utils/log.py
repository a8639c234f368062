"""Logging helpers for the xlsxmerge_io package."""

# Module responsibilities:
# - Reuse the application logger so IO messages land in the same rotating log file.
# - Provide get_logger() returning loggers scoped under ``xlsxmerge.io``.

from __future__ import annotations

import logging

from xlsxmerge.core.logger import get_logger as core_get_logger


def get_logger(name: str) -> logging.Logger:
    """Return a package-scoped logger.

    Args:
        name: Logger name suffix appended to the ``xlsxmerge.io`` namespace.

    Returns:
        Child logger of the configured application logger.
    """

    return core_get_logger().getChild(f"io.{name}")
