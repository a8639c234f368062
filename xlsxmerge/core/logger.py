from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys

from xlsxmerge.config import app_home


_LOGGER: logging.Logger | None = None


def get_logger(log_dir: Path | None = None) -> logging.Logger:
    """Return a configured application logger writing to <home>/logs/app.log.

    Creates the directory if needed. Uses rotating file handler. When the log
    directory is not writable the logger keeps the console handler only.
    """
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    if log_dir is None:
        base = app_home() / "logs"
    else:
        base = Path(log_dir)

    logger = logging.getLogger("xlsxmerge")
    logger.setLevel(logging.INFO)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(fmt)
    logger.addHandler(console)

    try:
        base.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            base / "app.log", maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
    except OSError as exc:
        logger.warning("File logging disabled, cannot write to %s: %s", base, exc)
    else:
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)

    _LOGGER = logger
    return logger
