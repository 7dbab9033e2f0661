from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(override=False)

LOG_DIR_ENV = "RASTEXCEL_LOG_DIR"
DEFAULT_LOG_BASE = Path.home() / "RastExcel" / "logs"

_LOGGER: logging.Logger | None = None


def _log_dir() -> Path:
    env = os.getenv(LOG_DIR_ENV)
    if env:
        return Path(env)
    return DEFAULT_LOG_BASE


def get_logger(log_dir: Path | None = None) -> logging.Logger:
    """Return the configured ``rastexcel`` logger writing to <log_dir>/rastexcel.log.

    Creates the directory if needed. Uses rotating file handler.
    """
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    base = Path(log_dir) if log_dir is not None else _log_dir()
    base.mkdir(parents=True, exist_ok=True)
    log_path = base / "rastexcel.log"

    logger = logging.getLogger("rastexcel")
    logger.setLevel(logging.INFO)
    logger.propagate = False

    fmt = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = RotatingFileHandler(log_path, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(fmt)
    logger.addHandler(console)

    _LOGGER = logger
    return logger


def reset_logger() -> None:
    """Detach handlers so the next ``get_logger`` call reconfigures logging."""
    global _LOGGER
    logger = logging.getLogger("rastexcel")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    _LOGGER = None
