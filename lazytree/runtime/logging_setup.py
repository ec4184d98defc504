"""Logging configuration for the ``lazytree`` logger hierarchy."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from .config import ConfigError

LOGGER_NAME = "lazytree"
LOG_FILENAME = "lazytree.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def parse_level(level: str | None) -> int:
    return _LEVELS.get(str(level or "").strip().lower(), logging.INFO)


def configure_logging(level: str | None, log_dir: Path) -> logging.Logger:
    """Attach a file handler (and a stderr handler at debug level).

    Handlers installed by an earlier call are closed and replaced, so the
    function can be called once per CLI invocation.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    numeric_level = parse_level(level)
    log_file = log_dir / LOG_FILENAME
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot open log file {log_file}: {exc}") from exc

    formatter = logging.Formatter(LOG_FORMAT)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)
    if numeric_level <= logging.DEBUG:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    logger.setLevel(numeric_level)
    logger.propagate = False
    logger.info("Logger initialized. Level: %s, log file: %s", logging.getLevelName(numeric_level), log_file)
    return logger


__all__ = ["LOGGER_NAME", "LOG_FILENAME", "parse_level", "configure_logging"]
