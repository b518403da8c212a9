"""Logger hierarchy and handler setup for ngpack builds."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import PackagerConfig

_LOGGER_NAME = "ngpack"
_CONSOLE_FORMAT = "[ngpack] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``ngpack.<name>``, or the package logger itself."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def _drop_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _build_handlers(log_file: Optional[Path]) -> List[logging.Handler]:
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    handlers: List[logging.Handler] = [console]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(sink)
    return handlers


def configure_logging(
    config: Optional[PackagerConfig] = None,
    *,
    verbose: bool = False,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Send ngpack records to stderr and to the build's log file, if it has one.

    ``log_file`` overrides ``config.log_file``. Calling this again replaces
    the handlers installed by the previous call.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    _drop_handlers(logger)

    target = log_file or (config.log_file if config is not None else None)
    for handler in _build_handlers(target):
        handler.setLevel(level)
        logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "get_logger"]
