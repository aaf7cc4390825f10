# logging_setup.py
# Role: Central logging configuration for the finance_tracker package.
#       The app factory calls configure_logging(); every other module only
#       asks for a logger via get_logger(__name__).

from __future__ import annotations

import logging
import os
import sys
from typing import IO, Optional

_PKG_LOGGER_NAME = "finance_tracker"
_LEVEL_ENV = "FINANCE_TRACKER_LOG_LEVEL"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False
_HANDLER: Optional[logging.Handler] = None


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        # Accept numeric strings or level names (INFO/DEBUG/...).
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
        return logging.INFO
    # No explicit level: the environment decides, then INFO.
    env_val = os.getenv(_LEVEL_ENV)
    if env_val:
        return _parse_level(env_val)
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """
    Attach a single StreamHandler to the package root logger.

    ``level`` falls back to FINANCE_TRACKER_LOG_LEVEL, then INFO. Calling
    again keeps the one handler but applies the new level (and ``fmt``,
    when given); ``stream`` only matters on the first call.
    """
    global _CONFIGURED, _HANDLER

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    numeric = _parse_level(level)

    if _CONFIGURED and _HANDLER is not None:
        _HANDLER.setLevel(numeric)
        if fmt:
            _HANDLER.setFormatter(logging.Formatter(fmt))
        logger.setLevel(numeric)
        return

    # NullHandlers added by get_logger() would otherwise stay around.
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))

    logger.setLevel(numeric)
    logger.addHandler(handler)
    logger.propagate = False

    _HANDLER = handler
    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger by name. Until configure_logging() runs, the package
    root logger gets a NullHandler so library use stays silent.
    """
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
