"""Centralized logging configuration for ReceiptSpend.

``configure_logging(...)`` attaches a single ``StreamHandler`` to the package
root logger (``"receipt_spend"``) and is meant to be called once by the host
application. ``get_logger(name)`` is what library modules use; it leaves a
``NullHandler`` on the root logger until the host configures output.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

from config.settings import get_settings

PKG_LOGGER_NAME = "receipt_spend"
_CONFIGURED = False

__all__ = ["PKG_LOGGER_NAME", "configure_logging", "get_logger"]


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
        return logging.INFO
    # Settings read RECEIPT_SPEND_LOG_LEVEL from the environment.
    return _parse_level(get_settings().log_level)


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Configure the package root logger exactly once.

    Parameters
    ----------
    level:
        Logging level as ``int`` or level name. ``None`` falls back to
        ``Settings.log_level`` (``RECEIPT_SPEND_LOG_LEVEL``, default ``INFO``).
    fmt:
        Optional format string, defaults to
        ``"%(asctime)s %(name)s %(levelname)s %(message)s"``.
    stream:
        Output stream of the handler.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or "%(asctime)s %(name)s %(levelname)s %(message)s"))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package root, silent until configured."""

    pkg_logger = logging.getLogger(PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    if name != PKG_LOGGER_NAME and not name.startswith(PKG_LOGGER_NAME + "."):
        name = f"{PKG_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
