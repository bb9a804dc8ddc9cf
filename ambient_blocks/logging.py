"""Logging setup for the extension when it is loaded into a host."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "ambient_blocks"
NETWORK_LOGGER = "aiohttp.client"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_installed: list[tuple[logging.Logger, logging.Handler]] = []


def configure_logging(
    level: str = "INFO", *, log_path: Optional[Path] = None, log_network: bool = False
) -> logging.Logger:
    """Configure the ``ambient_blocks`` logger without disturbing the host.

    The root logger is never modified. A console handler is attached only
    when the root logger has no handlers of its own, so records are not
    printed twice. Calling this again replaces the handlers added earlier.

    Parameters
    ----------
    level:
        Log level name for the package logger, e.g. "INFO".
    log_path:
        Optional file that receives the package's records.
    log_network:
        When true, aiohttp client records go to the same handlers.
    """

    reset_logging()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = []
    if not logging.getLogger().handlers:
        handlers.append(logging.StreamHandler())
    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    targets = [package_logger]
    if log_network:
        targets.append(logging.getLogger(NETWORK_LOGGER))

    for handler in handlers:
        handler.setFormatter(formatter)
        for target in targets:
            target.addHandler(handler)
            _installed.append((target, handler))

    return package_logger


def reset_logging() -> None:
    """Detach and close every handler added by :func:`configure_logging`."""

    closed: set[int] = set()
    while _installed:
        target, handler = _installed.pop()
        target.removeHandler(handler)
        if id(handler) not in closed:
            handler.close()
            closed.add(id(handler))
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.NOTSET)
