"""Logging hooks for the ``safecall`` logger namespace.

The package never configures the root logger. It installs a ``NullHandler``
on ``safecall`` at import, and callers (or the ``SAFECALL_LOG_LEVEL`` /
``SAFECALL_DEBUG`` environment variables) can attach a stream handler to see
the DEBUG records that primitives emit for every reported diagnostic.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

LOGGER_NAME = "safecall"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LEVEL_ENV_VAR = "SAFECALL_LOG_LEVEL"
_DEBUG_ENV_VAR = "SAFECALL_DEBUG"

_attached: Optional[logging.Handler] = None


def package_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def install_null_handler() -> None:
    """Silence "no handler" warnings for applications that never configure logging."""
    logger = package_logger()
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())


def parse_level(value: Optional[str]) -> Optional[int]:
    """Turn ``"debug"``, ``"10"`` and the like into a level; ``None`` if unusable."""
    text = (value or "").strip()
    if not text:
        return None
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else None


def enable_logging(
    level: int = logging.DEBUG, handler: Optional[logging.Handler] = None
) -> logging.Handler:
    """Attach ``handler`` (stderr by default) to the ``safecall`` logger.

    A handler attached by an earlier call is replaced, so repeated calls never
    duplicate output.

    Returns:
        logging.Handler: The handler now attached.
    """
    global _attached
    logger = package_logger()
    if _attached is not None:
        logger.removeHandler(_attached)
    if handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    _attached = handler
    return handler


def disable_logging() -> None:
    """Detach the handler added by :func:`enable_logging` and reset the level."""
    global _attached
    logger = package_logger()
    if _attached is not None:
        logger.removeHandler(_attached)
        _attached = None
    logger.setLevel(logging.NOTSET)


def configure_from_env(environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """Enable logging when the environment asks for it.

    ``SAFECALL_LOG_LEVEL`` wins over a truthy ``SAFECALL_DEBUG``.

    Returns:
        Optional[int]: The level enabled, or ``None`` when nothing was requested.
    """
    env = os.environ if environ is None else environ
    level = parse_level(env.get(_LEVEL_ENV_VAR))
    if level is None and (env.get(_DEBUG_ENV_VAR) or "").strip().lower() in {"1", "true", "yes", "on"}:
        level = logging.DEBUG
    if level is None:
        return None
    enable_logging(level)
    return level


__all__ = [
    "LOGGER_NAME",
    "configure_from_env",
    "disable_logging",
    "enable_logging",
    "install_null_handler",
    "package_logger",
    "parse_level",
]
