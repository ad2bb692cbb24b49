"""Logging utilities for qlift.

Every module obtains its logger through :func:`get_logger` so that all
output shares one format and one level switch. Simulation progress lines
are emitted at INFO; a circuit with progress enabled lets them through for
the run even when the level is WARNING.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

_ROOT_NAME = "qlift"
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

# Level applied to loggers created from now on
_DEFAULT_LEVEL = logging.WARNING

# Loggers handed out so far, keyed by full dotted name
_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: int | str) -> int:
    """Translate a level name such as ``"debug"`` into its numeric value."""
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return int(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger below the ``qlift`` namespace.

    Loggers are cached so repeated calls never stack handlers. Pass
    ``__name__`` from the calling module.

    Args:
        name: Logger name. Names outside the ``qlift`` namespace are
            prefixed with ``qlift.``. If None, the package logger is returned.

    Returns:
        Configured logger instance.

    Example:
        >>> from qlift.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Lifting gate onto register")
    """
    if name is None:
        name = _ROOT_NAME

    if name == _ROOT_NAME or name.startswith(_ROOT_NAME + "."):
        logger_name = name
    else:
        logger_name = f"{_ROOT_NAME}.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)

    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)

        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))

        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the level of every qlift logger, current and future.

    Args:
        level: Logging level (``logging.DEBUG``, ``logging.INFO``, ...) or its
            name as a string (``"DEBUG"``, ``"info"``, ...).

    Example:
        >>> from qlift.logging import set_log_level
        >>> set_log_level("INFO")  # show simulation progress
    """
    level = _coerce_level(level)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Replace the handlers of all qlift loggers.

    Call once at application start-up, or in tests to redirect output into
    a buffer.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses the default
            ``[LEVEL] name: message`` layout.
        stream: Output stream (default: sys.stderr).
    """
    level = _coerce_level(level)

    if stream is None:
        stream = sys.stderr

    formatter = logging.Formatter(format_string or _DEFAULT_FORMAT)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = level


__all__ = ["get_logger", "set_log_level", "configure_logging"]
