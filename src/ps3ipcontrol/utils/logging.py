"""Logging setup for the proxy and the uvicorn server that hosts it.

Both the ``ps3ipcontrol`` loggers and uvicorn's own loggers follow one
:class:`LoggingConfig`, so ``-v`` and a configured log file apply to
request handling and server lifecycle messages alike.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from ps3ipcontrol.config.settings import LoggingConfig

_UVICORN_LEVELS = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARN": "warning",
    "WARNING": "warning",
    "ERROR": "error",
    "CRITICAL": "critical",
}


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure the ``ps3ipcontrol`` logger.

    Replaces any handlers from an earlier call, so calling it twice does
    not duplicate output.

    Args:
        config: Logging configuration. If None, uses defaults
                (INFO level, stderr output).
    """
    if config is None:
        config = LoggingConfig()

    root_logger = logging.getLogger("ps3ipcontrol")
    root_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if config.file:
        file_handler = logging.FileHandler(config.file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.debug("Logging initialized at %s level", config.level)


def uvicorn_log_level(config: LoggingConfig) -> str:
    """Level name uvicorn accepts for ``config.level``."""
    return _UVICORN_LEVELS.get(config.level.upper(), "info")


def uvicorn_log_config(config: LoggingConfig) -> dict[str, Any]:
    """``logging.config.dictConfig`` mapping for uvicorn's loggers.

    Uses the proxy's format and, when set, its log file.
    """
    handlers: dict[str, dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stderr",
        },
    }
    if config.file:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "default",
            "filename": config.file,
        }
    level = uvicorn_log_level(config).upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": config.format}},
        "handlers": handlers,
        "loggers": {
            "uvicorn": {"handlers": list(handlers), "level": level, "propagate": False},
            "uvicorn.error": {"level": level},
            "uvicorn.access": {"handlers": list(handlers), "level": level, "propagate": False},
        },
    }
