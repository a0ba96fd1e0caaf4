"""Shared logger configuration for the gusapi package."""

from __future__ import annotations

import logging
import sys
from typing import Final

_LOGGER_NAME: Final = "gusapi"


def setup_logger(level: int = logging.INFO) -> logging.Logger:
    """Return the shared gusapi logger configured for console output.

    Records go to stderr; stdout carries the CLI's JSON output.
    """

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    if not any(isinstance(handler, logging.StreamHandler) for handler in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s %(name)s - %(message)s",
            "%H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def mask_secret(value: str | None, visible: int = 4) -> str:
    """Shorten a session ID or user key for log output."""

    if not value:
        return "<none>"
    if len(value) <= visible:
        return "*" * len(value)
    return f"{value[:visible]}***"
