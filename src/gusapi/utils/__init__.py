"""Helper utilities for ``gusapi``."""

from .logging_setup import mask_secret, setup_logger

__all__ = ["mask_secret", "setup_logger"]
