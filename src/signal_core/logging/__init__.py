"""Structured logging."""

from signal_core.logging.setup import get_logger, setup_from_config, setup_logging

__all__ = ["get_logger", "setup_from_config", "setup_logging"]
