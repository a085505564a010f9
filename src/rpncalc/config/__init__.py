"""Runtime configuration: logging setup."""

from rpncalc.config.logging import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
