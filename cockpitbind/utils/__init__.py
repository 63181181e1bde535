"""Utility modules for cockpitbind.

Includes:
- logger: Structured logging setup
"""

from cockpitbind.utils.logger import configure_logging, setup_logger, get_logger

__all__ = ["configure_logging", "setup_logger", "get_logger"]
