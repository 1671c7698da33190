"""
Logging helpers shared by the framework and processing modules.
"""

from .logging_setup import configure_logging, setup_logging, get_logger, log_performance

__all__ = ["configure_logging", "setup_logging", "get_logger", "log_performance"]
