"""
Custom exceptions for the farm device mapper.

This module provides domain-specific exception classes for error handling
and debugging throughout the system.
"""

from .custom_exceptions import (
    MapperBaseException,
    MapperConfigurationError,
    MapperValidationError,
    MapperConnectionError,
    MapperProcessingError,
)

__all__ = [
    "MapperBaseException",
    "MapperConfigurationError",
    "MapperValidationError",
    "MapperConnectionError",
    "MapperProcessingError",
]
