"""
Farm Device Mapper Core Package

This package contains the core infrastructure for the farm device mapper,
providing shared configuration, connection, logging and error handling
components for processing modules.
"""

from .interfaces import ModuleProcessor, ProcessingResult, ModuleStatus

__version__ = "1.0.0"
__all__ = ['ModuleProcessor', 'ProcessingResult', 'ModuleStatus']
