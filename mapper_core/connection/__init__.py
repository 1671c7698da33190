"""
Connection module for the farm device mapper.

This module provides document store connectivity and credential resolution.
"""

from .auth_handler import AuthHandler
from .mongo_connector import MongoConnector

__all__ = [
    'AuthHandler',
    'MongoConnector',
]
