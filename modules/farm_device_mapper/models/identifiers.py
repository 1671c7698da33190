"""Identifier normalization shared by every join in the mapper."""

from typing import Any


def normalize_id(value: Any) -> str:
    """Return the string form of an entity ID.
    
    IDs arrive as BSON ObjectIds from the document store and as plain strings
    or numbers from the telemetry API, so every comparison is made on strings.
    
    Raises:
        ValueError: If value is None
    """
    if value is None:
        raise ValueError('Identifier cannot be None')
    return str(value)
