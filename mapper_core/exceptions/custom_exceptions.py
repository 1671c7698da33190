"""
Exception hierarchy for the farm device mapper.

Every exception carries a message and a context dictionary of identifiers
(collection, farm_id, url, ...) that is appended to its string form and
reported in processing results.
"""

from typing import Optional, Dict, Any


class MapperBaseException(Exception):
    """Base exception for all farm device mapper failures."""
    
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}
    
    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message
    
    def to_dict(self) -> Dict[str, Any]:
        """Return the error type, message and context as a plain dictionary."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "context": dict(self.context),
        }


class MapperConfigurationError(MapperBaseException):
    """The configuration file, a section of it, or a credential is missing or malformed."""
    pass


class MapperValidationError(MapperBaseException):
    """
    Input or reference data failed validation.
    
    Raised for unknown environments, missing required environment variables,
    an empty user id, and reference data that cannot be joined.
    """
    pass


class MapperConnectionError(MapperBaseException):
    """An external service (document store, telemetry API) could not be reached."""
    pass


class MapperProcessingError(MapperBaseException):
    """A read or write against a store failed after the connection was established."""
    pass
