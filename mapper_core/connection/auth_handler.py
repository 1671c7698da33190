"""
Credential handler for external services.

This module resolves the document store URI and telemetry API headers from
environment variables, falling back to configuration, without exposing
secrets in logs.
"""

import os
from typing import Dict
from urllib.parse import urlsplit, urlunsplit

from ..config import ConfigLoader
from ..exceptions import MapperConfigurationError
from ..utils import get_logger

logger = get_logger(__name__)

MONGO_URI_VAR = 'MONGO_URI'
TELEMETRY_API_KEY_VAR = 'TELEMETRY_API_KEY'


def mask_uri(uri: str) -> str:
    """Return the URI with any user:password component replaced by '***'."""
    parts = urlsplit(uri)
    if '@' not in parts.netloc:
        return uri
    host = parts.netloc.rsplit('@', 1)[1]
    return urlunsplit((parts.scheme, f"***@{host}", parts.path, parts.query, parts.fragment))


class AuthHandler:
    """
    Handles connection credentials for the document store and telemetry API.
    
    Environment variables take precedence over configured values so deployed
    functions can inject secrets without touching the configuration file.
    """
    
    def __init__(self, config_loader: ConfigLoader, environment: str = "development"):
        """
        Initialize the credential handler.
        
        Args:
            config_loader: ConfigLoader instance for accessing configuration
            environment: Environment whose configuration supplies defaults
        """
        self.config_loader = config_loader
        self.environment = environment
        logger.debug("AuthHandler initialized")
    
    def get_document_store_uri(self) -> str:
        """
        Get the document store connection URI.
        
        Returns:
            MongoDB connection URI from MONGO_URI or the document_store configuration
            
        Raises:
            MapperConfigurationError: If no URI is available
        """
        uri = os.getenv(MONGO_URI_VAR)
        source = MONGO_URI_VAR
        
        if not uri:
            store_config = self.config_loader.get_section(self.environment, 'document_store')
            uri = store_config.get('uri')
            source = 'configuration'
        
        if not uri or not uri.strip():
            raise MapperConfigurationError(
                "Document store URI not configured",
                {"environment": self.environment, "variable": MONGO_URI_VAR}
            )
        
        logger.debug(f"Using document store URI from {source}: {mask_uri(uri)}")
        return uri
    
    def get_telemetry_headers(self) -> Dict[str, str]:
        """
        Get HTTP headers for the telemetry API.
        
        Returns:
            Headers including a bearer token when TELEMETRY_API_KEY is set
        """
        headers = {'Content-Type': 'application/json'}
        api_key = os.getenv(TELEMETRY_API_KEY_VAR)
        if api_key:
            headers['Authorization'] = f"Bearer {api_key}"
        return headers
