"""
MongoDB connector for the farm device mapper.

This module provides scoped document store connections with retry logic on
connection establishment. A connector is used as a context manager so the
client is released on every exit path.
"""

from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from .auth_handler import AuthHandler, mask_uri
from ..config import ConfigLoader
from ..exceptions import MapperConnectionError
from ..utils import get_logger

logger = get_logger(__name__)


class MongoConnector:
    """
    Document store connection manager with retry logic.
    
    Usage::
    
        with MongoConnector(config_loader, "production") as db:
            db["userfarms"].find({"userId": user_id})
    """
    
    def __init__(self, config_loader: ConfigLoader, environment: str = "development",
                 auth_handler: Optional[AuthHandler] = None):
        """
        Initialize the document store connector.
        
        Args:
            config_loader: ConfigLoader instance for accessing configuration
            environment: Environment whose document_store section is used
            auth_handler: Optional credential handler (created when omitted)
        """
        self.config_loader = config_loader
        self.environment = environment
        self.auth_handler = auth_handler or AuthHandler(config_loader, environment)
        self._client: Optional[MongoClient] = None
        self._database: Optional[Database] = None
        logger.debug("MongoConnector initialized")
    
    def connect(self) -> Database:
        """
        Establish the document store connection, reusing one that is already open.
        
        Returns:
            Database: Handle to the configured database
            
        Raises:
            MapperConnectionError: If the connection cannot be established
        """
        if self.is_connected():
            return self.get_database()
        
        store_config = self.config_loader.get_section(self.environment, 'document_store')
        uri = self.auth_handler.get_document_store_uri()
        database_name = store_config.get('database', 'SGCropMgtDB')
        timeout_ms = store_config.get('server_selection_timeout_ms', 5000)
        
        try:
            logger.info(f"Connecting to document store at {mask_uri(uri)}")
            client = self._open_client(uri, timeout_ms)
        except Exception as e:
            error_msg = f"Failed to connect to document store: {str(e)}"
            logger.error(error_msg)
            raise MapperConnectionError(error_msg, {"database": database_name}) from e
        
        self._client = client
        self._database = client[database_name]
        logger.info(f"Connected to document store database {database_name}")
        return self._database
    
    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(ConnectionFailure),
        reraise=True
    )
    def _open_client(self, uri: str, timeout_ms: int) -> MongoClient:
        client = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
        try:
            client.admin.command('ping')
        except Exception:
            client.close()
            raise
        return client
    
    def get_database(self) -> Optional[Database]:
        """
        Get the current database handle.
        
        Returns:
            Database if connected, None otherwise
        """
        return self._database
    
    def is_connected(self) -> bool:
        """Check if a client is currently open."""
        return self._client is not None
    
    def disconnect(self) -> None:
        """Close the client and clean up resources."""
        if self._client is not None:
            self._client.close()
            self._client = None
            self._database = None
            logger.info("Disconnected from document store")
    
    def __enter__(self) -> Database:
        return self.connect()
    
    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.disconnect()
        return False
