"""Reference Data Loader

Read-only access to the farm, device and taxonomy collections of the document
store. Farms and devices are filtered by owning user; taxonomies are read whole.
"""

import logging
from typing import Any, Dict, List, Optional

from pymongo.database import Database
from pymongo.errors import PyMongoError

from mapper_core.exceptions import MapperProcessingError
from ..models import Device, Farm, TaxonomyEntry

logger = logging.getLogger(__name__)


class ReferenceDataLoader:
    """Loads reference documents and validates them into models.
    
    Args:
        database: Open pymongo database handle
        collections: Logical name to collection name mapping (farms, devices,
            device_types, soil_types, terrain_types, water_sources)
    """
    
    def __init__(self, database: Database, collections: Dict[str, str]):
        self.database = database
        self.collections = collections
    
    def find(self, collection_name: str,
             query_filter: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Return all documents of a collection matching a filter.
        
        Raises:
            MapperProcessingError: If the query fails
        """
        try:
            documents = list(self.database[collection_name].find(query_filter or {}))
        except PyMongoError as e:
            logger.error(f"Query on {collection_name} failed: {e}")
            raise MapperProcessingError(
                f"Failed to read collection '{collection_name}': {e}",
                {"collection": collection_name}
            ) from e
        
        logger.debug(f"Loaded {len(documents)} document(s) from {collection_name}")
        return documents
    
    def load_farms(self, user_id: str) -> List[Farm]:
        documents = self.find(self._collection('farms'), {'userId': user_id})
        return [Farm.model_validate(doc) for doc in documents]
    
    def load_devices(self, user_id: str) -> List[Device]:
        documents = self.find(self._collection('devices'), {'userId': user_id})
        return [Device.model_validate(doc) for doc in documents]
    
    def load_device_types(self) -> List[TaxonomyEntry]:
        return self._load_taxonomy('device_types')
    
    def load_soil_types(self) -> List[TaxonomyEntry]:
        return self._load_taxonomy('soil_types')
    
    def load_terrain_types(self) -> List[TaxonomyEntry]:
        return self._load_taxonomy('terrain_types')
    
    def load_water_sources(self) -> List[TaxonomyEntry]:
        return self._load_taxonomy('water_sources')
    
    def _load_taxonomy(self, logical_name: str) -> List[TaxonomyEntry]:
        return [TaxonomyEntry.model_validate(doc)
                for doc in self.find(self._collection(logical_name))]
    
    def _collection(self, logical_name: str) -> str:
        try:
            return self.collections[logical_name]
        except KeyError:
            raise MapperProcessingError(
                f"No collection configured for '{logical_name}'",
                {"logical_name": logical_name}
            )
