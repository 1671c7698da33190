"""Farm Device Store

Writes one aggregate record per (user, farm) key to DynamoDB. Each call is an
``update_item`` upsert that overwrites the previous device list.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from mapper_core.config import ConfigLoader
from ..exceptions import PersistenceFailure
from ..models import MappedFarm

logger = logging.getLogger(__name__)

UPDATE_EXPRESSION = 'SET devices=:devices, #loc=:l, soilType=:s, terrainType=:t, waterSource=:w'


def _to_decimal(value: float) -> Decimal:
    # boto3 rejects float attribute values; go through str to keep the literal digits.
    return Decimal(str(value))


def build_update_request(user_id: str, mapped_farm: MappedFarm) -> Dict[str, Any]:
    """Build the ``update_item`` keyword arguments for one aggregate.
    
    Args:
        user_id: Owning user, the partition key
        mapped_farm: Aggregate to store, keyed by its farm_id
        
    Returns:
        Keyword arguments for ``Table.update_item``
    """
    return {
        'Key': {
            'userId': user_id,
            'farmId': mapped_farm.farm_id,
        },
        'UpdateExpression': UPDATE_EXPRESSION,
        # "location" is a DynamoDB reserved word
        'ExpressionAttributeNames': {'#loc': 'location'},
        'ExpressionAttributeValues': {
            ':devices': list(mapped_farm.devices),
            ':l': [[_to_decimal(lat), _to_decimal(lng)] for lat, lng in mapped_farm.location],
            ':s': mapped_farm.soil_type,
            ':t': mapped_farm.terrain_type,
            ':w': mapped_farm.water_source,
        },
    }


class FarmDeviceStore:
    """Upserts MappedFarm aggregates into the farm device table."""
    
    def __init__(self, table):
        """
        Args:
            table: boto3 DynamoDB Table resource
        """
        self.table = table
    
    @classmethod
    def from_config(cls, config_loader: ConfigLoader, environment: str) -> "FarmDeviceStore":
        """Create a store from the farm_device_store configuration section."""
        store_config = config_loader.get_section(environment, 'farm_device_store')
        resource_kwargs: Dict[str, Optional[str]] = {}
        for key in ('region_name', 'endpoint_url'):
            if store_config.get(key):
                resource_kwargs[key] = store_config[key]
        
        dynamodb = boto3.resource('dynamodb', **resource_kwargs)
        return cls(dynamodb.Table(store_config['table_name']))
    
    def upsert(self, user_id: str, mapped_farm: MappedFarm) -> Dict[str, Any]:
        """Write one aggregate.
        
        Raises:
            PersistenceFailure: If the update is rejected or cannot be sent
        """
        request = build_update_request(user_id, mapped_farm)
        try:
            response = self.table.update_item(**request)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Upsert failed for user {user_id} farm {mapped_farm.farm_id}: {e}")
            raise PersistenceFailure(
                f"Failed to store devices for farm {mapped_farm.farm_id}: {e}",
                farm_id=mapped_farm.farm_id
            ) from e
        
        logger.debug(f"Stored {mapped_farm.get_summary()} for user {user_id}")
        return response
    
    def upsert_all(self, user_id: str, mapped_farms: Iterable[MappedFarm]) -> int:
        """Write aggregates one after another, stopping at the first failure.
        
        Writes that completed before a failure stay committed.
        
        Returns:
            Number of aggregates written
            
        Raises:
            PersistenceFailure: With ``persisted_count`` set to the writes already done
        """
        persisted: List[str] = []
        for mapped_farm in mapped_farms:
            try:
                self.upsert(user_id, mapped_farm)
            except PersistenceFailure as e:
                e.persisted_count = len(persisted)
                e.context['persisted_count'] = len(persisted)
                raise
            persisted.append(mapped_farm.farm_id)
        
        logger.info(f"Stored {len(persisted)} farm device record(s) for user {user_id}")
        return len(persisted)
