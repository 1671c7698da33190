"""Farm Device Mapper Function Handler

Entry point for HTTP-triggered invocations. The user is taken from the
``userId`` path parameter; without it the function answers 200 with an
explanatory message and opens no connection.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from mapper_core.config import ConfigLoader
from mapper_core.utils import configure_logging
from .processor import FarmDeviceMapper

logger = logging.getLogger(__name__)

NO_USER_MESSAGE = 'There is no user id specified, please specify one'
CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Credentials': True,
}

ENVIRONMENT_VAR = 'FARM_MAPPER_ENVIRONMENT'
CONFIG_DIR_VAR = 'FARM_MAPPER_CONFIG_DIR'


def create_mapper(environment: Optional[str] = None,
                  config_dir: Optional[str] = None) -> FarmDeviceMapper:
    """Create a mapper from the deployment's environment variables."""
    environment = environment or os.getenv(ENVIRONMENT_VAR, 'production')
    config_loader = ConfigLoader(config_dir or os.getenv(CONFIG_DIR_VAR))
    
    configure_logging(config_loader, environment)
    
    return FarmDeviceMapper(config_loader, environment)


def handler(event: Optional[Dict[str, Any]], context: Any = None,
            mapper: Optional[FarmDeviceMapper] = None) -> Dict[str, Any]:
    """Map farm devices for the user named in the request path.
    
    Args:
        event: Invocation event carrying ``pathParameters.userId``
        context: Runtime context (unused)
        mapper: Optional pre-built mapper
        
    Returns:
        Response dictionary with statusCode, headers and JSON body
        
    Raises:
        Exception: Any failure from loading, fetching, matching or storing is
            re-raised unchanged as the invocation's error outcome
    """
    user_id = ((event or {}).get('pathParameters') or {}).get('userId')
    
    if not user_id:
        logger.info('No userId specified, exit...')
        return {
            'statusCode': 200,
            'body': json.dumps({'message': NO_USER_MESSAGE}),
        }
    
    mapper = mapper or create_mapper()
    
    try:
        mapper.run(user_id)
    except Exception:
        logger.exception(f"Farm device mapping failed for user {user_id}")
        raise
    
    return {
        'statusCode': 200,
        'headers': dict(CORS_HEADERS),
        'body': json.dumps({'success': 'true'}),
    }
