"""Telemetry API Client

Fetches the current location reading for a set of devices with a single POST.
"""

import logging
from typing import Dict, List, Optional, Sequence

import requests

from mapper_core.config import ConfigLoader
from mapper_core.connection import AuthHandler
from ..exceptions import TelemetryFetchFailure
from ..models import TelemetryRecord, normalize_id

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30


class TelemetryClient:
    """Client for the device records endpoint.
    
    The endpoint takes ``{"ids": "<id>,<id>,..."}`` and answers with a JSON list
    of ``{"deviceId", "location": {"latitude", "longitude"}}`` objects.
    """
    
    def __init__(self, url: str, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
                 headers: Optional[Dict[str, str]] = None):
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.headers = headers or {'Content-Type': 'application/json'}
    
    @classmethod
    def from_config(cls, config_loader: ConfigLoader, environment: str,
                    auth_handler: Optional[AuthHandler] = None) -> "TelemetryClient":
        """Create a client from the telemetry_api configuration section."""
        api_config = config_loader.get_section(environment, 'telemetry_api')
        auth_handler = auth_handler or AuthHandler(config_loader, environment)
        return cls(
            url=api_config['url'],
            timeout_seconds=api_config.get('timeout_seconds', DEFAULT_TIMEOUT_SECONDS),
            headers=auth_handler.get_telemetry_headers(),
        )
    
    def fetch_records(self, device_ids: Sequence[str]) -> List[TelemetryRecord]:
        """Fetch current readings for the given devices.
        
        Args:
            device_ids: Non-empty sequence of device identifiers
            
        Returns:
            Parsed telemetry readings, in response order
            
        Raises:
            ValueError: If device_ids is empty
            TelemetryFetchFailure: If the request fails or the payload is not a list
        """
        if not device_ids:
            raise ValueError("fetch_records requires at least one device id")
        
        payload = {'ids': ','.join(normalize_id(device_id) for device_id in device_ids)}
        logger.info(f"Requesting telemetry for {len(device_ids)} device(s) from {self.url}")
        
        try:
            response = requests.post(
                self.url, json=payload, headers=self.headers, timeout=self.timeout_seconds
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Telemetry request failed: {e}")
            raise TelemetryFetchFailure(
                f"Telemetry request failed: {e}",
                {"url": self.url, "device_count": len(device_ids)}
            ) from e
        
        if not isinstance(data, list):
            raise TelemetryFetchFailure(
                "Telemetry response is not a list of records",
                {"url": self.url, "payload_type": type(data).__name__}
            )
        
        records = [TelemetryRecord.model_validate(item) for item in data]
        logger.info(f"Received {len(records)} telemetry record(s)")
        return records
