"""Data Access Components

Adapters for the document store (reference data), the telemetry API and the
farm device key-value store.
"""

from .reference_data_loader import ReferenceDataLoader
from .telemetry_client import TelemetryClient
from .farm_device_store import FarmDeviceStore, build_update_request

__all__ = [
    'ReferenceDataLoader',
    'TelemetryClient',
    'FarmDeviceStore',
    'build_update_request',
]
