"""Sensor Filter

Selects the devices whose registered type is the canonical soil sensor type.
Only these devices are sent to the telemetry API.
"""

import logging
from typing import Iterable, List

from ..exceptions import LookupFailure
from ..models import Device, TaxonomyEntry, normalize_id

logger = logging.getLogger(__name__)

SOIL_SENSOR_TYPE_NAME = "Soil Sensor"


def find_device_type(device_types: Iterable[TaxonomyEntry], type_name: str) -> TaxonomyEntry:
    """Return the first device type entry with the given name.
    
    Raises:
        LookupFailure: If no entry has that name
    """
    for entry in device_types:
        if entry.name == type_name:
            return entry
    raise LookupFailure("device type", type_name)


def select_soil_sensors(devices: Iterable[Device],
                        device_types: Iterable[TaxonomyEntry],
                        sensor_type_name: str = SOIL_SENSOR_TYPE_NAME) -> List[Device]:
    """Filter devices down to soil sensors, preserving input order.
    
    Args:
        devices: All devices registered to the user
        device_types: Device type taxonomy
        sensor_type_name: Name of the soil sensor taxonomy entry
        
    Returns:
        Devices whose type ID equals the soil sensor entry's ID (may be empty)
        
    Raises:
        LookupFailure: If the soil sensor taxonomy entry itself is missing
    """
    sensor_type_id = normalize_id(find_device_type(device_types, sensor_type_name).entry_id)
    sensors = [device for device in devices
               if normalize_id(device.device_type_id) == sensor_type_id]
    
    logger.info(f"Selected {len(sensors)} soil sensor(s) of type {sensor_type_id}")
    return sensors
