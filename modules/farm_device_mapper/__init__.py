"""Farm Device Mapper Module

This module matches a user's soil sensors to the farm boundaries that contain
their current telemetry positions and stores one device list per farm.
"""

from .processor import FarmDeviceMapper

__all__ = ['FarmDeviceMapper']
