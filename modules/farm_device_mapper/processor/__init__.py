"""Farm Device Mapper Processor Components"""

from .farm_device_mapper import FarmDeviceMapper

__all__ = ['FarmDeviceMapper']
