"""Taxonomy Resolution Components

Joins farms and devices against the categorical reference tables.
"""

from .taxonomy_resolver import TaxonomyResolver
from .sensor_filter import SOIL_SENSOR_TYPE_NAME, find_device_type, select_soil_sensors

__all__ = [
    'TaxonomyResolver',
    'SOIL_SENSOR_TYPE_NAME',
    'find_device_type',
    'select_soil_sensors',
]
