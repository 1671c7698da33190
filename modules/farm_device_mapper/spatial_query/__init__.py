"""Spatial Query Components

Point-in-boundary matching and the farm to device aggregation built on it.
"""

from .containment import build_boundary_geometry, geometry_contains_point, point_in_boundary
from .farm_device_aggregator import AggregationSummary, FarmDeviceAggregator, aggregate_farm_devices

__all__ = [
    'build_boundary_geometry',
    'geometry_contains_point',
    'point_in_boundary',
    'AggregationSummary',
    'FarmDeviceAggregator',
    'aggregate_farm_devices',
]
