"""Farm Device Mapper Data Models

This package contains Pydantic data models for farms, devices, taxonomies,
telemetry readings and the per-farm aggregate written after each run.
"""

from .identifiers import normalize_id
from .farm import Coordinate, TaxonomyEntry, Farm, ResolvedFarm, Device
from .telemetry import GeoLocation, TelemetryRecord
from .mapped_farm import MappedFarm, MappingRunSummary

__all__ = [
    'normalize_id',
    'Coordinate',
    'TaxonomyEntry',
    'Farm',
    'ResolvedFarm',
    'Device',
    'GeoLocation',
    'TelemetryRecord',
    'MappedFarm',
    'MappingRunSummary',
]
