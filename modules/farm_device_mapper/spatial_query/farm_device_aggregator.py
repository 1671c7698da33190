"""Farm Device Aggregator

Drives the containment matcher over every (reading, farm) pair and builds one
MappedFarm per farm, including farms that contain no device.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel, Field

from ..models import MappedFarm, ResolvedFarm, TelemetryRecord
from .containment import build_boundary_geometry, geometry_contains_point

logger = logging.getLogger(__name__)


class AggregationSummary(BaseModel):
    """Counters from the most recent aggregation."""
    
    farm_count: int = Field(ge=0, description="Distinct farms in the output")
    record_count: int = Field(ge=0, description="Telemetry readings examined")
    match_count: int = Field(ge=0, description="(reading, farm) pairs found in containment")
    empty_farm_count: int = Field(ge=0, description="Farms that matched no reading")
    unmatched_device_ids: List[str] = Field(default_factory=list, description="Devices outside every farm")


class FarmDeviceAggregator:
    """Builds the farm to device mapping for one run.
    
    Algorithm:
    - Every reading is tested against every farm boundary.
    - A reading inside several overlapping farms is appended to each of them.
    - Device lists follow reading order; repeated device IDs are kept.
    - Farms without any match are emitted with an empty device list.
    
    Output holds one MappedFarm per distinct farm_id, in the order farms were
    supplied. The computation is pure, so identical inputs give identical output.
    """
    
    def __init__(self):
        self.last_summary: Optional[AggregationSummary] = None
    
    def aggregate(self, farms: Sequence[ResolvedFarm],
                  records: Iterable[TelemetryRecord]) -> List[MappedFarm]:
        """Aggregate telemetry readings into per-farm device lists.
        
        Args:
            farms: Farms with resolved taxonomy names
            records: Current telemetry readings
            
        Returns:
            One MappedFarm per distinct farm_id
        """
        geometries = []
        for farm in farms:
            if not farm.is_closed_ring():
                logger.debug(f"Farm {farm.farm_id} boundary is an open ring, closing it implicitly")
            geometries.append((farm, build_boundary_geometry(farm.boundary)))
        
        devices_by_farm: Dict[str, List[str]] = {}
        # Static attributes come from the farm that created the entry.
        seed_farms: Dict[str, ResolvedFarm] = {}
        unmatched: List[str] = []
        record_count = 0
        match_count = 0
        
        for record in records:
            record_count += 1
            point = record.point
            matched = False
            
            for farm, geometry in geometries:
                if not geometry_contains_point(geometry, point):
                    continue
                matched = True
                match_count += 1
                if farm.farm_id not in devices_by_farm:
                    devices_by_farm[farm.farm_id] = []
                    seed_farms[farm.farm_id] = farm
                devices_by_farm[farm.farm_id].append(record.device_id)
            
            if not matched:
                unmatched.append(record.device_id)
        
        mapped_farms: List[MappedFarm] = []
        emitted = set()
        
        for farm in farms:
            if farm.farm_id in emitted:
                continue
            emitted.add(farm.farm_id)
            
            if farm.farm_id in devices_by_farm:
                mapped_farms.append(MappedFarm.from_farm(
                    seed_farms[farm.farm_id], devices_by_farm[farm.farm_id]
                ))
            else:
                mapped_farms.append(MappedFarm.from_farm(farm, []))
        
        empty_farm_count = sum(1 for mapped in mapped_farms if not mapped.has_devices())
        self.last_summary = AggregationSummary(
            farm_count=len(mapped_farms),
            record_count=record_count,
            match_count=match_count,
            empty_farm_count=empty_farm_count,
            unmatched_device_ids=unmatched,
        )
        
        logger.info(
            f"Aggregated {record_count} reading(s) into {len(mapped_farms)} farm(s): "
            f"{match_count} match(es), {empty_farm_count} farm(s) without devices"
        )
        if unmatched:
            logger.debug(f"Devices outside every farm boundary: {unmatched}")
        
        return mapped_farms


def aggregate_farm_devices(farms: Sequence[ResolvedFarm],
                           records: Iterable[TelemetryRecord]) -> List[MappedFarm]:
    """Convenience wrapper around ``FarmDeviceAggregator.aggregate``."""
    return FarmDeviceAggregator().aggregate(farms, records)
