"""MappedFarm Data Model

This module defines the per-farm aggregate produced by each mapping run and
the summary model returned by the processor.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .farm import Coordinate, ResolvedFarm


class MappedFarm(BaseModel):
    """Per-farm aggregate of contained devices plus descriptive attributes.
    
    A MappedFarm is rebuilt from scratch on every run and overwrites the
    previously stored record for the same (user, farm) key.
    
    Attributes:
        farm_id: Farm document ID
        devices: IDs of devices whose reading lies inside the boundary, in reading order
        location: Farm boundary ring
        soil_type: Resolved soil type name
        terrain_type: Resolved terrain type name
        water_source: Resolved water source name
    """
    
    model_config = ConfigDict(populate_by_name=True)
    
    farm_id: str = Field(..., alias='farmId', description="Farm document ID")
    devices: List[str] = Field(default_factory=list, description="Contained device IDs")
    location: List[Coordinate] = Field(..., description="Farm boundary ring")
    soil_type: str = Field(..., alias='soilType', description="Resolved soil type name")
    terrain_type: str = Field(..., alias='terrainType', description="Resolved terrain type name")
    water_source: str = Field(..., alias='waterSource', description="Resolved water source name")
    
    @classmethod
    def from_farm(cls, farm: ResolvedFarm, devices: List[str]) -> "MappedFarm":
        """Build the aggregate for a farm with the given device list."""
        return cls(
            farm_id=farm.farm_id,
            devices=list(devices),
            location=list(farm.boundary),
            soil_type=farm.soil_type,
            terrain_type=farm.terrain_type,
            water_source=farm.water_source,
        )
    
    def has_devices(self) -> bool:
        """Check if any device was matched to this farm."""
        return bool(self.devices)
    
    def get_summary(self) -> str:
        """Get a summary string for logging."""
        return f"Farm {self.farm_id}: {len(self.devices)} device(s)"


class MappingRunSummary(BaseModel):
    """Outcome of one successful mapping run for a user."""
    
    user_id: str = Field(..., description="User whose farms were mapped")
    dry_run: bool = Field(False, description="Whether persistence was skipped")
    sensor_count: int = Field(ge=0, description="Soil sensors registered to the user")
    telemetry_records: int = Field(ge=0, description="Telemetry readings received")
    farms_mapped: int = Field(ge=0, description="MappedFarm records produced")
    devices_mapped: int = Field(ge=0, description="Device entries across all farms")
    persisted_count: int = Field(ge=0, description="Upserts written to the farm device store")
    mapped_farms: List[MappedFarm] = Field(default_factory=list, description="Produced aggregates")
    
    def get_processing_summary(self) -> str:
        return (f"user={self.user_id} farms={self.farms_mapped} devices={self.devices_mapped} "
                f"sensors={self.sensor_count} readings={self.telemetry_records} "
                f"persisted={self.persisted_count} dry_run={self.dry_run}")
