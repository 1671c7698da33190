"""Farm, Device and Taxonomy Data Models

This module defines the Pydantic models for reference data read from the
document store. Field aliases match the stored document keys so raw documents
validate directly with ``model_validate``.
"""

from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .identifiers import normalize_id

Coordinate = Tuple[float, float]


def _normalize_optional_id(value: Any) -> Optional[str]:
    return None if value is None else normalize_id(value)


class TaxonomyEntry(BaseModel):
    """Reference table row mapping a categorical ID to a display name.
    
    Used for soil types, terrain types, water sources and device types.
    """
    
    model_config = ConfigDict(populate_by_name=True, extra='ignore')
    
    entry_id: str = Field(..., alias='_id', description="Taxonomy entry ID")
    name: str = Field(..., description="Human-readable category name")
    
    @field_validator('entry_id', mode='before')
    @classmethod
    def normalize_entry_id(cls, v: Any) -> str:
        return normalize_id(v)


class Farm(BaseModel):
    """Data model for a registered farm.
    
    The boundary is the ordered ring of (lat, lng) vertices stored under the
    document's ``location`` key. ``farm_id`` and ``boundary`` identify the farm
    and are carried unchanged into every derived record.
    
    Attributes:
        farm_id: Document ID of the farm
        user_id: Owning user
        boundary: Ordered (lat, lng) vertices forming a closed ring
        soil_type_id: Soil taxonomy ID
        terrain_type_id: Terrain taxonomy ID
        water_source_id: Water source taxonomy ID
    """
    
    model_config = ConfigDict(populate_by_name=True, extra='ignore')
    
    farm_id: str = Field(..., alias='_id', description="Farm document ID")
    user_id: Optional[str] = Field(None, alias='userId', description="Owning user ID")
    boundary: List[Coordinate] = Field(..., alias='location', description="Boundary ring of (lat, lng) vertices")
    soil_type_id: str = Field(..., alias='soilTypeId', description="Soil taxonomy ID")
    terrain_type_id: str = Field(..., alias='terrainTypeId', description="Terrain taxonomy ID")
    water_source_id: str = Field(..., alias='waterSourceId', description="Water source taxonomy ID")
    
    @field_validator('farm_id', 'soil_type_id', 'terrain_type_id', 'water_source_id', mode='before')
    @classmethod
    def normalize_ids(cls, v: Any) -> str:
        return normalize_id(v)
    
    @field_validator('user_id', mode='before')
    @classmethod
    def normalize_user_id(cls, v: Any) -> Optional[str]:
        return _normalize_optional_id(v)
    
    def is_closed_ring(self) -> bool:
        """Check whether the boundary's last vertex repeats the first."""
        return len(self.boundary) > 1 and self.boundary[0] == self.boundary[-1]


class ResolvedFarm(Farm):
    """Farm with soil, terrain and water-source names resolved from taxonomies."""
    
    soil_type: str = Field(..., alias='soilType', description="Resolved soil type name")
    terrain_type: str = Field(..., alias='terrainType', description="Resolved terrain type name")
    water_source: str = Field(..., alias='waterSource', description="Resolved water source name")


class Device(BaseModel):
    """Data model for a device registered to a user."""
    
    model_config = ConfigDict(populate_by_name=True, extra='ignore')
    
    device_id: str = Field(..., alias='deviceId', description="Device identifier used by the telemetry API")
    device_type_id: str = Field(..., alias='deviceTypeId', description="Device type taxonomy ID")
    user_id: Optional[str] = Field(None, alias='userId', description="Owning user ID")
    
    @field_validator('device_id', 'device_type_id', mode='before')
    @classmethod
    def normalize_ids(cls, v: Any) -> str:
        return normalize_id(v)
    
    @field_validator('user_id', mode='before')
    @classmethod
    def normalize_user_id(cls, v: Any) -> Optional[str]:
        return _normalize_optional_id(v)
