"""Telemetry reading models returned by the device records API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .farm import Coordinate
from .identifiers import normalize_id


class GeoLocation(BaseModel):
    """Reported device position. String coordinates are coerced to floats."""
    
    latitude: float = Field(..., description="Reported latitude")
    longitude: float = Field(..., description="Reported longitude")


class TelemetryRecord(BaseModel):
    """Current reading for one device."""
    
    model_config = ConfigDict(populate_by_name=True, extra='ignore')
    
    device_id: str = Field(..., alias='deviceId', description="Reporting device identifier")
    location: GeoLocation = Field(..., description="Current device position")
    
    @field_validator('device_id', mode='before')
    @classmethod
    def normalize_device_id(cls, v: Any) -> str:
        return normalize_id(v)
    
    @property
    def point(self) -> Coordinate:
        """Position as a (lat, lng) pair, the vertex order used by farm boundaries."""
        return (self.location.latitude, self.location.longitude)
