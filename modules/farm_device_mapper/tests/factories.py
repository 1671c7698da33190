"""Builders for farms and telemetry readings used across the tests."""

from modules.farm_device_mapper.models import ResolvedFarm, TelemetryRecord

SQUARE_A = [(0, 0), (0, 2), (2, 2), (2, 0), (0, 0)]
SQUARE_B = [(3, 3), (3, 5), (5, 5), (5, 3), (3, 3)]


def make_farm(farm_id, boundary, soil_type="Loam", terrain_type="Flat", water_source="Canal"):
    """Build a resolved farm with default taxonomy names."""
    return ResolvedFarm(
        farm_id=farm_id,
        boundary=boundary,
        soil_type_id="s1",
        terrain_type_id="t1",
        water_source_id="w1",
        soil_type=soil_type,
        terrain_type=terrain_type,
        water_source=water_source,
    )


def make_record(device_id, latitude, longitude):
    """Build a telemetry reading the way the API returns it."""
    return TelemetryRecord.model_validate({
        "deviceId": device_id,
        "location": {"latitude": latitude, "longitude": longitude},
    })
