"""
Shared fixtures for farm device mapper tests.

Provides reference documents shaped like the stored collections and the
parsed device and device type models built from them.
"""

import pytest

from modules.farm_device_mapper.models import Device, TaxonomyEntry
from factories import SQUARE_A, SQUARE_B


@pytest.fixture
def farm_documents():
    """Farm documents as stored in the userfarms collection."""
    return [
        {"_id": "farm-a", "userId": "user-1", "location": [list(v) for v in SQUARE_A],
         "soilTypeId": "s1", "terrainTypeId": "t1", "waterSourceId": "w1", "name": "North"},
        {"_id": "farm-b", "userId": "user-1", "location": [list(v) for v in SQUARE_B],
         "soilTypeId": "s2", "terrainTypeId": "t2", "waterSourceId": "w2", "name": "South"},
    ]


@pytest.fixture
def device_documents():
    """Device documents as stored in the userdevices collection."""
    return [
        {"deviceId": "D1", "deviceTypeId": "type-soil", "userId": "user-1"},
        {"deviceId": "D2", "deviceTypeId": "type-soil", "userId": "user-1"},
        {"deviceId": "W1", "deviceTypeId": "type-weather", "userId": "user-1"},
    ]


@pytest.fixture
def device_type_documents():
    return [
        {"_id": "type-soil", "name": "Soil Sensor"},
        {"_id": "type-weather", "name": "Weather Station"},
    ]


@pytest.fixture
def soil_type_documents():
    return [{"_id": "s1", "name": "Loam"}, {"_id": "s2", "name": "Clay"}]


@pytest.fixture
def terrain_type_documents():
    return [{"_id": "t1", "name": "Flat"}, {"_id": "t2", "name": "Hilly"}]


@pytest.fixture
def water_source_documents():
    return [{"_id": "w1", "name": "Canal"}, {"_id": "w2", "name": "Borewell"}]


@pytest.fixture
def device_types(device_type_documents):
    return [TaxonomyEntry.model_validate(doc) for doc in device_type_documents]


@pytest.fixture
def devices(device_documents):
    return [Device.model_validate(doc) for doc in device_documents]
