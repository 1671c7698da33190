"""
Unit tests for farm device mapper data models.

Tests validation of stored documents, identifier normalization and the
MappedFarm aggregate.
"""

import pytest
from bson import ObjectId
from pydantic import ValidationError

from modules.farm_device_mapper.models import (
    Device, Farm, MappedFarm, MappingRunSummary, TaxonomyEntry, TelemetryRecord, normalize_id
)
from factories import SQUARE_A, make_farm


class TestNormalizeId:
    def test_string_unchanged(self):
        assert normalize_id("abc") == "abc"
    
    def test_numbers_and_objects_become_strings(self):
        assert normalize_id(42) == "42"
        assert normalize_id(ObjectId("64b7f0c2a1b2c3d4e5f60718")) == "64b7f0c2a1b2c3d4e5f60718"
    
    def test_none_rejected(self):
        with pytest.raises(ValueError):
            normalize_id(None)


class TestFarm:
    def test_from_document(self, farm_documents):
        farm = Farm.model_validate(farm_documents[0])
        
        assert farm.farm_id == "farm-a"
        assert farm.user_id == "user-1"
        assert farm.boundary == [(0.0, 0.0), (0.0, 2.0), (2.0, 2.0), (2.0, 0.0), (0.0, 0.0)]
        assert farm.soil_type_id == "s1"
        assert farm.is_closed_ring()
    
    def test_object_ids_normalized(self):
        farm = Farm.model_validate({
            "_id": ObjectId("64b7f0c2a1b2c3d4e5f60718"),
            "location": SQUARE_A,
            "soilTypeId": ObjectId("5f1e2d3c4b5a697887766554"),
            "terrainTypeId": 7,
            "waterSourceId": "w1",
        })
        
        assert farm.farm_id == "64b7f0c2a1b2c3d4e5f60718"
        assert farm.soil_type_id == "5f1e2d3c4b5a697887766554"
        assert farm.terrain_type_id == "7"
    
    def test_open_ring_detected(self):
        farm = Farm(farm_id="f", boundary=[(0, 0), (0, 1), (1, 1)],
                    soil_type_id="s", terrain_type_id="t", water_source_id="w")
        assert not farm.is_closed_ring()
    
    def test_missing_boundary_rejected(self):
        with pytest.raises(ValidationError):
            Farm.model_validate({"_id": "f", "soilTypeId": "s",
                                 "terrainTypeId": "t", "waterSourceId": "w"})


class TestDeviceAndTaxonomy:
    def test_device_from_document(self, device_documents):
        device = Device.model_validate(device_documents[0])
        
        assert device.device_id == "D1"
        assert device.device_type_id == "type-soil"
    
    def test_taxonomy_entry_from_document(self):
        entry = TaxonomyEntry.model_validate({"_id": 3, "name": "Loam", "order": 1})
        
        assert entry.entry_id == "3"
        assert entry.name == "Loam"


class TestTelemetryRecord:
    def test_string_coordinates_coerced(self):
        record = TelemetryRecord.model_validate({
            "deviceId": 101,
            "location": {"latitude": "1.25", "longitude": "-3.5"},
        })
        
        assert record.device_id == "101"
        assert record.point == (1.25, -3.5)
    
    def test_non_numeric_coordinate_rejected(self):
        with pytest.raises(ValidationError):
            TelemetryRecord.model_validate({
                "deviceId": "D1",
                "location": {"latitude": "north", "longitude": "1"},
            })


class TestMappedFarm:
    def test_from_farm(self):
        farm = make_farm("farm-a", SQUARE_A)
        
        mapped = MappedFarm.from_farm(farm, ["D1", "D2"])
        
        assert mapped.farm_id == "farm-a"
        assert mapped.devices == ["D1", "D2"]
        assert mapped.location == farm.boundary
        assert mapped.soil_type == "Loam"
        assert mapped.has_devices()
        assert mapped.get_summary() == "Farm farm-a: 2 device(s)"
    
    def test_device_list_is_owned_copy(self):
        devices = ["D1"]
        mapped = MappedFarm.from_farm(make_farm("farm-a", SQUARE_A), devices)
        devices.append("D2")
        
        assert mapped.devices == ["D1"]
    
    def test_serialized_with_stored_keys(self):
        mapped = MappedFarm.from_farm(make_farm("farm-a", SQUARE_A), [])
        
        data = mapped.model_dump(by_alias=True)
        
        assert set(data) == {"farmId", "devices", "location", "soilType", "terrainType", "waterSource"}
        assert not mapped.has_devices()


class TestMappingRunSummary:
    def test_processing_summary(self):
        summary = MappingRunSummary(
            user_id="user-1", sensor_count=2, telemetry_records=2,
            farms_mapped=2, devices_mapped=1, persisted_count=2
        )
        
        text = summary.get_processing_summary()
        assert "user=user-1" in text
        assert "persisted=2" in text
