"""Farm Device Mapper Specific Exceptions

Extends the framework exception hierarchy with the failure kinds of a
mapping run. Each one aborts the run; none of them is retried.
"""

from mapper_core.exceptions import (
    MapperConnectionError, MapperProcessingError, MapperValidationError
)


class LookupFailure(MapperValidationError):
    """A categorical ID has no matching taxonomy entry."""
    
    def __init__(self, category: str, category_id: str, **context):
        super().__init__(
            f"No {category} entry found for id '{category_id}'",
            {"category": category, "category_id": category_id, **context}
        )
        self.category = category
        self.category_id = category_id


class TelemetryFetchFailure(MapperConnectionError):
    """The telemetry API call failed or returned an unusable payload."""
    pass


class PersistenceFailure(MapperProcessingError):
    """A farm device upsert failed.
    
    Upserts that completed before the failure are not rolled back; the
    ``persisted_count`` context entry reports how many were written.
    """
    
    def __init__(self, message: str, farm_id: str, persisted_count: int = 0):
        super().__init__(message, {"farm_id": farm_id, "persisted_count": persisted_count})
        self.farm_id = farm_id
        self.persisted_count = persisted_count
