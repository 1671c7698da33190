"""FarmDeviceMapper Implementation

This module implements the main FarmDeviceMapper class that maps a user's soil
sensors to the farms containing them by implementing the ModuleProcessor interface.

Pipeline for one user:
    reference data (document store) -> taxonomy resolution -> sensor filter
    -> telemetry fetch -> aggregation -> sequential upserts

The document store connection is scoped to the loading phase and released on
every exit path. The first failure in any stage aborts the run; upserts that
already completed are not rolled back.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from mapper_core.config.config_loader import ConfigLoader
from mapper_core.connection import MongoConnector
from mapper_core.exceptions import MapperBaseException, MapperValidationError
from mapper_core.interfaces.module_processor import ModuleProcessor, ProcessingResult, ModuleStatus
from mapper_core.utils import log_performance
from ..data_access import FarmDeviceStore, ReferenceDataLoader, TelemetryClient
from ..models import Device, MappingRunSummary, ResolvedFarm, TelemetryRecord
from ..spatial_query import FarmDeviceAggregator
from ..taxonomy import SOIL_SENSOR_TYPE_NAME, TaxonomyResolver, select_soil_sensors

logger = logging.getLogger(__name__)


class FarmDeviceMapper(ModuleProcessor):
    """Farm device mapper implementing the ModuleProcessor interface.
    
    Collaborators are created from configuration on first use; tests and
    callers may inject their own connector, telemetry client or store.
    """
    
    def __init__(self, config_loader: ConfigLoader, environment: str = "development",
                 connector: Optional[MongoConnector] = None,
                 telemetry_client: Optional[TelemetryClient] = None,
                 farm_device_store: Optional[FarmDeviceStore] = None):
        """Initialize farm device mapper with shared configuration.
        
        Args:
            config_loader: ConfigLoader instance providing access to framework configuration
            environment: Environment name used to select configuration
            connector: Optional document store connector
            telemetry_client: Optional telemetry API client
            farm_device_store: Optional farm device store
        """
        self.config_loader = config_loader
        self.environment = environment
        self.connector = connector
        self.telemetry_client = telemetry_client
        self.farm_device_store = farm_device_store
        self.aggregator = FarmDeviceAggregator()
        
        self._last_run: Optional[datetime] = None
        self._last_error: Optional[str] = None
        self._running = False
        self._configuration_valid: Optional[bool] = None
        
        logger.info(f"FarmDeviceMapper initialized for environment {environment}")
    
    def validate_configuration(self) -> bool:
        """Validate that every section the pipeline needs is configured.
        
        Returns:
            bool: True if configuration is valid and complete, False otherwise
        """
        if self._configuration_valid is not None:
            return self._configuration_valid
        
        try:
            env_config = self.config_loader.load_environment_config(self.environment)
            
            for section in ('document_store', 'telemetry_api', 'farm_device_store'):
                if not env_config.get(section):
                    logger.error(f"Missing required configuration section: {section}")
                    self._configuration_valid = False
                    return False
            
            self.config_loader.validate_environment_variables(self.environment)
            
            logger.info("Module configuration validation successful")
            self._configuration_valid = True
            return True
            
        except Exception as e:
            logger.error(f"Configuration validation failed: {e}")
            self._configuration_valid = False
            return False
    
    @log_performance
    def run(self, user_id: str, dry_run: Optional[bool] = None) -> MappingRunSummary:
        """Map and store farm devices for one user.
        
        Args:
            user_id: User whose farms and devices are processed
            dry_run: If True, compute the aggregates without writing them;
                None uses the processing.dry_run setting
            
        Returns:
            MappingRunSummary describing the completed run
            
        Raises:
            MapperValidationError: If user_id is empty
            LookupFailure: If a taxonomy entry is missing
            TelemetryFetchFailure: If the telemetry API call fails
            PersistenceFailure: If an upsert fails
        """
        if not user_id:
            raise MapperValidationError("A user id is required to map farm devices")
        if dry_run is None:
            dry_run = self._default_dry_run()
        
        logger.info(f"Starting farm device mapping for user {user_id} (dry_run={dry_run})")
        self._running = True
        try:
            farms, sensors = self._load_reference_data(user_id)
            records = self._fetch_telemetry(sensors)
            mapped_farms = self.aggregator.aggregate(farms, records)
            
            persisted_count = 0
            if dry_run:
                logger.info(f"Dry run: skipping storage of {len(mapped_farms)} farm record(s)")
            else:
                persisted_count = self._get_farm_device_store().upsert_all(user_id, mapped_farms)
        finally:
            self._running = False
        
        summary = MappingRunSummary(
            user_id=user_id,
            dry_run=dry_run,
            sensor_count=len(sensors),
            telemetry_records=len(records),
            farms_mapped=len(mapped_farms),
            devices_mapped=sum(len(m.devices) for m in mapped_farms),
            persisted_count=persisted_count,
            mapped_farms=mapped_farms,
        )
        self._last_run = datetime.now()
        logger.info(f"Farm device mapping completed: {summary.get_processing_summary()}")
        return summary
    
    def process(self, user_id: str, dry_run: Optional[bool] = None) -> ProcessingResult:
        """Execute the mapping run and report it as a ProcessingResult.
        
        Failures are captured into the result instead of being raised.
        """
        start_time = datetime.now()
        
        if not self.validate_configuration():
            return ProcessingResult(
                success=False,
                records_processed=0,
                errors=["Configuration validation failed"],
                metadata={"dry_run": dry_run, "user_id": user_id},
                execution_time=0.0
            )
        
        try:
            summary = self.run(user_id, dry_run=dry_run)
        except Exception as e:
            execution_time = (datetime.now() - start_time).total_seconds()
            self._last_error = str(e)
            logger.error(f"Processing failed: {e}")
            
            metadata = {"dry_run": dry_run, "user_id": user_id}
            if isinstance(e, MapperBaseException):
                metadata.update(e.to_dict())
            else:
                metadata["error_type"] = type(e).__name__
            
            return ProcessingResult(
                success=False,
                records_processed=0,
                errors=[f"Processing failed: {e}"],
                metadata=metadata,
                execution_time=execution_time
            )
        
        self._last_error = None
        metadata = summary.model_dump(exclude={'mapped_farms'})
        metadata["environment"] = self.environment
        
        return ProcessingResult(
            success=True,
            records_processed=summary.farms_mapped,
            errors=[],
            metadata=metadata,
            execution_time=(datetime.now() - start_time).total_seconds()
        )
    
    def get_status(self) -> ModuleStatus:
        """Get current module processing status."""
        is_configured = self.validate_configuration()
        
        if self._running:
            status = "running"
        elif not is_configured or self._last_error:
            status = "error"
        else:
            status = "ready"
        
        return ModuleStatus(
            module_name="farm_device_mapper",
            is_configured=is_configured,
            last_run=self._last_run,
            status=status,
            health_check=is_configured and self._last_error is None
        )
    
    def _default_dry_run(self) -> bool:
        processing = self.config_loader.load_environment_config(self.environment).get('processing', {})
        return bool(processing.get('dry_run', False))
    
    def _load_reference_data(self, user_id: str) -> Tuple[List[ResolvedFarm], List[Device]]:
        store_config = self.config_loader.get_section(self.environment, 'document_store')
        taxonomy_config = self.config_loader.load_environment_config(self.environment).get('taxonomy', {})
        sensor_type_name = taxonomy_config.get('soil_sensor_type_name', SOIL_SENSOR_TYPE_NAME)
        
        connector = self.connector or MongoConnector(self.config_loader, self.environment)
        with connector as database:
            loader = ReferenceDataLoader(database, store_config['collections'])
            
            devices = loader.load_devices(user_id)
            device_types = loader.load_device_types()
            resolver = TaxonomyResolver(
                loader.load_soil_types(),
                loader.load_terrain_types(),
                loader.load_water_sources(),
            )
            sensors = select_soil_sensors(devices, device_types, sensor_type_name)
            farms = resolver.resolve_farms(loader.load_farms(user_id))
        
        logger.info(f"Loaded {len(farms)} farm(s) and {len(devices)} device(s) for user {user_id}")
        return farms, sensors
    
    def _fetch_telemetry(self, sensors: List[Device]) -> List[TelemetryRecord]:
        if not sensors:
            logger.info("No soil sensors registered, skipping telemetry fetch")
            return []
        
        if self.telemetry_client is None:
            self.telemetry_client = TelemetryClient.from_config(self.config_loader, self.environment)
        return self.telemetry_client.fetch_records([sensor.device_id for sensor in sensors])
    
    def _get_farm_device_store(self) -> FarmDeviceStore:
        if self.farm_device_store is None:
            self.farm_device_store = FarmDeviceStore.from_config(self.config_loader, self.environment)
        return self.farm_device_store
