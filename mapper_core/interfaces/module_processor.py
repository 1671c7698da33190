"""Module Processor Interface

Contract shared by processing modules: configuration validation, a per-user
processing entry point that reports through ProcessingResult, and a status
report for health checks.
"""

from abc import ABC, abstractmethod
from pydantic import BaseModel, Field
from typing import Optional, Dict, List, Any
from datetime import datetime


class ProcessingResult(BaseModel):
    """Outcome of one processing call.
    
    Failures are reported here with ``success=False`` and the error messages in
    ``errors``; ``metadata`` carries module-specific counters.
    """
    
    success: bool = Field(..., description="Whether the processing completed successfully")
    records_processed: int = Field(ge=0, description="Number of records produced")
    errors: List[str] = Field(default_factory=list, description="Error messages, empty on success")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Module-specific run details")
    execution_time: float = Field(ge=0.0, description="Wall-clock duration in seconds")


class ModuleStatus(BaseModel):
    """Health and configuration snapshot of a module."""
    
    module_name: str = Field(..., description="Name of the processing module")
    is_configured: bool = Field(..., description="Whether configuration validation passed")
    last_run: Optional[datetime] = Field(None, description="When the last successful run finished")
    status: str = Field(..., description="One of 'ready', 'running', 'error'")
    health_check: bool = Field(..., description="Configured and no error since the last success")


class ModuleProcessor(ABC):
    """Base class for processing modules.
    
    Work is always scoped to a single user. Implementations read their
    settings through the shared ConfigLoader.
    """
    
    @abstractmethod
    def __init__(self, config_loader, environment: str = "development"):
        """
        Args:
            config_loader: ConfigLoader instance providing access to configuration
            environment: Environment name used to select configuration
        """
        pass
    
    @abstractmethod
    def validate_configuration(self) -> bool:
        """Return True when every configuration section the module needs is present."""
        pass
    
    @abstractmethod
    def process(self, user_id: str, dry_run: Optional[bool] = None) -> ProcessingResult:
        """Run the module for one user.
        
        Args:
            user_id: Owner of the records being processed
            dry_run: If True, compute everything but write nothing; None
                leaves the choice to the module configuration
            
        Returns:
            ProcessingResult describing success or the captured failure
        """
        pass
    
    @abstractmethod
    def get_status(self) -> ModuleStatus:
        pass
