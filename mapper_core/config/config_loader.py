"""
Configuration loader for the farm device mapper.

This module provides the ConfigLoader class that handles loading and validating
JSON configuration files for multi-environment deployments.
"""

import json
import os
from pathlib import Path
from typing import Dict, Any, Optional
from functools import lru_cache

from ..exceptions import MapperConfigurationError, MapperValidationError
from ..utils import get_logger

REQUIRED_SECTIONS = ["document_store", "telemetry_api", "farm_device_store", "logging", "processing"]


class ConfigLoader:
    """
    Configuration loader and validator for the farm device mapper.
    
    This class handles loading environment-specific configuration from JSON files,
    merging the shared block into each environment, validating required sections,
    and providing access to individual configuration sections.
    """
    
    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize the configuration loader.
        
        Args:
            config_dir: Directory containing configuration files (defaults to 'config/')
        """
        self.logger = get_logger(__name__)
        self.config_dir = Path(config_dir) if config_dir else Path("config")
    
    @lru_cache(maxsize=2)
    def load_environment_config(self, environment: str) -> Dict[str, Any]:
        """
        Load configuration for a specific environment.
        
        Shared sections are merged one level deep: a shared dictionary section is
        used as the base and the environment's own keys override it.
        
        Args:
            environment: Environment name (development/production)
            
        Returns:
            Dictionary containing environment-specific configuration merged with shared config
            
        Raises:
            MapperConfigurationError: If configuration cannot be loaded
            MapperValidationError: If configuration structure is invalid
        """
        env_config_path = self.config_dir / "environment_config.json"
        
        if not env_config_path.exists():
            raise MapperConfigurationError(
                f"Environment configuration file not found: {env_config_path}"
            )
        
        try:
            with open(env_config_path, 'r') as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise MapperConfigurationError(
                f"Invalid JSON in environment configuration: {str(e)}"
            )
        
        if "environments" not in config_data:
            raise MapperValidationError("Missing 'environments' key in configuration")
        
        if environment not in config_data["environments"]:
            available_envs = list(config_data["environments"].keys())
            raise MapperValidationError(
                f"Environment '{environment}' not found. Available: {available_envs}"
            )
        
        env_config = self._merge_shared(
            config_data.get("shared", {}),
            config_data["environments"][environment]
        )
        self._validate_environment_config(env_config, environment)
        
        env_config["environment"] = environment
        env_config["_validation"] = config_data.get("validation", {})
        
        self.logger.info(f"Loaded configuration for environment: {environment}")
        return env_config
    
    def get_section(self, environment: str, section: str) -> Dict[str, Any]:
        """
        Get a single configuration section for an environment.
        
        Args:
            environment: Environment name
            section: Section name (document_store, telemetry_api, ...)
            
        Returns:
            Dictionary containing the section configuration
            
        Raises:
            MapperConfigurationError: If the section is not configured
        """
        env_config = self.load_environment_config(environment)
        
        if section not in env_config:
            raise MapperConfigurationError(
                f"Section '{section}' not found in {environment} configuration"
            )
        
        return env_config[section]
    
    def validate_environment_variables(self, environment: str) -> None:
        """
        Validate that required environment variables are set.
        
        Args:
            environment: Environment name to validate
            
        Raises:
            MapperValidationError: If required environment variables are missing
        """
        env_config = self.load_environment_config(environment)
        required_vars = env_config.get("_validation", {}).get("required_environment_variables", [])
        
        missing_vars = [var for var in required_vars if not os.getenv(var)]
        
        if missing_vars:
            raise MapperValidationError(
                f"Missing required environment variables: {', '.join(missing_vars)}"
            )
        
        self.logger.info(f"Environment variables validated for: {environment}")
    
    @staticmethod
    def _merge_shared(shared: Dict[str, Any], env: Dict[str, Any]) -> Dict[str, Any]:
        merged = {key: (value.copy() if isinstance(value, dict) else value)
                  for key, value in shared.items()}
        
        for key, value in env.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key].update(value)
            else:
                merged[key] = value
        
        return merged
    
    def _validate_environment_config(self, env_config: Dict[str, Any], environment: str) -> None:
        """
        Validate merged environment configuration structure.
        
        Args:
            env_config: Merged configuration data to validate
            environment: Environment name being validated
            
        Raises:
            MapperValidationError: If configuration is invalid
        """
        for key in REQUIRED_SECTIONS:
            if key not in env_config:
                raise MapperValidationError(
                    f"Missing required key '{key}' in {environment} configuration"
                )
        
        collections = env_config["document_store"].get("collections", {})
        required_collections = ["farms", "devices", "device_types",
                                "soil_types", "terrain_types", "water_sources"]
        missing = [name for name in required_collections if name not in collections]
        if missing:
            raise MapperValidationError(
                f"Missing document store collections in {environment} configuration: {missing}"
            )
        
        if not env_config["telemetry_api"].get("url"):
            raise MapperValidationError(
                f"Missing telemetry_api.url in {environment} configuration"
            )
        
        if not env_config["farm_device_store"].get("table_name"):
            raise MapperValidationError(
                f"Missing farm_device_store.table_name in {environment} configuration"
            )
    
    def clear_cache(self) -> None:
        """Clear the configuration cache."""
        self.load_environment_config.cache_clear()
        self.logger.info("Configuration cache cleared")
