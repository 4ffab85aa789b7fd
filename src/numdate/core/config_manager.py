"""Configuration Management for numdate

Handles loading, validation, and management of parser configuration.
Supports hierarchical YAML configuration with environment overrides.
"""

import os
import re
import threading
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .error_handler import ConfigurationError
from .logging_manager import LoggingManager


class ParserConfig(BaseModel):
    """Configuration for the date disambiguation engine.
    
    ``log_anomalies`` enables the warnings for two preferred results across
    groups and for a group matching its preferred parser and several others.
    """
    base_year: Optional[int] = Field(default=None, ge=0)
    log_anomalies: bool = Field(default=True)
    
    @field_validator('base_year')
    @classmethod
    def validate_base_year(cls, v):
        """Base year must not lie in the future"""
        if v is not None and v > date.today().year:
            raise ValueError(f"Base year {v} is greater than the current year")
        return v


class LoggingConfig(BaseModel):
    """Configuration for logging."""
    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_to_console: bool = Field(default=True)
    log_to_file: bool = Field(default=False)
    file_path: str = Field(default="logs/numdate.log")
    max_file_size: str = Field(default="10MB")
    backup_count: int = Field(default=5, ge=1, le=20)
    
    @field_validator('max_file_size')
    @classmethod
    def validate_file_size(cls, v):
        """Validate file size format"""
        if not re.match(r'^\d+[KMG]B$', v.upper()):
            raise ValueError("File size must be in format: 10KB, 10MB, or 1GB")
        return v


class AppConfig(BaseModel):
    """Main configuration."""
    app_name: str = Field(default="numdate")
    environment: str = Field(default="development", pattern="^(development|testing|staging|production)$")
    
    parser: ParserConfig = Field(default_factory=ParserConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    
    model_config = {"validate_assignment": True}


class ConfigManager:
    """Manages configuration loading and validation."""
    
    ENV_PREFIX = "NUMDATE_"
    
    def __init__(self, config_path: Optional[Path] = None, environment: Optional[str] = None):
        """Initialize configuration manager.
        
        Args:
            config_path: Optional path to the configuration directory
            environment: Environment name (development, testing, staging, production)
        """
        self.config_base_path = Path(config_path) if config_path else self._get_default_config_path()
        self.environment = environment or os.getenv('NUMDATE_ENV', 'development')
        self._config: Optional[AppConfig] = None
        self._lock = threading.Lock()
        self.logger = LoggingManager.get_logger(__name__)
        
        # Configuration file paths
        self.config_files = self._get_config_files()
        
    def _get_default_config_path(self) -> Path:
        """Get the default configuration directory."""
        config_locations = [
            Path("config"),
            Path.home() / ".numdate",
        ]
        
        for location in config_locations:
            if location.exists() and location.is_dir():
                return location
                
        return Path("config")
    
    def _get_config_files(self) -> Dict[str, Path]:
        """Get configuration file paths for hierarchical loading."""
        base_dir = self.config_base_path
        
        return {
            'default': base_dir / 'default_config.yaml',
            'environment': base_dir / f'{self.environment}.yaml',
            'local': base_dir / 'local.yaml'  # For development overrides
        }
    
    def load_config(self) -> AppConfig:
        """Load and validate configuration with hierarchical overrides.
        
        Returns:
            Validated configuration
            
        Raises:
            ConfigurationError: If a file is malformed or validation fails
        """
        with self._lock:
            if self._config:
                return self._config
            
            config_data: Dict[str, Any] = {}
            
            # Load configurations in order of precedence
            for config_type, config_file in self.config_files.items():
                if config_file.exists():
                    self.logger.info(f"Loading {config_type} config from {config_file}")
                    self._deep_merge(config_data, self._load_yaml_file(config_file))
            
            env_overrides = self._get_env_overrides()
            if env_overrides:
                self.logger.info(f"Applying environment overrides: {list(env_overrides.keys())}")
                self._deep_merge(config_data, env_overrides)
            
            self._config = self._validate(config_data)
            return self._config
    
    def update_config(self, updates: Dict[str, Any]) -> AppConfig:
        """Update configuration with new values.
        
        Args:
            updates: Dictionary of configuration updates
            
        Returns:
            Updated configuration
        """
        current = self.load_config()
        with self._lock:
            config_data = current.model_dump()
            self._deep_merge(config_data, updates)
            self._config = self._validate(config_data)
            return self._config
    
    def get_config(self) -> AppConfig:
        """Get current configuration, loading it if necessary."""
        return self._config or self.load_config()
    
    def _validate(self, config_data: Dict[str, Any]) -> AppConfig:
        try:
            return AppConfig(**config_data)
        except ValidationError as e:
            self.logger.error(f"Configuration validation failed: {e}")
            raise ConfigurationError(f"Invalid configuration: {e}")
            
    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file.
        
        Returns:
            Configuration dictionary
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            self.logger.error(f"Failed to parse YAML file {file_path}: {e}")
            raise ConfigurationError(f"Invalid YAML in {file_path}: {e}")
    
    def _get_env_overrides(self) -> Dict[str, Any]:
        """Get configuration overrides from environment variables.
        
        Environment variables follow pattern: NUMDATE_<SECTION>_<KEY>
        Example: NUMDATE_PARSER_BASE_YEAR -> parser.base_year
        """
        overrides: Dict[str, Any] = {}
        sections = set(AppConfig.model_fields)
        
        for key, value in os.environ.items():
            if not key.startswith(self.ENV_PREFIX) or key == 'NUMDATE_ENV':
                continue
            
            remainder = key[len(self.ENV_PREFIX):].lower()
            section, _, field_name = remainder.partition('_')
            if section in sections and field_name:
                overrides.setdefault(section, {})[field_name] = self._convert_env_value(value)
            elif remainder in sections:
                overrides[remainder] = self._convert_env_value(value)
        
        return overrides
    
    def _convert_env_value(self, value: str) -> Union[str, int, float, bool]:
        """Convert environment variable string to appropriate type."""
        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'
        
        try:
            if '.' in value:
                return float(value)
            return int(value)
        except ValueError:
            pass
        
        return value
    
    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]):
        """Recursively merge override into base in place."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value
