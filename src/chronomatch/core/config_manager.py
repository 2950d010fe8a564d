"""Configuration Management for chronomatch

Handles loading, validation, and management of extraction settings.
Supports hierarchical YAML configuration with environment overrides.
"""

import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Union, get_origin

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .error_handler import ConfigurationError


class MatchingConfig(BaseModel):
    """Configuration for the scanning engine."""
    exact_match: bool = Field(default=False)
    default_timezone: str = Field(default="UTC")
    # "per_call" samples the clock once per scan, "per_attempt" before every rule attempt
    reference_time: str = Field(default="per_call", pattern="^(per_call|per_attempt)$")
    catalogs: List[str] = Field(default=["weekdays", "hour", "casual"])

    @field_validator('catalogs')
    @classmethod
    def validate_catalogs(cls, v):
        """Catalog list must be non-empty and free of duplicates"""
        if not v:
            raise ValueError("At least one rule catalog must be enabled")
        if len(set(v)) != len(v):
            raise ValueError("Rule catalogs must not repeat")
        return v


class LoggingConfig(BaseModel):
    """Configuration for logging."""
    level: str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_to_console: bool = Field(default=True)
    log_dir: Optional[str] = None
    max_file_size: str = Field(default="10MB")
    backup_count: int = Field(default=5, ge=1, le=20)

    @field_validator('level', mode='before')
    @classmethod
    def normalize_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator('max_file_size')
    @classmethod
    def validate_file_size(cls, v):
        """Validate file size format"""
        import re
        if not re.match(r'^\d+[KMG]B$', v.upper()):
            raise ValueError("File size must be in format: 10KB, 10MB, or 1GB")
        return v


class AppConfig(BaseModel):
    """Main application configuration."""
    model_config = ConfigDict(validate_assignment=True)

    app_name: str = Field(default="chronomatch")
    environment: str = Field(default="development", pattern="^(development|testing|production)$")
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigManager:
    """Manages configuration loading and validation."""

    ENV_PREFIX = "CHRONOMATCH_"
    SECTIONS = {"matching": MatchingConfig, "logging": LoggingConfig}

    def __init__(self, config_path: Optional[Path] = None, environment: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional directory holding the YAML files
            environment: Environment name (development, testing, production)
        """
        self.config_base_path = Path(config_path) if config_path else self._get_default_config_path()
        self.environment = environment or os.getenv('CHRONOMATCH_ENV', 'development')
        self._config: Optional[AppConfig] = None
        self._lock = threading.Lock()
        self.logger = logging.getLogger(__name__)

        self.config_files = self._get_config_files()

    def _get_default_config_path(self) -> Path:
        """Get the default configuration directory."""
        config_locations = [
            Path("config"),
            Path.home() / ".chronomatch",
            Path("/etc/chronomatch"),
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
            'user': base_dir / 'user_preferences.yaml',
            'local': base_dir / 'local.yaml'
        }

    def load_config(self) -> AppConfig:
        """Load and validate configuration with hierarchical overrides.

        Returns:
            Validated application configuration

        Raises:
            ConfigurationError: If a file cannot be parsed or validation fails
        """
        with self._lock:
            if self._config:
                return self._config

            config_data: Dict[str, Any] = {}

            for config_type, config_file in self.config_files.items():
                if config_file.exists():
                    self.logger.info(f"Loading {config_type} config from {config_file}")
                    self._deep_merge(config_data, self._load_yaml_file(config_file))

            env_overrides = self._get_env_overrides()
            if env_overrides:
                self.logger.info(f"Applying environment overrides: {list(env_overrides.keys())}")
                self._deep_merge(config_data, env_overrides)

            config_data.setdefault('environment', self.environment)

            try:
                self._config = AppConfig(**config_data)
            except ValidationError as e:
                self.logger.error(f"Configuration validation failed: {e}")
                raise ConfigurationError(f"Invalid configuration: {e}") from e

            return self._config

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file."""
        try:
            with open(file_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            self.logger.error(f"Failed to parse YAML file {file_path}: {e}")
            raise ConfigurationError(f"Invalid YAML in {file_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Top level of {file_path} must be a mapping")
        return data

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Get configuration overrides from environment variables.

        Environment variables follow pattern: CHRONOMATCH_<SECTION>_<KEY>
        Example: CHRONOMATCH_MATCHING_EXACT_MATCH -> matching.exact_match
        """
        overrides: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(self.ENV_PREFIX) or key == 'CHRONOMATCH_ENV':
                continue

            name = key[len(self.ENV_PREFIX):].lower()
            section, _, field_name = name.partition('_')
            if section in self.SECTIONS and field_name:
                converted = self._convert_env_value(value)
                if self._is_list_field(section, field_name) and not isinstance(converted, list):
                    converted = [converted]
                overrides.setdefault(section, {})[field_name] = converted
            else:
                overrides[name] = self._convert_env_value(value)

        return overrides

    def _is_list_field(self, section: str, field_name: str) -> bool:
        """Whether the section model declares ``field_name`` as a list."""
        field = self.SECTIONS[section].model_fields.get(field_name)
        return field is not None and get_origin(field.annotation) is list

    def _convert_env_value(self, value: str) -> Union[str, int, float, bool, List[str]]:
        """Convert environment variable string to appropriate type."""
        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        try:
            if '.' in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        # List conversion (comma-separated)
        if ',' in value:
            return [v.strip() for v in value.split(',')]

        return value

    def update_config(self, updates: Dict[str, Any], save_to_user: bool = True) -> AppConfig:
        """Update configuration with new values.

        Args:
            updates: Dictionary of configuration updates
            save_to_user: Whether to save updates to the user preferences file

        Returns:
            Updated configuration
        """
        current = self.load_config()

        with self._lock:
            config_dict = current.model_dump()
            self._deep_merge(config_dict, updates)

            try:
                self._config = AppConfig(**config_dict)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid configuration update: {e}") from e

            if save_to_user:
                self._save_user_preferences(updates)

            return self._config

    def _save_user_preferences(self, updates: Dict[str, Any]):
        user_file = self.config_files['user']
        user_file.parent.mkdir(parents=True, exist_ok=True)

        preferences = self._load_yaml_file(user_file) if user_file.exists() else {}
        self._deep_merge(preferences, updates)

        with open(user_file, 'w') as f:
            yaml.safe_dump(preferences, f, default_flow_style=False, sort_keys=False)

        self.logger.info(f"Saved user preferences to {user_file}")

    def _deep_merge(self, base_dict: Dict[str, Any], update_dict: Dict[str, Any]):
        """Recursively merge nested dictionaries."""
        for key, value in update_dict.items():
            if isinstance(value, dict) and key in base_dict and isinstance(base_dict[key], dict):
                self._deep_merge(base_dict[key], value)
            else:
                base_dict[key] = value

    @property
    def config(self) -> AppConfig:
        """Get current configuration, loading it if needed."""
        return self.load_config()
