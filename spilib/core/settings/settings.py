"""Settings for provider discovery.

Settings come from environment variables (``SPILIB_*``), from keyword
arguments, or from a YAML/JSON file through ``load_settings``.
"""

import codecs
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from spilib.core.errors.errors import SettingsError

logger = logging.getLogger(__name__)

DEFAULT_RESOURCE_PREFIX = "META-INF/services"


class SpiSettings(BaseSettings):
    """Discovery settings with environment variable support."""

    resource_prefix: str = Field(default=DEFAULT_RESOURCE_PREFIX, description="Directory holding the configuration files")
    search_path: str = Field(default="", description="Extra search locations, os.pathsep separated")
    include_sys_path: bool = Field(default=True, description="Also search every sys.path entry")
    encoding: str = Field(default="utf-8", description="Text encoding of configuration files")

    model_config = SettingsConfigDict(
        env_prefix="SPILIB_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("resource_prefix")
    @classmethod
    def validate_resource_prefix(cls, v: str) -> str:
        """Normalize the prefix to have no leading or trailing slash."""
        v = v.strip().strip("/")
        if not v:
            raise ValueError("Resource prefix must not be empty")
        return v

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Validate that the encoding names a known codec."""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}")
        return v

    @property
    def search_paths(self) -> list[Path]:
        """Extra search locations, in order, split on the platform path separator."""
        return [Path(p.strip()) for p in self.search_path.split(os.pathsep) if p.strip()]


_settings: Optional[SpiSettings] = None


def load_settings(config_file: Path, **overrides: Any) -> SpiSettings:
    """Load settings from a YAML or JSON file.

    Environment variables still apply to fields the file does not set.

    Args:
        config_file: Path to a ``.yml``, ``.yaml`` or ``.json`` file holding a mapping
        **overrides: Values taking precedence over the file

    Returns:
        Settings instance

    Raises:
        SettingsError: If the file cannot be read or does not validate
    """
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            if config_file.suffix.lower() in [".yml", ".yaml"]:
                config_data = yaml.safe_load(f)
            else:
                config_data = json.load(f)
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise SettingsError(f"Failed to read settings file {config_file}", str(config_file), e) from e

    if config_data is None:
        config_data = {}
    if not isinstance(config_data, dict):
        raise SettingsError(f"Settings file {config_file} must contain a mapping", str(config_file))

    config_data.update(overrides)
    try:
        settings = SpiSettings(**config_data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {config_file}", str(config_file), e) from e

    logger.info(f"Loaded settings from {config_file}")
    return settings


def get_settings() -> SpiSettings:
    """Get the process-wide settings, built from the environment on first use.

    Returns:
        Global settings instance
    """
    global _settings
    if _settings is None:
        _settings = SpiSettings()
        logger.debug(f"Initialized settings: {_settings.model_dump()}")
    return _settings


def set_settings(settings: Optional[SpiSettings]) -> None:
    """Replace the process-wide settings; ``None`` rebuilds them on next use.

    Args:
        settings: New settings instance or None
    """
    global _settings
    _settings = settings
