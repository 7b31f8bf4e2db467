"""
Configuration module for skillshelf.

Uses pydantic-settings for environment variable and YAML file loading.
"""

from skillshelf.config.settings import Settings
from skillshelf.config.types import InstallConfig, LoggingConfig, OutputConfig

__all__ = ["InstallConfig", "LoggingConfig", "OutputConfig", "Settings"]
