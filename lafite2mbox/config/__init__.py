"""Configuration management"""

from .app_config import AppConfig, BatchConfig, ConversionConfig, StorageConfig
from .config_loader import ConfigError, ConfigLoader

__all__ = [
    "AppConfig",
    "BatchConfig",
    "ConversionConfig",
    "StorageConfig",
    "ConfigError",
    "ConfigLoader",
]
