"""Inspector configuration."""

from settings.config import (
    CONFIG_FILENAME,
    ConfigError,
    InspectorConfig,
    load_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "InspectorConfig",
    "load_config",
]
