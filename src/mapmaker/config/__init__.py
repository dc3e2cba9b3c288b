"""Configuration management for mapmaker.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- LabelConfig: Label point search settings
- ArmyConfig: Army value bounds
- ValidationConfig: Geometry validation settings
- ProcessingConfig: Map processing settings
- LoggingConfig: Logging settings
- MapmakerSettings: Main application settings
"""

from mapmaker.config.settings import (
    ArmyConfig,
    LabelConfig,
    LoggingConfig,
    MapmakerSettings,
    ProcessingConfig,
    ValidationConfig,
    get_default_settings,
)

__all__ = [
    "ArmyConfig",
    "LabelConfig",
    "LoggingConfig",
    "MapmakerSettings",
    "ProcessingConfig",
    "ValidationConfig",
    "get_default_settings",
]
