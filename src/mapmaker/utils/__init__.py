"""Utility functions for mapmaker.

This module provides utility functions including:

- Logging setup and configuration
- Progress and statistics tracking for map processing
"""

from mapmaker.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
