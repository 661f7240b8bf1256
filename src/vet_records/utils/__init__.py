"""
Utility functions and helper modules.

This module provides configuration management, logging setup and the
pagination request type shared by repositories and services.
"""

from .config import (
    ConfigError,
    EnvironmentConfig,
    LoggingConfigurator,
    LogLevel,
    Settings,
)
from .pagination import DEFAULT_PAGE_SIZE, PageRequest

__all__ = [
    # Configuration utilities
    "ConfigError",
    "LogLevel",
    "EnvironmentConfig",
    "LoggingConfigurator",
    "Settings",
    # Pagination
    "PageRequest",
    "DEFAULT_PAGE_SIZE",
]
