"""
Configuration management utilities.

This module provides environment variable handling with type conversion,
the ``Settings`` bundle read from ``VET_RECORDS_*`` variables, and logging
configuration helpers.
"""

import logging
import logging.config
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

ENV_PREFIX = "VET_RECORDS_"

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./vet_records.db"
DEFAULT_UPLOAD_DIR = "uploads"


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


class LogLevel(Enum):
    """Enumeration for log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @classmethod
    def parse(cls, value: str) -> "LogLevel":
        """Parse a level name case-insensitively."""
        try:
            return cls(value.strip().upper())
        except ValueError:
            allowed = ", ".join(level.value for level in cls)
            raise ConfigError(f"Unknown log level '{value}'. Allowed: {allowed}")


class EnvironmentConfig:
    """Utility class for handling environment variables with type conversion."""

    @staticmethod
    def get_str(
        key: str, default: Optional[str] = None, required: bool = False
    ) -> Optional[str]:
        """
        Get a string environment variable.

        Args:
            key: Environment variable key
            default: Default value if not found
            required: Whether the variable is required

        Returns:
            String value or default

        Raises:
            ConfigError: If required variable is missing
        """
        value = os.getenv(key, default)

        if required and value is None:
            raise ConfigError(f"Required environment variable '{key}' is not set")

        return value

    @staticmethod
    def get_int(
        key: str, default: Optional[int] = None, required: bool = False
    ) -> Optional[int]:
        """
        Get an integer environment variable.

        Raises:
            ConfigError: If required variable is missing or not an integer
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ConfigError(f"Required environment variable '{key}' is not set")
            return default

        try:
            return int(value)
        except ValueError:
            raise ConfigError(
                f"Environment variable '{key}' must be an integer, got: {value}"
            )

    @staticmethod
    def get_bool(
        key: str, default: Optional[bool] = None, required: bool = False
    ) -> Optional[bool]:
        """
        Get a boolean environment variable.

        ``true``, ``1``, ``yes`` and ``on`` are truthy; ``false``, ``0``,
        ``no`` and ``off`` are falsy. Anything else is rejected.
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ConfigError(f"Required environment variable '{key}' is not set")
            return default

        normalized = value.strip().lower()
        if normalized in ("true", "1", "yes", "on"):
            return True
        if normalized in ("false", "0", "no", "off"):
            return False
        raise ConfigError(
            f"Environment variable '{key}' must be a boolean, got: {value}"
        )


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the records layer."""

    database_url: str = DEFAULT_DATABASE_URL
    db_pool_size: int = 5
    db_echo: bool = False
    upload_dir: Path = Path(DEFAULT_UPLOAD_DIR)
    log_level: LogLevel = LogLevel.INFO

    def __post_init__(self) -> None:
        if not self.database_url:
            raise ConfigError("Database URL cannot be empty")
        if self.db_pool_size <= 0:
            raise ConfigError(
                f"Database pool size must be positive, got: {self.db_pool_size}"
            )

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from ``VET_RECORDS_*`` environment variables.

        Unset variables fall back to the field defaults.

        Raises:
            ConfigError: If a variable is present but malformed
        """
        env = EnvironmentConfig
        return cls(
            database_url=env.get_str(
                f"{ENV_PREFIX}DATABASE_URL", DEFAULT_DATABASE_URL
            ),
            db_pool_size=env.get_int(f"{ENV_PREFIX}DB_POOL_SIZE", 5),
            db_echo=env.get_bool(f"{ENV_PREFIX}DB_ECHO", False),
            upload_dir=Path(env.get_str(f"{ENV_PREFIX}UPLOAD_DIR", DEFAULT_UPLOAD_DIR)),
            log_level=LogLevel.parse(env.get_str(f"{ENV_PREFIX}LOG_LEVEL", "INFO")),
        )


class LoggingConfigurator:
    """Utility class for configuring logging."""

    DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @staticmethod
    def configure_basic_logging(
        level: Union[str, LogLevel] = LogLevel.INFO,
        format_string: Optional[str] = None,
        log_file: Optional[str] = None,
    ) -> None:
        """
        Configure basic logging for the application.

        Args:
            level: Logging level
            format_string: Custom format string
            log_file: Optional log file path
        """
        if isinstance(level, str):
            level = LogLevel.parse(level)

        basic_config_args: Dict[str, Any] = {
            "level": level.value,
            "format": format_string or LoggingConfigurator.DEFAULT_FORMAT,
            "datefmt": "%Y-%m-%d %H:%M:%S",
        }
        if log_file:
            basic_config_args["filename"] = log_file
            basic_config_args["filemode"] = "a"

        logging.basicConfig(**basic_config_args)

    @staticmethod
    def build_logging_config(level: Union[str, LogLevel] = LogLevel.INFO) -> Dict[str, Any]:
        """Return the default ``dictConfig`` mapping for the package logger."""
        if isinstance(level, str):
            level = LogLevel.parse(level)

        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {"format": LoggingConfigurator.DEFAULT_FORMAT},
                "detailed": {
                    "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s - %(message)s"
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": level.value,
                    "formatter": "standard",
                    "stream": "ext://sys.stdout",
                }
            },
            "loggers": {
                "vet_records": {
                    "level": level.value,
                    "handlers": ["console"],
                    "propagate": False,
                }
            },
            "root": {"level": "WARNING", "handlers": ["console"]},
        }

    @staticmethod
    def configure_structured_logging(
        config_dict: Optional[Dict[str, Any]] = None,
        config_file: Optional[str] = None,
        level: Union[str, LogLevel] = LogLevel.INFO,
    ) -> None:
        """
        Configure structured logging using a dictionary or file.

        Args:
            config_dict: Logging configuration dictionary
            config_file: Path to logging configuration file
            level: Level for the package logger when no config is given
        """
        if config_file and Path(config_file).exists():
            logging.config.fileConfig(config_file)
        elif config_dict:
            logging.config.dictConfig(config_dict)
        else:
            logging.config.dictConfig(LoggingConfigurator.build_logging_config(level))
