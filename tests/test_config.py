"""
Tests for configuration and logging setup utilities.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from vet_records.utils.config import (
    DEFAULT_DATABASE_URL,
    ConfigError,
    EnvironmentConfig,
    LoggingConfigurator,
    LogLevel,
    Settings,
)


class TestEnvironmentConfig:
    """Test cases for typed environment variable access."""

    def test_get_str(self, monkeypatch):
        monkeypatch.setenv("VR_TEST_STR", "value")

        assert EnvironmentConfig.get_str("VR_TEST_STR") == "value"
        assert EnvironmentConfig.get_str("VR_TEST_MISSING", "fallback") == "fallback"

    def test_get_str_required_missing(self, monkeypatch):
        monkeypatch.delenv("VR_TEST_MISSING", raising=False)

        with pytest.raises(ConfigError, match="is not set"):
            EnvironmentConfig.get_str("VR_TEST_MISSING", required=True)

    def test_get_int(self, monkeypatch):
        monkeypatch.setenv("VR_TEST_INT", "12")

        assert EnvironmentConfig.get_int("VR_TEST_INT") == 12

    def test_get_int_invalid(self, monkeypatch):
        monkeypatch.setenv("VR_TEST_INT", "twelve")

        with pytest.raises(ConfigError, match="must be an integer"):
            EnvironmentConfig.get_int("VR_TEST_INT")

    @pytest.mark.parametrize(
        "raw, expected",
        [("true", True), ("1", True), ("YES", True), ("on", True),
         ("false", False), ("0", False), ("No", False), ("off", False)],
    )
    def test_get_bool(self, monkeypatch, raw, expected):
        monkeypatch.setenv("VR_TEST_BOOL", raw)

        assert EnvironmentConfig.get_bool("VR_TEST_BOOL") is expected

    def test_get_bool_invalid(self, monkeypatch):
        monkeypatch.setenv("VR_TEST_BOOL", "maybe")

        with pytest.raises(ConfigError, match="must be a boolean"):
            EnvironmentConfig.get_bool("VR_TEST_BOOL")


class TestLogLevel:
    def test_parse_is_case_insensitive(self):
        assert LogLevel.parse(" debug ") == LogLevel.DEBUG

    def test_parse_unknown_level(self):
        with pytest.raises(ConfigError, match="Unknown log level"):
            LogLevel.parse("verbose")


class TestSettings:
    """Test cases for the Settings bundle."""

    ENV_KEYS = (
        "VET_RECORDS_DATABASE_URL",
        "VET_RECORDS_DB_POOL_SIZE",
        "VET_RECORDS_DB_ECHO",
        "VET_RECORDS_UPLOAD_DIR",
        "VET_RECORDS_LOG_LEVEL",
    )

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for key in self.ENV_KEYS:
            monkeypatch.delenv(key, raising=False)

    def test_defaults(self):
        settings = Settings.from_env()

        assert settings.database_url == DEFAULT_DATABASE_URL
        assert settings.db_pool_size == 5
        assert settings.db_echo is False
        assert settings.upload_dir == Path("uploads")
        assert settings.log_level == LogLevel.INFO

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("VET_RECORDS_DATABASE_URL", "postgresql://u:p@db/vet")
        monkeypatch.setenv("VET_RECORDS_DB_POOL_SIZE", "15")
        monkeypatch.setenv("VET_RECORDS_DB_ECHO", "yes")
        monkeypatch.setenv("VET_RECORDS_UPLOAD_DIR", "/srv/studies")
        monkeypatch.setenv("VET_RECORDS_LOG_LEVEL", "warning")

        settings = Settings.from_env()

        assert settings.database_url == "postgresql://u:p@db/vet"
        assert settings.db_pool_size == 15
        assert settings.db_echo is True
        assert settings.upload_dir == Path("/srv/studies")
        assert settings.log_level == LogLevel.WARNING

    def test_from_env_rejects_malformed_values(self, monkeypatch):
        monkeypatch.setenv("VET_RECORDS_DB_POOL_SIZE", "many")

        with pytest.raises(ConfigError):
            Settings.from_env()

    def test_rejects_non_positive_pool_size(self):
        with pytest.raises(ConfigError, match="pool size"):
            Settings(db_pool_size=0)

    def test_rejects_empty_url(self):
        with pytest.raises(ConfigError, match="cannot be empty"):
            Settings(database_url="")

    def test_settings_are_immutable(self):
        settings = Settings()

        with pytest.raises(AttributeError):
            settings.db_pool_size = 10


class TestLoggingConfigurator:
    """Test cases for logging setup."""

    def test_build_logging_config(self):
        config = LoggingConfigurator.build_logging_config("debug")

        assert config["loggers"]["vet_records"]["level"] == "DEBUG"
        assert config["handlers"]["console"]["level"] == "DEBUG"
        assert config["disable_existing_loggers"] is False

    def test_configure_basic_logging(self, tmp_path):
        log_file = tmp_path / "vet.log"

        with patch("logging.basicConfig") as mock_basic_config:
            LoggingConfigurator.configure_basic_logging("error", log_file=str(log_file))

        kwargs = mock_basic_config.call_args.kwargs
        assert kwargs["level"] == "ERROR"
        assert kwargs["filename"] == str(log_file)
        assert kwargs["format"] == LoggingConfigurator.DEFAULT_FORMAT

    def test_configure_structured_logging_default(self):
        with patch("logging.config.dictConfig") as mock_dict_config:
            LoggingConfigurator.configure_structured_logging(level=LogLevel.WARNING)

        config = mock_dict_config.call_args.args[0]
        assert config["loggers"]["vet_records"]["level"] == "WARNING"
