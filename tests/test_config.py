"""Unit tests for AkismetConfig."""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import dataclasses
import logging
import pytest
from unittest.mock import patch

from akismet import AkismetConfig


ENV_VARS = [
    "AKISMET_API_KEY",
    "AKISMET_APP_URL",
    "AKISMET_APP_NAME",
    "AKISMET_APP_VERSION",
    "AKISMET_TIMEOUT",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove Akismet variables from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def valid_config():
    """Create a complete configuration."""
    return AkismetConfig(
        api_key="K",
        app_url="http://example.com",
        app_name="blog",
        app_version="1.0"
    )


class TestFromEnv:
    """Tests for loading configuration."""

    @patch('akismet.config.load_dotenv')
    def test_reads_environment(self, mock_load_dotenv, clean_env, tmp_path):
        """Test that every setting comes from its variable."""
        clean_env.setenv("AKISMET_API_KEY", "K")
        clean_env.setenv("AKISMET_APP_URL", "http://example.com")
        clean_env.setenv("AKISMET_APP_NAME", "blog")
        clean_env.setenv("AKISMET_APP_VERSION", "1.0")
        clean_env.setenv("AKISMET_TIMEOUT", "7.5")
        clean_env.setenv("LOG_LEVEL", "DEBUG")

        config = AkismetConfig.from_env(str(tmp_path / "missing.env"))

        assert config == AkismetConfig(
            api_key="K",
            app_url="http://example.com",
            app_name="blog",
            app_version="1.0",
            timeout=7.5,
            log_level="DEBUG"
        )

    @patch('akismet.config.load_dotenv')
    def test_defaults(self, mock_load_dotenv, clean_env, tmp_path):
        """Test defaults when nothing is set."""
        config = AkismetConfig.from_env(str(tmp_path / "missing.env"))

        assert config.api_key == ""
        assert config.app_url == ""
        assert config.app_name is None
        assert config.app_version is None
        assert config.timeout == 30
        assert config.log_level == "INFO"

    @patch('akismet.config.load_dotenv')
    def test_loads_env_file(self, mock_load_dotenv, clean_env, tmp_path):
        """Test that an existing .env file is loaded."""
        env_file = tmp_path / ".env"
        env_file.write_text("AKISMET_API_KEY=K\n")

        AkismetConfig.from_env(str(env_file))

        mock_load_dotenv.assert_called_once_with(str(env_file))

    def test_is_immutable(self, valid_config):
        """Test that configuration cannot be changed after construction."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            valid_config.api_key = "other"


class TestValidate:
    """Tests for configuration validation."""

    def test_valid(self, valid_config):
        """Test that a complete configuration has no errors."""
        assert valid_config.validate() == []

    def test_missing_credentials(self):
        """Test that key and URL are required."""
        errors = AkismetConfig(api_key="", app_url="").validate()

        assert len(errors) == 2
        assert "AKISMET_API_KEY" in errors[0]
        assert "AKISMET_APP_URL" in errors[1]

    def test_invalid_log_level(self, valid_config):
        """Test that unknown log levels are reported."""
        config = dataclasses.replace(valid_config, log_level="LOUD")

        errors = config.validate()

        assert len(errors) == 1
        assert "Invalid log level: LOUD" in errors[0]

    def test_invalid_timeout(self, valid_config):
        """Test that the timeout must be positive."""
        config = dataclasses.replace(valid_config, timeout=0)

        assert config.validate() == ["Invalid timeout: 0. Must be greater than 0"]

    def test_missing_app_name_warns(self, caplog):
        """Test that a missing app name is a warning, not an error."""
        config = AkismetConfig(api_key="K", app_url="http://example.com")

        with caplog.at_level(logging.WARNING, logger="akismet.config"):
            assert config.validate() == []

        assert "AKISMET_APP_NAME not set" in caplog.text
