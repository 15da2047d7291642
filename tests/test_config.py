"""
Tests for BugsinkConfig
"""

from unittest.mock import patch

import pytest

from bugsink_mcp.exceptions import ConfigurationError
from bugsink_mcp.models.config import BugsinkConfig


class TestBugsinkConfig:
    def test_from_env(self):
        env = {
            "BUGSINK_URL": "https://bugsink.example.com/",
            "BUGSINK_TOKEN": "secret",
            "BUGSINK_TIMEOUT": "5",
            "LOG_LEVEL": "debug",
        }
        with patch.dict("os.environ", env, clear=True):
            config = BugsinkConfig.from_env()

        assert config.url == "https://bugsink.example.com/"
        assert config.base_url == "https://bugsink.example.com"
        assert config.token == "secret"
        assert config.timeout == 5.0
        assert config.log_level == "DEBUG"
        assert config.is_configured()

    def test_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            config = BugsinkConfig.from_env()

        assert config.timeout == 30.0
        assert config.log_level == "INFO"
        assert not config.is_configured()

    def test_require_missing_token(self):
        config = BugsinkConfig(url="https://bugsink.example.com")

        with pytest.raises(ConfigurationError, match="BUGSINK_TOKEN"):
            config.require()

    def test_require_returns_config(self, mock_bugsink_config):
        assert mock_bugsink_config.require() is mock_bugsink_config
