"""Unit tests for config.py - Configuration management."""

import os
from unittest.mock import patch

import pytest

import config
from config import (
    Config,
    LoggingConfig,
    NetlifyConfig,
    StateConfig,
    get_config,
    load_config,
    reset_config,
)


class TestNetlifyConfig:
    """Tests for NetlifyConfig class."""

    def test_default_values(self):
        cfg = NetlifyConfig()
        assert cfg.api_token == ""
        assert cfg.api_base_url == "https://api.netlify.com/api/v1"
        assert cfg.timeout == 30

    def test_token_not_in_repr(self):
        cfg = NetlifyConfig(api_token="super-secret")
        assert "super-secret" not in repr(cfg)

    def test_from_env(self):
        env_vars = {
            "NETLIFY_AUTH_TOKEN": "envtoken",
            "NETLIFY_API_URL": "http://localhost:9999/api/v1",
            "NETLIFY_TIMEOUT": "5",
        }
        with patch.dict(os.environ, env_vars, clear=False):
            cfg = NetlifyConfig.from_env()
            assert cfg.api_token == "envtoken"
            assert cfg.api_base_url == "http://localhost:9999/api/v1"
            assert cfg.timeout == 5

    def test_from_env_defaults(self):
        with patch.dict(os.environ, {"NETLIFY_AUTH_TOKEN": "t"}, clear=True):
            cfg = NetlifyConfig.from_env()
            assert cfg.api_base_url == "https://api.netlify.com/api/v1"
            assert cfg.timeout == 30

    def test_from_env_missing_token_raises(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="NETLIFY_AUTH_TOKEN"):
                NetlifyConfig.from_env()


class TestStateConfig:
    """Tests for StateConfig class."""

    def test_default_values(self):
        assert StateConfig().state_file == "siteop.state.json"

    def test_from_env(self):
        with patch.dict(os.environ, {"SITEOP_STATE_FILE": "/tmp/s.json"}):
            assert StateConfig.from_env().state_file == "/tmp/s.json"


class TestLoggingConfig:
    """Tests for LoggingConfig class."""

    def test_default_values(self):
        assert LoggingConfig().log_level == "INFO"

    def test_from_env_uppercases(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}):
            assert LoggingConfig.from_env().log_level == "DEBUG"


class TestConfig:
    """Tests for main Config class."""

    def test_default(self):
        cfg = Config.default()
        assert isinstance(cfg.netlify, NetlifyConfig)
        assert isinstance(cfg.state, StateConfig)
        assert isinstance(cfg.logging, LoggingConfig)

    def test_from_env(self):
        with patch.dict(os.environ, {"NETLIFY_AUTH_TOKEN": "t"}, clear=True):
            cfg = Config.from_env()
            assert cfg.netlify.api_token == "t"
            assert cfg.state.state_file == "siteop.state.json"


class TestConfigSingleton:
    """Tests for config singleton functions."""

    @pytest.fixture(autouse=True)
    def clean_config(self):
        reset_config()
        yield
        reset_config()

    def test_load_config_caches(self):
        with patch.dict(os.environ, {"NETLIFY_AUTH_TOKEN": "t"}, clear=True):
            first = load_config()
            second = get_config()
        assert first is second

    def test_reset_config(self):
        with patch.dict(os.environ, {"NETLIFY_AUTH_TOKEN": "t"}, clear=True):
            load_config()
        reset_config()
        assert config.config is None
