"""
Configuration module for siteop.

Loads configuration from environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from netlify_api.client import DEFAULT_API_BASE_URL


@dataclass
class NetlifyConfig:
    """Netlify API configuration."""

    api_token: str = field(default="", repr=False)  # Never log token
    api_base_url: str = DEFAULT_API_BASE_URL
    timeout: int = 30  # seconds

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        api_token = os.getenv("NETLIFY_AUTH_TOKEN", "")
        if not api_token:
            raise ValueError(
                "NETLIFY_AUTH_TOKEN environment variable must be set. "
                "Netlify API token cannot be empty."
            )

        return cls(
            api_token=api_token,
            api_base_url=os.getenv("NETLIFY_API_URL", DEFAULT_API_BASE_URL),
            timeout=int(os.getenv("NETLIFY_TIMEOUT", "30")),
        )


@dataclass
class StateConfig:
    """Tracked state persistence configuration."""

    state_file: str = "siteop.state.json"

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        return cls(state_file=os.getenv("SITEOP_STATE_FILE", "siteop.state.json"))


@dataclass
class LoggingConfig:
    """Logging configuration."""

    log_level: str = "INFO"

    @classmethod
    def from_env(cls):
        """Load from environment variables."""
        return cls(log_level=os.getenv("LOG_LEVEL", "INFO").upper())


@dataclass
class Config:
    """Main configuration object."""

    netlify: NetlifyConfig
    state: StateConfig
    logging: LoggingConfig

    @classmethod
    def from_env(cls):
        """Load all configuration from environment variables."""
        return cls(
            netlify=NetlifyConfig.from_env(),
            state=StateConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def default(cls):
        """Return default configuration."""
        return cls(
            netlify=NetlifyConfig(),
            state=StateConfig(),
            logging=LoggingConfig(),
        )


# Global config instance
config: Optional[Config] = None


def load_config() -> Config:
    """Load configuration (singleton pattern)."""
    global config
    if config is None:
        config = Config.from_env()
    return config


def get_config() -> Config:
    """Get the current configuration."""
    if config is None:
        return load_config()
    return config


def reset_config() -> None:
    """Reset configuration (mainly for testing)."""
    global config
    config = None
