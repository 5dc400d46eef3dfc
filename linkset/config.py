"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from linkset.models.config import LinkSetConfig, LogConfig
from linkset.observability.logging import setup_logging


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"LINKSET_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> LinkSetConfig:
    """Load configuration from LINKSET_* environment variables."""
    return LinkSetConfig(
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "warning")),
            json=_env_bool("LOG_JSON", False),
        ),
    )


def configure_logging(config: LinkSetConfig | None = None) -> LinkSetConfig:
    """Apply the logging section of *config* (loaded from the environment if omitted)."""
    config = config or load_config()
    setup_logging(config.log.level, json=config.log.json)
    return config
