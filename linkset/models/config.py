"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "warning"
    json: bool = False


@dataclass
class LinkSetConfig:
    """Top-level linkset configuration."""

    log: LogConfig = field(default_factory=LogConfig)
