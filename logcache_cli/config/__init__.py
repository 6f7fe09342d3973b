"""Configuration for the log-cache CLI."""

from .config import Config
from .schema import EndpointConfig, LogCacheConfig, MetaSettings, TailSettings

__all__ = [
    "Config",
    "EndpointConfig",
    "LogCacheConfig",
    "MetaSettings",
    "TailSettings",
]
