"""
Configuration management with typed Pydantic models.

The configuration object is passed explicitly into the loader's entry
points.
"""

from claimload.config.loader import build_config, load_config
from claimload.config.settings import (
    DiscoveryConfig,
    LoaderConfig,
    LoggingConfig,
    OutputConfig,
    ParseConfig,
    SchemaConfig,
    UnknownColumnsPolicy,
)

__all__ = [
    "DiscoveryConfig",
    "LoaderConfig",
    "LoggingConfig",
    "OutputConfig",
    "ParseConfig",
    "SchemaConfig",
    "UnknownColumnsPolicy",
    "build_config",
    "load_config",
]
