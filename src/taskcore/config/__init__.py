"""Config package for taskcore.

Provides configuration loading, validation, and sensible defaults.
"""
from __future__ import annotations

from taskcore.config.defaults import DEFAULT_CONFIG
from taskcore.config.loader import ConfigLoader
from taskcore.config.schema import TaskCoreConfig, config_error, validate_config

__all__ = [
    "TaskCoreConfig",
    "validate_config",
    "config_error",
    "ConfigLoader",
    "DEFAULT_CONFIG",
]
