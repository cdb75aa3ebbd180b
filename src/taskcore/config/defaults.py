"""Default configuration constants for taskcore.

``DEFAULT_CONFIG`` is what ``ConfigLoader.load_auto()`` starts from when no
config file is found, before applying environment overrides.
"""
from __future__ import annotations

from taskcore.schema.config import AgentOptions, TaskCoreConfig

DEFAULT_CONFIG: TaskCoreConfig = TaskCoreConfig(
    session_name="default-session",
    log_level="INFO",
    event_max_concurrency=None,
    agent=AgentOptions(),
    custom_settings={},
)
"""Baseline ``TaskCoreConfig`` used when no file or env config is present."""

DEFAULT_CONFIG_YAML = """\
# taskcore configuration
session_name: my-session
log_level: INFO
# Maximum subscriber callbacks in flight per event; null = unbounded
event_max_concurrency: null
agent:
  use_vision: false
  use_vision_for_planner: false
  max_steps: 100
custom_settings: {}
"""
"""Template written by ``taskcore init``."""
