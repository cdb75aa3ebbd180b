"""Schema package for taskcore.

Exports the event model, the error taxonomy, and the validated
configuration models.
"""
from __future__ import annotations

from taskcore.schema.config import AgentOptions, TaskCoreConfig
from taskcore.schema.errors import (
    ChatModelAuthError,
    ConfigurationError,
    ErrorSeverity,
    InvalidOutputFormat,
    TaskCoreError,
    ValidationFailed,
)
from taskcore.schema.events import Actor, AgentEvent, EventData, ExecutionState

__all__ = [
    # Events
    "Actor",
    "ExecutionState",
    "EventData",
    "AgentEvent",
    # Errors
    "ErrorSeverity",
    "TaskCoreError",
    "ConfigurationError",
    "ValidationFailed",
    "InvalidOutputFormat",
    "ChatModelAuthError",
    # Config
    "AgentOptions",
    "TaskCoreConfig",
]
