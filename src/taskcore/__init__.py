"""taskcore — agent execution loop and event bus for browser task runners.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Quick-start
-----------
>>> import taskcore
>>> taskcore.__version__
'0.1.0'

>>> from taskcore import EventBus, ExecutionState
>>> bus = EventBus()
>>> events = []
>>> bus.subscribe(ExecutionState.STEP_FAIL, events.append)
>>> bus.subscriber_count()
1
"""
from __future__ import annotations

__version__: str = "0.1.0"

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------
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

# ---------------------------------------------------------------------------
# Event bus
# ---------------------------------------------------------------------------
from taskcore.bus.event_bus import EventBus
from taskcore.bus.subscriber import Subscriber

# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------
from taskcore.messages.history import MessageHistory, MessageManager
from taskcore.messages.models import (
    ImagePart,
    ImageUrl,
    Message,
    MessageRole,
    TextPart,
    strip_images,
)

# ---------------------------------------------------------------------------
# Output contracts
# ---------------------------------------------------------------------------
from taskcore.contract.output import (
    PlannerOutput,
    coerce_bool_like,
    extract_json_object,
    validate_output,
)

# ---------------------------------------------------------------------------
# Agents
# ---------------------------------------------------------------------------
from taskcore.agent.auth import is_authentication_error
from taskcore.agent.base import BaseAgent
from taskcore.agent.chat_model import CallableChatModel, ChatModel
from taskcore.agent.context import AgentContext
from taskcore.agent.output import AgentOutput
from taskcore.agent.planner import PlannerAgent
from taskcore.agent.prompts import AgentPrompt, PlannerPrompt, StaticPrompt

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------
from taskcore.config.defaults import DEFAULT_CONFIG
from taskcore.config.loader import ConfigLoader
from taskcore.config.schema import validate_config

__all__ = [
    "__version__",
    # schema — events
    "Actor",
    "ExecutionState",
    "EventData",
    "AgentEvent",
    # schema — errors
    "ErrorSeverity",
    "TaskCoreError",
    "ConfigurationError",
    "ValidationFailed",
    "InvalidOutputFormat",
    "ChatModelAuthError",
    # schema — config
    "AgentOptions",
    "TaskCoreConfig",
    # bus
    "EventBus",
    "Subscriber",
    # messages
    "MessageRole",
    "TextPart",
    "ImageUrl",
    "ImagePart",
    "Message",
    "strip_images",
    "MessageManager",
    "MessageHistory",
    # contracts
    "PlannerOutput",
    "coerce_bool_like",
    "extract_json_object",
    "validate_output",
    # agents
    "AgentContext",
    "AgentOutput",
    "AgentPrompt",
    "StaticPrompt",
    "PlannerPrompt",
    "ChatModel",
    "CallableChatModel",
    "is_authentication_error",
    "BaseAgent",
    "PlannerAgent",
    # config
    "DEFAULT_CONFIG",
    "ConfigLoader",
    "validate_config",
]
