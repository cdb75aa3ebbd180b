"""Agent package for taskcore.

Exports the base agent, the planner, and the collaborator seams they use.
"""
from __future__ import annotations

from taskcore.agent.auth import is_authentication_error
from taskcore.agent.base import AuthErrorPredicate, BaseAgent
from taskcore.agent.chat_model import CallableChatModel, ChatModel
from taskcore.agent.context import AgentContext
from taskcore.agent.output import AgentOutput
from taskcore.agent.planner import PLANNER_ID, PlannerAgent
from taskcore.agent.prompts import AgentPrompt, PlannerPrompt, StaticPrompt

__all__ = [
    "AgentContext",
    "AgentOutput",
    "AgentPrompt",
    "StaticPrompt",
    "PlannerPrompt",
    "ChatModel",
    "CallableChatModel",
    "AuthErrorPredicate",
    "is_authentication_error",
    "BaseAgent",
    "PlannerAgent",
    "PLANNER_ID",
]
