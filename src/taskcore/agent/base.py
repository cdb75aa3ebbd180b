"""Agent base class for taskcore.

An agent turns the current conversation into one structured decision per
``execute`` call and reports the outcome both on the event bus and through
its return value.

Shipped in this module
----------------------
- AuthErrorPredicate   — signature of the auth-failure classifier
- BaseAgent            — ABC holding collaborators and the validated invoke
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from typing import Generic, TypeVar

from pydantic import BaseModel

from taskcore.agent.auth import is_authentication_error
from taskcore.agent.chat_model import ChatModel
from taskcore.agent.context import AgentContext
from taskcore.agent.output import AgentOutput
from taskcore.agent.prompts import AgentPrompt
from taskcore.contract.output import validate_output
from taskcore.messages.models import Message

logger = logging.getLogger(__name__)

OutputT = TypeVar("OutputT", bound=BaseModel)

AuthErrorPredicate = Callable[[BaseException], bool]
"""Callback signature: (exception) → is it a credential failure?"""


def _raw_text(response: object) -> object:
    """Unwrap the ``content`` of a raw AI message, leaving other values alone."""
    if isinstance(response, (str, Mapping, BaseModel)) or not hasattr(response, "content"):
        return response
    content = getattr(response, "content")
    if isinstance(content, list):
        pieces: list[str] = []
        for part in content:
            if isinstance(part, str):
                pieces.append(part)
            elif isinstance(part, Mapping) and part.get("type") == "text":
                pieces.append(str(part.get("text", "")))
        return "".join(pieces)
    return content


class BaseAgent(ABC, Generic[OutputT]):
    """Abstract base class for all agents.

    Subclasses implement :meth:`execute`; the base class owns the
    collaborators and the contract-checked model call.

    Parameters
    ----------
    output_schema:
        Pydantic contract every model answer must satisfy.
    chat_model:
        Model client used by :meth:`invoke`.
    context:
        Task context holding history, event bus and options.
    prompt:
        Source of the agent's role-specific system message.
    agent_id:
        Identifier placed on every envelope this agent returns.
    is_auth_error:
        Classifier for provider credential failures.  Defaults to
        :func:`~taskcore.agent.auth.is_authentication_error`.
    """

    def __init__(
        self,
        output_schema: type[OutputT],
        chat_model: ChatModel,
        context: AgentContext,
        prompt: AgentPrompt,
        *,
        agent_id: str,
        is_auth_error: AuthErrorPredicate = is_authentication_error,
    ) -> None:
        self.output_schema = output_schema
        self.chat_model = chat_model
        self.context = context
        self.prompt = prompt
        self.is_auth_error = is_auth_error
        self._id = agent_id

    @property
    def id(self) -> str:
        """The identifier reported in this agent's envelopes."""
        return self._id

    async def invoke(self, messages: Sequence[Message]) -> OutputT | None:
        """Call the model and validate its answer.

        Returns
        -------
        OutputT | None
            The validated decision, or ``None`` if the model returned
            nothing.

        Raises
        ------
        InvalidOutputFormat
            If the answer does not satisfy :attr:`output_schema`.
        Exception
            Whatever the model client raised, unchanged.
        """
        logger.debug(
            "%s invoking model with %d messages", self._id, len(messages)
        )
        response = await self.chat_model.invoke(messages, self.output_schema)
        if response is None:
            return None
        payload = _raw_text(response)
        if isinstance(payload, BaseModel) and not isinstance(payload, self.output_schema):
            payload = payload.model_dump()
        return validate_output(self.output_schema, payload)

    @abstractmethod
    async def execute(self) -> AgentOutput[OutputT]:
        """Run one step and return its envelope.

        Implementations convert every failure into a failure envelope except
        :class:`~taskcore.schema.errors.ChatModelAuthError`, which is raised.
        """

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self._id!r}, "
            f"schema={self.output_schema.__name__})"
        )
