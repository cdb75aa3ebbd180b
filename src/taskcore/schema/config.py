"""Configuration schema for taskcore.

``TaskCoreConfig`` is a Pydantic v2 model that acts as the validated,
strongly-typed boundary object between raw configuration sources (YAML files,
environment variables, in-memory dicts) and the rest of the package.
``AgentOptions`` holds the per-session knobs the agents read at execution
time.

Shipped in this module
----------------------
- AgentOptions     — vision flags and the step ceiling read by agents
- TaskCoreConfig   — top-level session configuration with loaders
"""
from __future__ import annotations

import json
import os
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator


class AgentOptions(BaseModel):
    """Options shared by every agent of a session.

    Parameters
    ----------
    use_vision:
        Whether the session sends screenshots to the model at all.
    use_vision_for_planner:
        Whether the planner may see images when ``use_vision`` is on.  When
        ``False`` the planner receives a text-only version of the latest
        state message.
    max_steps:
        Step ceiling for a task; reported in every event.
    """

    model_config = {"validate_assignment": True}

    use_vision: bool = Field(default=False)
    use_vision_for_planner: bool = Field(default=False)
    max_steps: int = Field(default=100, ge=1)


class TaskCoreConfig(BaseModel):
    """Validated runtime configuration for a taskcore session.

    All fields have sensible defaults so that a session can start with zero
    configuration.

    Parameters
    ----------
    session_name:
        Human-readable label used in logs.
    log_level:
        Root log level applied by the CLI.
    event_max_concurrency:
        Upper bound on subscriber callbacks in flight per emit.  ``None``
        means unbounded fan-out.
    agent:
        Nested :class:`AgentOptions`.
    custom_settings:
        Arbitrary key/value store for host-application settings.
    """

    model_config = {"extra": "allow", "validate_assignment": True}

    session_name: str = Field(default="default-session")
    log_level: str = Field(default="INFO")
    event_max_concurrency: int | None = Field(default=None, ge=1)
    agent: AgentOptions = Field(default_factory=AgentOptions)
    custom_settings: dict[str, object] = Field(default_factory=dict)

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @model_validator(mode="before")
    @classmethod
    def _normalise_agent(cls, values: Any) -> Any:  # noqa: ANN401
        """Treat ``agent: null`` in a file as "use the defaults"."""
        if isinstance(values, dict) and "agent" in values and values["agent"] is None:
            values = dict(values)
            values.pop("agent")
        return values

    # ------------------------------------------------------------------
    # Class-method loaders
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, prefix: str = "TASKCORE_") -> "TaskCoreConfig":
        """Build configuration from environment variables.

        Variables are mapped by stripping the ``prefix`` and lower-casing the
        remainder.  ``TASKCORE_SESSION_NAME=demo`` maps to
        ``session_name="demo"``; ``TASKCORE_AGENT__USE_VISION=true`` maps to
        ``agent.use_vision=True`` (double underscore descends into
        ``agent``).

        Boolean values accept ``"true"`` / ``"1"`` / ``"yes"`` as truthy and
        anything else as falsy (case-insensitive).
        """
        data: dict[str, object] = {}
        agent_data: dict[str, object] = {}
        agent_bool_fields = {"use_vision", "use_vision_for_planner"}

        for raw_key, raw_value in os.environ.items():
            if not raw_key.startswith(prefix):
                continue
            key = raw_key[len(prefix):].lower()
            if key.startswith("agent__"):
                option = key[len("agent__"):]
                if option in agent_bool_fields:
                    agent_data[option] = raw_value.lower() in {"true", "1", "yes"}
                else:
                    agent_data[option] = raw_value
            elif key == "custom_settings":
                try:
                    parsed = json.loads(raw_value)
                    data[key] = parsed if isinstance(parsed, dict) else {}
                except json.JSONDecodeError:
                    data[key] = {}
            else:
                data[key] = raw_value

        if agent_data:
            data["agent"] = agent_data
        return cls.model_validate(data)

    def merge(self, overrides: "TaskCoreConfig") -> "TaskCoreConfig":
        """Produce a new config with non-default values from *overrides*.

        Top-level fields and ``agent`` options in *overrides* that differ from
        the class defaults win.  ``custom_settings`` is merged with
        ``dict.update`` semantics.  Neither input is mutated.
        """
        base_data = self.model_dump()
        override_data = overrides.model_dump()
        default_data = TaskCoreConfig().model_dump()

        merged = dict(base_data)
        for key, override_value in override_data.items():
            if override_value == default_data.get(key):
                continue
            if key == "agent":
                default_agent = default_data["agent"]
                agent_merged = dict(merged["agent"])
                for option, value in override_value.items():
                    if value != default_agent.get(option):
                        agent_merged[option] = value
                merged["agent"] = agent_merged
            elif key == "custom_settings":
                settings = dict(merged.get("custom_settings", {}))
                settings.update(override_value)
                merged["custom_settings"] = settings
            else:
                merged[key] = override_value

        return TaskCoreConfig.model_validate(merged)
