"""Unit tests for taskcore.schema.events."""
from __future__ import annotations

import dataclasses
from datetime import datetime, timezone

import pytest

from taskcore.schema.events import Actor, AgentEvent, EventData, ExecutionState


def _evt(state: ExecutionState = ExecutionState.STEP_OK) -> AgentEvent:
    return AgentEvent(Actor.PLANNER, state, EventData("task-9", 3, 50, "click login"))


class TestExecutionState:
    def test_values_are_strings(self) -> None:
        assert ExecutionState.STEP_FAIL == "step.fail"

    def test_lookup_by_value(self) -> None:
        assert ExecutionState("task.pause") is ExecutionState.TASK_PAUSE


class TestAgentEvent:
    def test_defaults_populated(self) -> None:
        evt = _evt()
        assert evt.timestamp.tzinfo is not None
        assert len(evt.event_id) == 36

    def test_details_shortcut(self) -> None:
        assert _evt().details == "click login"

    def test_event_is_frozen(self) -> None:
        evt = _evt()
        with pytest.raises(dataclasses.FrozenInstanceError):
            evt.state = ExecutionState.STEP_FAIL  # type: ignore[misc]

    def test_to_dict_uses_string_values(self) -> None:
        d = _evt().to_dict()
        assert d["actor"] == "planner"
        assert d["state"] == "step.ok"
        assert d["data"] == {
            "task_id": "task-9",
            "step": 3,
            "max_steps": 50,
            "details": "click login",
        }

    def test_from_dict_restores_event(self) -> None:
        evt = _evt()
        restored = AgentEvent.from_dict(evt.to_dict())
        assert restored == evt

    def test_from_dict_without_timestamp_uses_now(self) -> None:
        before = datetime.now(tz=timezone.utc)
        restored = AgentEvent.from_dict(
            {"actor": "navigator", "state": "act.start", "data": {"details": "go"}}
        )
        assert restored.timestamp >= before
        assert restored.actor is Actor.NAVIGATOR
        assert restored.data.step == 0

    def test_from_dict_unknown_state_raises(self) -> None:
        with pytest.raises(ValueError):
            AgentEvent.from_dict({"actor": "planner", "state": "nope", "data": {}})
