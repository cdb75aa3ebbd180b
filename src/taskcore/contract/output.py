"""Structured-output contracts for agent decisions.

Models are asked to answer with a JSON object.  Providers that support
structured output hand back a parsed mapping; the rest return text that
contains the object somewhere (often inside a Markdown fence).  Either way
the payload is validated against a frozen Pydantic model before an agent
acts on it.

Shipped in this module
----------------------
- coerce_bool_like     — accept ``True`` / ``"true"`` / ``"FALSE"`` style flags
- BoolLike             — annotated ``bool`` type using that coercion
- PlannerOutput        — the planner's decision contract
- extract_json_object  — pull the JSON object out of raw model text
- validate_output      — validate a model payload against a contract
"""
from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Annotated, TypeVar

from pydantic import BaseModel, BeforeValidator, StrictStr, ValidationError

from taskcore.schema.errors import InvalidOutputFormat

logger = logging.getLogger(__name__)

OutputT = TypeVar("OutputT", bound=BaseModel)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)
_DECODER = json.JSONDecoder()


def coerce_bool_like(value: object) -> bool:
    """Normalise a boolean-like model value.

    Booleans pass through.  Strings are compared case-insensitively against
    ``"true"`` and ``"false"``.  Anything else is rejected.

    Raises
    ------
    ValueError
        For any other string content or any other type.

    Examples
    --------
    >>> coerce_bool_like("FALSE")
    False
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        raise ValueError(f"Invalid boolean string {value!r}")
    raise ValueError(f"Expected a boolean or boolean string, got {type(value).__name__}")


BoolLike = Annotated[bool, BeforeValidator(coerce_bool_like)]


class PlannerOutput(BaseModel):
    """Decision produced by the planner for one step.

    Attributes
    ----------
    observation:
        What the planner sees in the current browser state.
    challenges:
        Obstacles that could block progress.
    reasoning:
        Why the chosen next steps follow from the observation.
    next_steps:
        Instructions for the navigator; reported as the STEP_OK detail.
    done:
        Whether the overall task is finished.
    app_task:
        Whether the task can be answered without browsing.
    """

    model_config = {"frozen": True, "extra": "ignore"}

    observation: StrictStr
    challenges: StrictStr
    reasoning: StrictStr
    next_steps: StrictStr
    done: BoolLike
    app_task: BoolLike


def extract_json_object(text: str) -> object:
    """Parse the JSON object embedded in raw model text.

    Tries, in order: the whole text, the first fenced code block, and then
    the first ``{`` from which a complete JSON object decodes.  Prose after
    the object (including a second object) is ignored.

    Raises
    ------
    ValueError
        If no candidate parses as JSON.
    """
    candidates = [text.strip()]
    fenced = _FENCE_RE.search(text)
    if fenced:
        candidates.append(fenced.group(1).strip())

    for candidate in candidates:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue

    start = text.find("{")
    while start != -1:
        try:
            value, _ = _DECODER.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        if isinstance(value, dict):
            return value
        start = text.find("{", start + 1)
    raise ValueError("No JSON object found in model output")


def validate_output(schema: type[OutputT], payload: object) -> OutputT:
    """Validate *payload* against *schema*.

    Parameters
    ----------
    schema:
        The Pydantic contract model.
    payload:
        A *schema* instance (returned as-is), a mapping, or raw text that
        contains a JSON object.

    Returns
    -------
    OutputT
        The validated, frozen decision.

    Raises
    ------
    InvalidOutputFormat
        If the payload is not a JSON object, misses a required field, or
        has a field of the wrong shape.  The underlying error is chained as
        ``__cause__``.
    """
    if isinstance(payload, schema):
        return payload

    if isinstance(payload, str):
        try:
            payload = extract_json_object(payload)
        except ValueError as exc:
            raise InvalidOutputFormat(
                f"{schema.__name__}: {exc}",
                context={"schema": schema.__name__},
            ) from exc

    if not isinstance(payload, Mapping):
        raise InvalidOutputFormat(
            f"{schema.__name__}: expected a JSON object, got {type(payload).__name__}",
            context={"schema": schema.__name__},
        )

    try:
        return schema.model_validate(dict(payload))
    except ValidationError as exc:
        logger.debug("Model output rejected by %s: %s", schema.__name__, exc)
        raise InvalidOutputFormat(
            f"{schema.__name__} validation failed: {exc}",
            context={"schema": schema.__name__, "errors": exc.errors()},
        ) from exc
