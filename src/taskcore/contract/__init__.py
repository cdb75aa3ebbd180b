"""Structured-output contract package for taskcore."""
from __future__ import annotations

from taskcore.contract.output import (
    BoolLike,
    PlannerOutput,
    coerce_bool_like,
    extract_json_object,
    validate_output,
)

__all__ = [
    "BoolLike",
    "PlannerOutput",
    "coerce_bool_like",
    "extract_json_object",
    "validate_output",
]
