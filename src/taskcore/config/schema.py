"""Config validation helpers for taskcore.

Re-exports ``TaskCoreConfig`` so that ``taskcore.config`` is a complete
import path, and turns Pydantic failures into ``ConfigurationError``
tagged with the section that was wrong.  A session is either misconfigured
as a whole (``session``: name, log level, event fan-out, custom settings)
or in the options its agents read (``agent``); callers such as the CLI use
the tag to point the user at the right block of the file.
"""
from __future__ import annotations

from pydantic import ValidationError

from taskcore.schema.config import TaskCoreConfig
from taskcore.schema.errors import ConfigurationError

__all__ = ["TaskCoreConfig", "config_error", "validate_config"]


def _section_of(loc: tuple[int | str, ...]) -> str:
    return "agent" if loc and loc[0] == "agent" else "session"


def config_error(exc: ValidationError, source: str) -> ConfigurationError:
    """Build the ``ConfigurationError`` reported for *exc* read from *source*.

    The message lists every failing field as a dotted path; the context
    carries ``source``, the sorted ``sections`` involved and the raw
    Pydantic ``errors``.
    """
    errors = exc.errors()
    sections = sorted({_section_of(tuple(err["loc"])) for err in errors})
    fields = "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
        for err in errors
    )
    label = "agent options" if sections == ["agent"] else "configuration"
    return ConfigurationError(
        f"Invalid {label} in {source}: {fields}",
        context={"source": source, "sections": sections, "errors": errors},
    )


def validate_config(data: dict[str, object], source: str = "<dict>") -> TaskCoreConfig:
    """Validate a raw dict against the ``TaskCoreConfig`` schema.

    Raises
    ------
    ConfigurationError
        If the data fails Pydantic validation.  The original
        ``ValidationError`` is attached as the ``__cause__``.

    Examples
    --------
    >>> validate_config({"session_name": "demo"}).session_name
    'demo'
    """
    try:
        return TaskCoreConfig.model_validate(data)
    except ValidationError as exc:
        raise config_error(exc, source) from exc
