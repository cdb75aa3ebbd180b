"""Error taxonomy for taskcore.

All exceptions raised by taskcore derive from ``TaskCoreError`` so that
callers can catch the entire family with a single ``except TaskCoreError``
clause while still being able to distinguish individual failure modes.

Shipped in this module
----------------------
- ErrorSeverity        — ordered severity enum
- TaskCoreError        — root exception with severity and context payload
- ConfigurationError   — configuration loading / validation failures
- ValidationFailed     — model output absent or rejected by its contract
- InvalidOutputFormat  — a specific field broke the output contract
- ChatModelAuthError   — provider rejected the credentials (session-fatal)

Two recovery classes exist.  ``ValidationFailed`` and unclassified errors are
step-local: agents convert them to a failure envelope.  ``ChatModelAuthError``
is session-level: agents re-raise it so the driving loop can halt the run.
"""
from __future__ import annotations

from enum import Enum


class ErrorSeverity(str, Enum):
    """Ordered severity levels for ``TaskCoreError`` instances.

    Severity is purely advisory metadata — it does not change the
    exception-handling semantics, but it lets logging and alerting
    infrastructure filter by impact level.
    """

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


class TaskCoreError(Exception):
    """Root exception for all taskcore failures.

    Parameters
    ----------
    message:
        Human-readable description of what went wrong.
    severity:
        Advisory ``ErrorSeverity`` level.  Defaults to ``HIGH``.
    context:
        Optional dict of structured metadata (agent IDs, field errors, etc.)
        that helps diagnostics without requiring log scraping.

    Examples
    --------
    >>> try:
    ...     raise TaskCoreError("something broke", ErrorSeverity.MEDIUM)
    ... except TaskCoreError as exc:
    ...     print(exc.severity.value)
    medium
    """

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        context: dict[str, object] | None = None,
    ) -> None:
        super().__init__(message)
        self.severity: ErrorSeverity = severity
        self.context: dict[str, object] = context or {}

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"message={str(self)!r}, "
            f"severity={self.severity.value!r})"
        )


class ConfigurationError(TaskCoreError):
    """Raised when configuration loading or validation fails.

    Examples: unreadable file, bad YAML, out-of-range option value.
    """


class ValidationFailed(TaskCoreError):
    """Raised when a model returns no usable output.

    Recoverable: the agent reports it through the failure envelope and the
    driving loop may retry or replan.
    """

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: dict[str, object] | None = None,
    ) -> None:
        super().__init__(message, severity, context)


class InvalidOutputFormat(ValidationFailed):
    """Raised when model output does not satisfy its structured contract.

    ``context["errors"]`` holds the per-field error list when the failure
    came from schema validation.
    """


class ChatModelAuthError(TaskCoreError):
    """Raised when the model provider rejects the configured credentials.

    This is deliberately *not* a ``ValidationFailed``: it must never be folded
    into a per-step failure envelope.

    Parameters
    ----------
    message:
        User-actionable description (e.g. "verify your API key").
    cause:
        The provider exception that was classified as an auth failure.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(
            message,
            severity=ErrorSeverity.CRITICAL,
            context={"cause_type": type(cause).__name__} if cause is not None else None,
        )
        self.cause: BaseException | None = cause
        self.__cause__ = cause
