"""Classification of provider authentication failures.

Provider SDKs disagree on how a rejected key looks: OpenAI and Anthropic
raise an ``AuthenticationError`` subclass, HTTP wrappers expose a 401
status, others put a machine-readable ``code`` / ``type`` on a generic
exception.  The predicate below recognises those shapes without importing
any SDK.  Message text is never inspected.
"""
from __future__ import annotations

_AUTH_CODES = frozenset({"invalid_api_key", "authentication_error", "unauthorized"})


def _status_of(exc: BaseException) -> object:
    status = getattr(exc, "status_code", None)
    if status is None:
        status = getattr(exc, "status", None)
    if status is None:
        response = getattr(exc, "response", None)
        status = getattr(response, "status_code", None)
    return status


def is_authentication_error(exc: BaseException) -> bool:
    """Return ``True`` when *exc* means the provider rejected the credentials.

    Matches, in order: an ``AuthenticationError`` class anywhere in the MRO,
    an HTTP status of 401 on the exception or its ``response``, and a
    ``code`` / ``type`` of ``invalid_api_key``, ``authentication_error`` or
    ``unauthorized``.

    Examples
    --------
    >>> class AuthenticationError(Exception): ...
    >>> is_authentication_error(AuthenticationError("bad key"))
    True
    >>> is_authentication_error(TimeoutError("timed out waiting for #401"))
    False
    """
    if any(cls.__name__ == "AuthenticationError" for cls in type(exc).__mro__):
        return True

    status = _status_of(exc)
    if status == 401 or status == "401":
        return True

    for attr in ("code", "type"):
        value = getattr(exc, attr, None)
        if isinstance(value, str) and value.lower() in _AUTH_CODES:
            return True
    return False
