"""Normalization and retry classification of provider errors."""

from typing import Any, Mapping, Optional

import httpx

from audiobook_studio.constants import (
    RESOURCE_EXHAUSTED_STATUS,
    RETRYABLE_MESSAGE_MARKERS,
    RETRYABLE_STATUS_CODES,
)
from audiobook_studio.providers.types import ProviderFailure

# Attribute names that carry an HTTP-like status on SDK and transport errors
_STATUS_FIELDS = ("http_status", "status_code", "code", "status")


def _field(source: Any, name: str) -> Any:
    """Read an attribute or mapping entry without raising."""
    try:
        if isinstance(source, Mapping):
            return source.get(name)
        return getattr(source, name, None)
    except Exception:
        return None


def _as_status(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def _find_status(source: Any) -> Optional[int]:
    for name in _STATUS_FIELDS:
        status = _as_status(_field(source, name))
        if status is not None:
            return status
    return None


def _describe(exc: BaseException) -> str:
    try:
        return str(exc) or type(exc).__name__
    except Exception:
        return type(exc).__name__


def normalize_error(exc: BaseException) -> ProviderFailure:
    """
    Convert any caught provider exception into a ``ProviderFailure``.

    The status is probed on the exception itself, on an attached HTTP response
    and on a nested provider error object (``error`` attribute or the ``error``
    entry of a ``details`` payload). Textual statuses such as
    ``RESOURCE_EXHAUSTED`` are folded into the message.
    """
    parts = [_describe(exc)]
    http_status = _find_status(exc)

    response = _field(exc, "response")
    if http_status is None and response is not None:
        http_status = _as_status(_field(response, "status_code"))

    nested = _field(exc, "error")
    if nested is None:
        nested = _field(_field(exc, "details"), "error")
    if nested is not None:
        nested_status = _find_status(nested)
        if nested_status is not None and (http_status is None or nested_status == 429):
            http_status = nested_status
        for name in ("status", "message"):
            text = _field(nested, name)
            if isinstance(text, str) and text:
                parts.append(text)

    status_text = _field(exc, "status")
    if isinstance(status_text, str) and not status_text.isdigit():
        parts.append(status_text)

    return ProviderFailure(
        http_status=http_status,
        message=" | ".join(parts),
        network=isinstance(exc, (httpx.TransportError, OSError)),
    )


def is_retryable(exc: BaseException) -> bool:
    """
    Decide whether a failed call is worth retrying with the next key.

    Retryable failures are rate limits, exhausted quotas and overloaded or
    failing servers. Authentication, bad requests and content policy
    rejections are not.
    """
    try:
        failure = normalize_error(exc)
    except Exception:
        return False
    if failure.http_status in RETRYABLE_STATUS_CODES:
        return True
    message = failure.message.lower()
    if RESOURCE_EXHAUSTED_STATUS.lower() in message:
        return True
    return any(marker in message for marker in RETRYABLE_MESSAGE_MARKERS)


def is_retryable_http_failure(failure: ProviderFailure) -> bool:
    """Status-based classification used for the OpenAI-compatible backend."""
    if failure.http_status is None:
        return failure.network
    return failure.http_status == 429 or failure.http_status >= 500
