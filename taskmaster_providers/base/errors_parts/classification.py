"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

HTTP status extraction comes first, then ``httpx`` transport exception types,
then message substring heuristics as a last resort.
"""
from __future__ import annotations

from typing import Dict, Optional

import httpx

from ..cancellation_parts.cancelled_error import CancelledError
from .error_code import ErrorCode
from .provider_error import ProviderError


def _extract_status(exc: object) -> Optional[int]:
    """Return an HTTP status code carried by ``exc`` if there is one.

    Checked in order: ``exc.status_code``, ``exc.status``,
    ``exc.response.status_code``.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    402: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

_RETRYABLE = frozenset({ErrorCode.TRANSIENT, ErrorCode.RATE_LIMIT, ErrorCode.TIMEOUT, ErrorCode.UNAVAILABLE})


def status_to_code(status: int) -> ErrorCode:
    """Map an HTTP status to an :class:`ErrorCode` (5xx default to server_error)."""
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if status >= 500:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.UNKNOWN


def is_retryable(code: ErrorCode) -> bool:
    return code in _RETRYABLE


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:  # pragma: no cover - simple mapping
    pattern_groups = (
        (ErrorCode.TIMEOUT, ("timeout", "timed out")),
        (ErrorCode.AUTH, ("unauthorized", "forbidden", "api key")),
        (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
        (ErrorCode.UNAVAILABLE, ("unavailable",)),
        (ErrorCode.VALIDATION, ("invalid", "malformed")),
        (ErrorCode.SERVER_ERROR, ("server error", "internal error")),
    )
    if "rate" in msg and "limit" in msg:
        return ErrorCode.RATE_LIMIT
    for code, patterns in pattern_groups:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Cooperative cancellation.
        3. Timeout exceptions (builtin and ``httpx``).
        4. HTTP status mapping.
        5. Other ``httpx`` transport failures are transient.
        6. Message heuristics, then ``UNKNOWN``.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None:
        return status_to_code(status)
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSIENT
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


__all__ = [
    "classify_exception",
    "is_retryable",
    "status_to_code",
]
