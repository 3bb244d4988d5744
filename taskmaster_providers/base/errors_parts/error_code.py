"""
Normalized provider error codes.

Values are lowercase snake_case and appear verbatim in structured log events
(``error_code``), so treat them as a stable contract.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Failure categories shared by every provider adapter."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    TRANSIENT = "transient"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    INTERNAL = "internal"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
