"""
Structured provider error exception type.

Every unrecovered failure of a provider call (bad HTTP status, transport
failure, missing credential) reaches the caller as a single ``ProviderError``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """A provider failure with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable message; for HTTP status failures this is the
            ``"OpenRouter API error: ..."`` text built from the response body.
        provider: Provider key where the error originated (e.g. ``"openrouter"``).
        model: Optional model identifier associated with the failure.
        status: HTTP status code when the failure came from a response.
        retryable: Hint for callers that implement their own retry policy.
        raw: Original exception, when one was wrapped.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    status: Optional[int] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
