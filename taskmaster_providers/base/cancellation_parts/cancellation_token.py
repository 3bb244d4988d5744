"""Cooperative cancellation token implementation.

A stream polls its token between network chunks; cancelling the token from
another thread (a CLI signal handler, a UI stop button) makes the stream
raise :class:`CancelledError` and release its connection.
"""

from __future__ import annotations

from threading import Lock
from typing import Optional

from .cancelled_error import CancelledError


class CancellationToken:
    """A cooperative cancellation token.

    Thread-safe for ``cancel`` + ``raise_if_cancelled`` usage. The first
    reason supplied wins; later ``cancel`` calls are no-ops.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: Optional[str] = None
        self._lock = Lock()

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._cancelled

    @property
    def reason(self) -> str | None:
        """Reason string supplied at cancel time (if any)."""
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            self._reason = reason

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise CancelledError(self._reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self._cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]
