"""Cancellation error type.

Raised by a stream that observes a cancelled :class:`CancellationToken`.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    Kept distinct from provider failures so callers can tell a user abort
    apart from an upstream error.
    """

__all__ = ["CancelledError"]
