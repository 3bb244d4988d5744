"""Cooperative cancellation primitives (public import path).

``CancellationToken`` signals an in-flight stream to stop; ``CancelledError``
is what the stream raises once it notices.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
