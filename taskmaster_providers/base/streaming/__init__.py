"""Streaming package for provider layer.

Exposes caller-dialect stream events and per-stream metrics.
"""

from .streaming import CONTENT_BLOCK_DELTA, CallerEvent, TextDelta, accumulate_text
from .streaming_metrics import StreamMetrics

__all__ = [
    "CONTENT_BLOCK_DELTA",
    "CallerEvent",
    "TextDelta",
    "accumulate_text",
    "StreamMetrics",
]
