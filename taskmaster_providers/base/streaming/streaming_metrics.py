"""Streaming metrics for a single provider invocation."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Counters collected while a stream is decoded.

    Fields:
        emitted: Events yielded to the caller.
        skipped: Records dropped because they were not valid JSON.
        time_to_first_token_ms: Delay from request start to the first event.
        total_duration_ms: Delay from request start to stream end.
    """

    emitted: int = 0
    skipped: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    started_at: float = field(default_factory=time.perf_counter, repr=False)

    def _elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started_at) * 1000.0

    def record_emit(self) -> None:
        if self.emitted == 0:
            self.time_to_first_token_ms = self._elapsed_ms()
        self.emitted += 1

    def record_skip(self) -> None:
        self.skipped += 1

    def finish(self) -> None:
        self.total_duration_ms = self._elapsed_ms()

    def to_log_fields(self) -> Dict[str, Any]:
        return {
            "emitted_count": self.emitted,
            "skipped_count": self.skipped,
            "time_to_first_token_ms": self.time_to_first_token_ms,
            "total_duration_ms": self.total_duration_ms,
        }


__all__ = ["StreamMetrics"]
