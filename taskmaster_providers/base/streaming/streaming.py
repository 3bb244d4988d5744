"""Caller-dialect streaming events.

Callers written against Anthropic-style streams read ``event.type`` and
``event.delta.text``; :class:`CallerEvent` provides exactly that surface.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable

CONTENT_BLOCK_DELTA = "content_block_delta"


@dataclass(frozen=True)
class TextDelta:
    """Incremental text payload of a :class:`CallerEvent`."""

    text: str = ""


@dataclass(frozen=True)
class CallerEvent:
    """One incremental delta event, in the order it was received.

    ``delta.text`` may be empty: the provider sent a record without content,
    which still tells a consumer the stream is alive.
    """

    delta: TextDelta = field(default_factory=TextDelta)
    type: str = CONTENT_BLOCK_DELTA

    @classmethod
    def from_text(cls, text: str) -> "CallerEvent":
        return cls(delta=TextDelta(text=text))

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "delta": {"text": self.delta.text}}


def accumulate_text(events: Iterable[CallerEvent]) -> str:
    """Concatenate the text deltas of ``events`` (consumes the iterable)."""
    return "".join(e.delta.text for e in events if e.type == CONTENT_BLOCK_DELTA)


__all__ = [
    "CONTENT_BLOCK_DELTA",
    "TextDelta",
    "CallerEvent",
    "accumulate_text",
]
