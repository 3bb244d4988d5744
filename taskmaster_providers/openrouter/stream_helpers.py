"""Streaming response decoding for the OpenRouter provider.

The response body is a sequence of newline-delimited server-sent-event
records::

    data: {"choices":[{"delta":{"content":"Hel"}}]}
    data: {"choices":[{"delta":{"content":"lo"}}]}
    data: [DONE]

Lines come from ``httpx.Response.iter_lines()``, which already buffers a
record split across network chunks (and any UTF-8 sequence split with it).
:func:`translate_line` turns one record into a caller-dialect event;
:func:`decode_stream` applies it lazily and stops at the ``[DONE]`` sentinel
without reading further.

None of these helpers perform I/O.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Iterable, Iterator, Optional, Tuple

from ..base.cancellation import CancellationToken
from ..base.streaming import CallerEvent, StreamMetrics

DATA_PREFIX = "data: "
DONE_SENTINEL = "data: [DONE]"


class RecordKind(str, Enum):
    """Outcome of translating one stream record."""

    BLANK = "blank"
    DONE = "done"
    EVENT = "event"
    MALFORMED = "malformed"


def _extract_delta_text(data: Any) -> Optional[str]:
    """Return ``choices[0].delta.content``, or ``None`` when ``choices`` is absent.

    Only a record that is not an object, or has no ``choices``, counts as
    malformed. Any other missing or oddly typed step (empty list, ``null``
    entry, non-object delta) yields ``""``.
    """
    if not isinstance(data, dict) or data.get("choices") is None:
        return None
    choices = data["choices"]
    first = choices[0] if isinstance(choices, list) and choices else None
    delta = first.get("delta") if isinstance(first, dict) else None
    content = delta.get("content") if isinstance(delta, dict) else None
    return str(content) if content else ""


def translate_line(line: str) -> Tuple[RecordKind, Optional[CallerEvent]]:
    """Translate one stream record.

    Returns:
        ``(RecordKind.EVENT, event)`` for a parseable record (the event text
        may be empty), otherwise ``(kind, None)`` with ``BLANK`` for empty
        lines, ``DONE`` for the termination sentinel and ``MALFORMED`` for
        records that are not JSON objects carrying ``choices`` (SSE comments
        such as ``: OPENROUTER PROCESSING`` land here too).
    """
    record = line.strip()
    if not record:
        return RecordKind.BLANK, None
    if record == DONE_SENTINEL:
        return RecordKind.DONE, None
    body = record[len(DATA_PREFIX):] if record.startswith(DATA_PREFIX) else record
    try:
        data = json.loads(body)
    except ValueError:
        return RecordKind.MALFORMED, None
    text = _extract_delta_text(data)
    if text is None:
        return RecordKind.MALFORMED, None
    return RecordKind.EVENT, CallerEvent.from_text(text)


def decode_stream(
    lines: Iterable[str],
    *,
    metrics: Optional[StreamMetrics] = None,
    cancellation_token: Optional[CancellationToken] = None,
) -> Iterator[CallerEvent]:
    """Lazily decode stream records into caller events, in arrival order.

    Parameters:
        lines: Record lines, e.g. ``httpx.Response.iter_lines()``.
        metrics: Optional collector updated with emitted/skipped counts.
        cancellation_token: Checked before each line is consumed.

    Raises:
        CancelledError: When ``cancellation_token`` is cancelled mid-stream.
    """
    metrics = metrics if metrics is not None else StreamMetrics()
    token = cancellation_token
    if token is not None:
        token.raise_if_cancelled()
    for line in lines:
        if token is not None:
            token.raise_if_cancelled()
        kind, event = translate_line(line)
        if kind is RecordKind.DONE:
            return
        if kind is RecordKind.MALFORMED:
            metrics.record_skip()
            continue
        if event is not None:
            metrics.record_emit()
            yield event


def extract_error_message(body: bytes, fallback: str) -> str:
    """Return the provider's error message from an error response body.

    Accepts ``{"message": ...}`` and OpenRouter's nested
    ``{"error": {"message": ...}}``; anything else (including non-JSON
    bodies) yields ``fallback``.
    """
    try:
        data = json.loads(body.decode("utf-8", errors="replace"))
    except ValueError:
        return fallback
    if not isinstance(data, dict):
        return fallback
    message = data.get("message")
    if not message:
        error = data.get("error")
        message = error.get("message") if isinstance(error, dict) else error
    return str(message) if message else fallback


__all__ = [
    "DATA_PREFIX",
    "DONE_SENTINEL",
    "RecordKind",
    "translate_line",
    "decode_stream",
    "extract_error_message",
]
