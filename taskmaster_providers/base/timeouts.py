"""Transport timeout configuration.

The streaming adapter imposes no deadline of its own; the only bounds are
the ``httpx`` transport timeouts defined here. Long completions (tens of
thousands of tokens) are expected, hence the generous read timeout.

Environment overrides (optional, positive floats, seconds):
    TASKMASTER_CONNECT_TIMEOUT_SECONDS
    TASKMASTER_HTTP_TIMEOUT_SECONDS
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Bound on establishing the TCP/TLS connection.
        http_timeout_seconds: Bound on each read/write/pool wait, including
            the gap between two streamed chunks.
    """

    connect_timeout_seconds: float = 30.0
    http_timeout_seconds: float = 600.0

    def to_httpx(self) -> httpx.Timeout:
        return httpx.Timeout(self.http_timeout_seconds, connect=self.connect_timeout_seconds)


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`.

    The cache is refreshed when the override variables change, so tests can
    adjust them with ``monkeypatch``.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(
        [
            os.getenv("TASKMASTER_CONNECT_TIMEOUT_SECONDS", ""),
            os.getenv("TASKMASTER_HTTP_TIMEOUT_SECONDS", ""),
        ]
    )
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float("TASKMASTER_CONNECT_TIMEOUT_SECONDS", defaults.connect_timeout_seconds),
        http_timeout_seconds=_parse_env_float("TASKMASTER_HTTP_TIMEOUT_SECONDS", defaults.http_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
