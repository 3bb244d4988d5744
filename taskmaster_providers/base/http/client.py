"""Shared HTTP client pool for providers.

Purpose:
    Reuse ``httpx.Client`` instances (and their connection pools) across
    requests instead of opening a new client per call. Only transport state
    is shared; credentials travel per request in headers and never live on a
    pooled client.

Timeout strategy:
    Clients are created with the timeouts from :func:`get_timeout_config` at
    first use of a key.

Lifecycle & cleanup:
    Clients are cached by ``(base_url, purpose)``. All clients are closed at
    interpreter exit via ``atexit``; tests may call :func:`close_all_clients`.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: API base URL set on the client so callers can issue
            relative requests. ``None`` groups clients under a shared key.
        purpose: Short string separating pools (e.g. ``"openrouter.stream"``).

    Thread-safety:
        Safe for concurrent use; creation is guarded by a re-entrant lock.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        timeout = get_timeout_config().to_httpx()
        client = httpx.Client(base_url=base_url, timeout=timeout) if base_url else httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and forget all pooled clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
