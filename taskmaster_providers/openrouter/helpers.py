"""Request translation for the OpenRouter provider.

Maps a caller-dialect :class:`ChatRequest` (separate ``system`` prompt,
``user``/``assistant`` turns) onto the OpenAI-style ``/chat/completions``
body OpenRouter expects. Pure functions: no I/O, no clock, no randomness, so
the same request always serializes to the same bytes.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from ..base.models import ChatRequest
from ..config.defaults import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE
from .client_config import ClientConfig, qualify_model


def map_role(role: str) -> str:
    """Collapse a caller role onto the wire roles.

    Only ``assistant`` survives; everything else is sent as ``user``.
    """
    return "assistant" if role == "assistant" else "user"


def build_messages(request: ChatRequest) -> List[Dict[str, str]]:
    """Translate caller messages, with the system prompt (if any) first."""
    messages = [{"role": map_role(m.role), "content": m.content} for m in request.messages]
    if request.system:
        messages.insert(0, {"role": "system", "content": request.system})
    return messages


def resolve_model(request: ChatRequest, config: ClientConfig) -> str:
    return qualify_model(request.model or config.default_model_id)


def build_provider_request(request: ChatRequest, config: ClientConfig) -> Dict[str, Any]:
    """Assemble the streaming ``chat/completions`` payload.

    Parameters:
        request: Caller-dialect request (not modified).
        config: Client configuration supplying the default model.

    Returns:
        A JSON-serializable mapping with ``model``, ``messages``,
        ``stream=True``, ``temperature`` and ``max_tokens``. Sampling values
        default only when the caller left them unset, so ``0`` passes through.
    """
    return {
        "model": resolve_model(request, config),
        "messages": build_messages(request),
        "stream": True,
        "temperature": DEFAULT_TEMPERATURE if request.temperature is None else request.temperature,
        "max_tokens": DEFAULT_MAX_TOKENS if request.max_tokens is None else request.max_tokens,
    }


def encode_provider_request(payload: Dict[str, Any]) -> bytes:
    """Serialize a payload to the exact request body bytes."""
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def build_headers(config: ClientConfig) -> Dict[str, str]:
    """Return request headers: bearer auth, JSON content type, app identification."""
    return {
        "Authorization": f"Bearer {config.credential}",
        "Content-Type": "application/json",
        "HTTP-Referer": config.referer,
        "X-Title": config.title,
    }


__all__ = [
    "map_role",
    "build_messages",
    "resolve_model",
    "build_provider_request",
    "encode_provider_request",
    "build_headers",
]
