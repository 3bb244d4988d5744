"""taskmaster_providers.config.env
==============================

Environment variable mapping for provider credentials.

Failure Modes
-------------
Helpers never raise on unknown providers or unset variables; they return
``None`` and let the caller decide (``ClientConfig.from_env`` turns a missing
key into an AUTH error).
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

# Canonical provider -> env var mapping
ENV_MAP: Dict[str, str] = {
    "openrouter": "OPENROUTER_API_KEY",
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if ``val`` looks like a template value rather than a key.

    Heuristics (case-insensitive): contains ``placeholder`` or ``changeme``,
    starts with ``example``, or has the ``your_..._here`` shape used by
    ``.env.example`` files.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or v.startswith("example")
        or (v.startswith("your_") and v.endswith("_here"))
    )


def get_env_var_name(provider: str) -> Optional[str]:
    return ENV_MAP.get((provider or "").strip().lower())


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_name)`` for a provider's API key.

    Empty and placeholder values count as unset, yielding ``(None, name)``.
    Unknown providers yield ``(None, None)``.
    """
    name = get_env_var_name(provider)
    if name is None:
        return None, None
    val = os.getenv(name)
    if not val or not val.strip() or is_placeholder(val):
        return None, name
    return val.strip(), name


__all__ = [
    "ENV_MAP",
    "is_placeholder",
    "get_env_var_name",
    "resolve_provider_key",
]
