"""Unified configuration layer for providers.

Sources are merged in a predictable order (later wins):

1. Built-in defaults (``config.defaults``)
2. Optional JSON or YAML file named by ``TASKMASTER_PROVIDERS_CONFIG``
3. Environment variables (``<PROVIDER>_MODEL``, ``<PROVIDER>_BASE_URL``,
   ``<PROVIDER>_API_KEY``)
4. Explicit overrides passed by the caller

External config file structure example::

    {
      "openrouter": {
        "model": "anthropic/claude-3-7-sonnet-20250219",
        "base_url": "https://openrouter.ai/api/v1"
      }
    }

The merged mapping is plain data; adapters build their immutable
``ClientConfig`` from it. Nothing here keeps credentials in module state.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_MODEL,
    OPENROUTER_DEFAULT_REFERER,
    OPENROUTER_DEFAULT_TITLE,
)
from .env import is_placeholder, resolve_provider_key

CONFIG_FILE_ENV = "TASKMASTER_PROVIDERS_CONFIG"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openrouter": {
        "model": OPENROUTER_DEFAULT_MODEL,
        "base_url": OPENROUTER_DEFAULT_BASE_URL,
        "referer": OPENROUTER_DEFAULT_REFERER,
        "title": OPENROUTER_DEFAULT_TITLE,
    },
}

ENV_FIELD_MAP = {
    "model": "MODEL",
    "base_url": "BASE_URL",
}


def _load_external_config() -> Dict[str, Any]:
    """Read the optional config file (JSON first, then YAML).

    Unreadable or unparseable files yield ``{}``.
    """
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    p = Path(path).expanduser()
    if not p.is_file():
        return {}
    try:
        text = p.read_text(encoding="utf-8")
    except OSError:
        return {}
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError:
            return {}
    return data if isinstance(data, dict) else {}


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val:
            out[field] = val
    key, _ = resolve_provider_key(provider)
    if key:
        out["api_key"] = key
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged configuration mapping for ``provider``.

    Merge order (later wins): defaults -> config file -> env -> overrides.
    ``None`` override values and non-string config file values are ignored.
    A placeholder ``api_key`` from any source is dropped.
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = dict(DEFAULTS.get(name, {}))

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        # every setting is a string; other YAML/JSON scalars are ignored
        cfg |= {k: v for k, v in file_cfg.items() if isinstance(v, str)}

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    if is_placeholder(cfg.get("api_key")):
        cfg.pop("api_key")
    return cfg


__all__ = [
    "CONFIG_FILE_ENV",
    "DEFAULTS",
    "get_provider_config",
]
