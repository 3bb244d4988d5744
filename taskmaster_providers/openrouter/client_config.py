"""Immutable per-client configuration for the OpenRouter adapter.

One :class:`ClientConfig` is built per client and outlives all of its
requests. The credential lives here only; nothing is stored at module level.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..base.errors import ErrorCode, ProviderError
from ..config import get_provider_config
from ..config.defaults import (
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_MODEL,
    OPENROUTER_DEFAULT_NAMESPACE,
    OPENROUTER_DEFAULT_REFERER,
    OPENROUTER_DEFAULT_TITLE,
    OPENROUTER_MODEL_SEPARATOR,
)

PROVIDER_NAME = "openrouter"
MISSING_API_KEY_ERROR = "OPENROUTER_API_KEY is not set"


def qualify_model(model_id: str) -> str:
    """Return ``model_id`` with a ``provider/`` namespace qualifier.

    Ids that already contain the separator pass through unchanged; bare ids
    get the default namespace, e.g. ``"claude-3-7-sonnet-20250219"`` becomes
    ``"anthropic/claude-3-7-sonnet-20250219"``.
    """
    if OPENROUTER_MODEL_SEPARATOR in model_id:
        return model_id
    return f"{OPENROUTER_DEFAULT_NAMESPACE}{OPENROUTER_MODEL_SEPARATOR}{model_id}"


@dataclass(frozen=True)
class ClientConfig:
    """Endpoint, credential and default model for one adapter instance.

    ``endpoint_base`` and ``default_model_id`` may be passed as ``None`` to
    get the defaults. After construction ``default_model_id`` is always
    namespace-qualified and ``endpoint_base`` has no trailing slash.
    """

    credential: str = field(repr=False)
    endpoint_base: str = OPENROUTER_DEFAULT_BASE_URL
    default_model_id: str = OPENROUTER_DEFAULT_MODEL
    referer: str = OPENROUTER_DEFAULT_REFERER
    title: str = OPENROUTER_DEFAULT_TITLE

    def __post_init__(self) -> None:
        object.__setattr__(self, "endpoint_base", (self.endpoint_base or OPENROUTER_DEFAULT_BASE_URL).rstrip("/"))
        object.__setattr__(self, "default_model_id", qualify_model(self.default_model_id or OPENROUTER_DEFAULT_MODEL))
        object.__setattr__(self, "referer", self.referer or OPENROUTER_DEFAULT_REFERER)
        object.__setattr__(self, "title", self.title or OPENROUTER_DEFAULT_TITLE)

    @property
    def chat_completions_url(self) -> str:
        return f"{self.endpoint_base}/chat/completions"

    @classmethod
    def from_env(cls, *, require_key: bool = True, **overrides: Any) -> "ClientConfig":
        """Build a config from defaults, config file, environment and overrides.

        Accepted override keys: ``api_key``, ``base_url``, ``model``,
        ``referer``, ``title``. With ``require_key=False`` a missing key
        leaves the credential empty (for request previews that never send).

        Raises:
            ProviderError: ``ErrorCode.AUTH`` when no usable API key is found
                and ``require_key`` is set.
        """
        cfg = get_provider_config(PROVIDER_NAME, overrides)
        api_key = cfg.get("api_key") or ""
        if not api_key and require_key:
            raise ProviderError(code=ErrorCode.AUTH, message=MISSING_API_KEY_ERROR, provider=PROVIDER_NAME)
        return cls(
            credential=api_key,
            endpoint_base=cfg.get("base_url"),
            default_model_id=cfg.get("model"),
            referer=cfg.get("referer"),
            title=cfg.get("title"),
        )


__all__ = ["PROVIDER_NAME", "MISSING_API_KEY_ERROR", "qualify_model", "ClientConfig"]
