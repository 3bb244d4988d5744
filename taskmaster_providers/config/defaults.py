"""taskmaster_providers.config.defaults
===================================

Central place for the small, stable default values used by the provider
adapters. Plain constants only: no I/O and no imports from other
provider packages, so any module can depend on this one.
"""

from __future__ import annotations

# ---- OpenRouter ----
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
# Baseline model; unqualified ids get OPENROUTER_DEFAULT_NAMESPACE prepended.
OPENROUTER_DEFAULT_MODEL = "claude-3-7-sonnet-20250219"
OPENROUTER_DEFAULT_NAMESPACE = "anthropic"
OPENROUTER_MODEL_SEPARATOR = "/"

# Identification headers sent with every request.
OPENROUTER_DEFAULT_REFERER = "https://github.com/taskmaster-ai/taskmaster"
OPENROUTER_DEFAULT_TITLE = "Task Master CLI"

# ---- Sampling defaults applied when the caller omits them ----
DEFAULT_TEMPERATURE = 0.2
DEFAULT_MAX_TOKENS = 64000


__all__ = [
    "OPENROUTER_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_MODEL",
    "OPENROUTER_DEFAULT_NAMESPACE",
    "OPENROUTER_MODEL_SEPARATOR",
    "OPENROUTER_DEFAULT_REFERER",
    "OPENROUTER_DEFAULT_TITLE",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_MAX_TOKENS",
]
