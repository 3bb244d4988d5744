"""OpenRouter adapter exposing an Anthropic-style streaming surface."""

from .client import API_ERROR_PREFIX, MessageStream, Messages, OpenRouterClient
from .client_config import ClientConfig, qualify_model
from .helpers import build_headers, build_provider_request
from .stream_helpers import decode_stream, translate_line

__all__ = [
    "API_ERROR_PREFIX",
    "ClientConfig",
    "MessageStream",
    "Messages",
    "OpenRouterClient",
    "build_headers",
    "build_provider_request",
    "decode_stream",
    "qualify_model",
    "translate_line",
]
