"""taskmaster_providers: AI backend layer for the Task Master CLI.

Callers speak one request/response dialect (Anthropic-style messages and
``content_block_delta`` stream events); adapters translate to each
provider's wire dialect. The OpenRouter adapter is the streaming entry point::

    from taskmaster_providers import ClientConfig, OpenRouterClient

    client = OpenRouterClient(ClientConfig(credential="sk-or-..."))
    with client.messages.create(
        system="You are a planner.",
        messages=[{"role": "user", "content": "Split task 3 into subtasks"}],
    ) as stream:
        for event in stream:
            print(event.delta.text, end="")
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import ErrorCode, ProviderError
from .base.models import ChatRequest, Message
from .base.streaming import CallerEvent, TextDelta
from .openrouter import ClientConfig, MessageStream, OpenRouterClient

__all__ = [
    "CallerEvent",
    "CancellationToken",
    "CancelledError",
    "ChatRequest",
    "ClientConfig",
    "ErrorCode",
    "Message",
    "MessageStream",
    "OpenRouterClient",
    "ProviderError",
    "TextDelta",
]
