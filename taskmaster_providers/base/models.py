"""
Caller-dialect request types shared by provider adapters.

These are the shapes callers build (Anthropic-style: a separate ``system``
prompt plus an ordered list of ``user``/``assistant`` messages). Adapters
translate them to their own wire dialect and never mutate them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Union

# Roles the caller dialect defines. Adapters accept any role string and
# collapse unknown ones according to their own wire rules.
Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class Message:
    """A single caller-dialect chat message.

    Attributes:
        role: Author role, normally ``"user"`` or ``"assistant"``.
        content: Plain text content.
    """

    role: Union[Role, str]
    content: str


@dataclass(frozen=True)
class ChatRequest:
    """Caller-dialect chat completion request.

    Attributes:
        messages: Ordered conversation turns.
        model: Optional model identifier; adapters fall back to their default.
        system: Optional system prompt, kept apart from ``messages``.
        temperature: Optional sampling temperature.
        max_tokens: Optional completion token cap.
    """

    messages: List[Message] = field(default_factory=list)
    model: Optional[str] = None
    system: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


__all__ = ["Role", "Message", "ChatRequest"]
