"""
Pydantic DTOs validating inbound caller-dialect chat payloads.

Purpose
-------
The compatibility facade receives Anthropic-style keyword arguments
(``model``, ``messages``, ``system``, ``temperature``, ``max_tokens``) from
code that was written against another SDK. These DTOs validate that payload
before it reaches the translator and convert it into the frozen
:class:`~taskmaster_providers.base.models.ChatRequest` dataclass.

Failure modes
-------------
Invalid payloads raise ``pydantic.ValidationError``. Unknown keyword
arguments (``stream``, ``metadata``, ...) are ignored so existing call sites
keep working unchanged.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models import ChatRequest, Message


class MessageDTO(BaseModel):
    """A caller-dialect message.

    ``role`` is deliberately a free string: roles outside ``user`` and
    ``assistant`` are accepted here and collapsed by the translator.
    """

    model_config = ConfigDict(extra="ignore")

    role: str = Field(..., min_length=1)
    content: str

    def to_message(self) -> Message:
        return Message(role=self.role, content=self.content)


class ChatRequestDTO(BaseModel):
    """Validated caller-dialect request.

    Parameters:
        model: Optional model identifier, qualified or not.
        messages: Ordered conversation turns.
        system: Optional system prompt.
        temperature: Optional sampling temperature within [0.0, 2.0].
        max_tokens: Optional positive completion token cap.
    """

    model_config = ConfigDict(extra="ignore")

    model: Optional[str] = Field(default=None, min_length=1)
    messages: List[MessageDTO] = Field(default_factory=list)
    system: Optional[str] = None
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)

    def to_request(self) -> ChatRequest:
        return ChatRequest(
            messages=[m.to_message() for m in self.messages],
            model=self.model,
            system=self.system,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )


__all__ = ["MessageDTO", "ChatRequestDTO"]
