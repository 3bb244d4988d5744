"""Validated inbound DTOs (pydantic)."""

from .chat import ChatRequestDTO, MessageDTO

__all__ = ["ChatRequestDTO", "MessageDTO"]
