"""Expose provider-agnostic message model types shared by chat implementations."""

from .models import ChatMessage, UserMessage, AssistantMessage, SystemMessage, Role

__all__ = [
    "ChatMessage",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "Role",
]
