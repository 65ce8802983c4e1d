"""Provider-agnostic message models for chat history."""

from typing import Literal

from pydantic import BaseModel

Role = Literal["user", "assistant", "system"]


class ChatMessage(BaseModel):
    """A prior turn of a conversation.

    Attributes:
        role: Who authored the message.
        content: Text payload of the message.
    """

    role: Role
    content: str


class SystemMessage(ChatMessage):
    """Message authored by the system to steer behavior."""

    role: Role = "system"


class UserMessage(ChatMessage):
    """Message authored by an end user."""

    role: Role = "user"


class AssistantMessage(ChatMessage):
    """Message authored by the assistant."""

    role: Role = "assistant"
