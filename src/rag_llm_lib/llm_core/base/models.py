"""Canonical request and result models shared by every provider."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from ..messages import ChatMessage
from ..tools.models import ToolCallRequest, ToolCallResult, ToolContext


class ProviderName(str, Enum):
    """The supported providers."""

    VERTEX = "vertex"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


DEFAULT_PROVIDER = ProviderName.VERTEX


class LLMConfig(BaseModel):
    """
    Per-agent provider configuration.

    ``provider`` is kept as a plain string so that an unknown value reaches the
    router, which rejects it with ``UnknownProviderError``.

    Attributes:
        provider: One of ``vertex``, ``openai``, ``anthropic``.
        model: Overrides the provider's default model.
        api_key: Caller-supplied key. Required by ``openai`` and ``anthropic``; ignored by ``vertex``.
        temperature: Sampling temperature.
        max_tokens: Maximum number of tokens to generate.
    """

    provider: str = DEFAULT_PROVIDER.value
    model: Optional[str] = None
    api_key: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


class ChatOptions(BaseModel):
    """
    Options of a single chat turn.

    Attributes:
        system_prompt: Instructions for the model.
        tools: Expose the agent's registry tools to the model. Needs ``tool_context``.
        tool_context: Identifies the agent and user; handed to tool handlers.
        history: Prior turns, oldest first.
        stream: Whether the caller wants a streamed answer. The router does not act on it;
            callers pick ``chat`` or ``chat_stream``.
    """

    system_prompt: Optional[str] = None
    tools: bool = False
    tool_context: Optional[ToolContext] = None
    history: List[ChatMessage] = Field(default_factory=list)
    stream: bool = False


class ChatResult(BaseModel):
    """Normalized chat output returned by every provider.

    Attributes:
        content: Final text of the turn.
        tool_calls: Tool calls the model requested, if any.
        tool_results: Results of those calls, index-aligned with ``tool_calls``.
    """

    content: str
    tool_calls: Optional[List[ToolCallRequest]] = None
    tool_results: Optional[List[ToolCallResult]] = None

    @model_validator(mode="after")
    def _check_alignment(self) -> "ChatResult":
        if self.tool_calls is not None and self.tool_results is not None:
            if len(self.tool_calls) != len(self.tool_results):
                raise ValueError("tool_calls and tool_results must have the same length")
        return self
