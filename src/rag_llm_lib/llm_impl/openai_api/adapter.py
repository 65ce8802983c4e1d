import json
from typing import Any, Dict, Iterable, List, Optional, Sequence, cast

import openai
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from rag_llm_lib.llm_core import LLMProviderError, ToolAdapter, ToolCallRequest, ToolCallResult, get_logger

logger = get_logger(__name__)

PROVIDER = "openai"


def wrap_openai_error(error: openai.APIError) -> LLMProviderError:
    """Convert an SDK error into an ``LLMProviderError`` carrying the raw payload."""
    if isinstance(error, openai.APIStatusError):
        return LLMProviderError(
            PROVIDER, "OpenAI API error", payload=error.response.text, status_code=error.status_code
        )
    return LLMProviderError(PROVIDER, "OpenAI API error", payload=str(error))


class OpenAIToolAdapter(ToolAdapter):
    """Per-turn request state and tool handling for OpenAI chat completions."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]],
        temperature: Optional[float],
        max_tokens: Optional[int],
    ):
        """
        Args:
            client: Client bound to the caller's API key.
            model: Chat model, e.g. ``gpt-4o-mini``.
            messages: Conversation in chat-completions format; grows during the turn.
            tools: ``{"type": "function", ...}`` entries, left out of requests when empty.
            temperature: Passed through when set.
            max_tokens: Passed through when set.
        """
        self.client = client
        self.model = model
        self.messages = messages
        self.tools = tools or None
        self.temperature = temperature
        self.max_tokens = max_tokens

    def request_kwargs(self, stream: bool = False) -> Dict[str, Any]:
        """Keyword arguments for ``chat.completions.create``; unset options are left out."""
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": cast(Iterable[Any], self.messages),
        }
        if self.tools:
            kwargs["tools"] = self.tools
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature
        if self.max_tokens is not None:
            kwargs["max_tokens"] = self.max_tokens
        if stream:
            kwargs["stream"] = True
        return kwargs

    async def create(self) -> ChatCompletion:
        """Send the current messages and return the completion.

        Raises:
            LLMProviderError: On API errors or when the response has no choices.
        """
        try:
            response = await self.client.chat.completions.create(**self.request_kwargs())
        except openai.APIError as e:
            logger.error(f"Error sending message to OpenAI: {e}")
            raise wrap_openai_error(e) from e

        if not response.choices:
            raise LLMProviderError(PROVIDER, "No response from OpenAI")
        return response

    def get_text(self, response: ChatCompletion) -> str:
        return response.choices[0].message.content or ""

    def get_tool_calls(self, response: ChatCompletion) -> Sequence[ToolCallRequest]:
        """Read the ``function`` tool calls of the first choice. Other tool call types are skipped.

        Returns:
            One request per call, in order. Arguments are decoded from JSON when possible;
            undecodable strings are passed on so the registry reports the error.
        """
        tool_calls = response.choices[0].message.tool_calls
        if not tool_calls:
            return []

        requests = []
        for call in tool_calls:
            if call.type != "function":
                logger.warning(f"Skipping unsupported OpenAI tool call type '{call.type}' (ID: {call.id})")
                continue
            raw_args = call.function.arguments
            try:
                arguments: Any = json.loads(raw_args) if raw_args else {}
            except json.JSONDecodeError:
                arguments = raw_args
            requests.append(ToolCallRequest(name=call.function.name, arguments=arguments, call_id=call.id))
        return requests

    def record_assistant_message(self, response: ChatCompletion) -> None:
        """Append the assistant message with its ``function`` tool calls.

        The API rejects tool messages without it, and every recorded call needs a
        tool message, so skipped call types are left out.
        """
        message = response.choices[0].message.model_dump(exclude_none=True)
        tool_calls = [c for c in message.get("tool_calls") or [] if c.get("type") == "function"]
        if tool_calls:
            message["tool_calls"] = tool_calls
        else:
            message.pop("tool_calls", None)
        self.messages.append(message)

    def build_tool_response_message(self, call: ToolCallRequest, result: ToolCallResult) -> Dict[str, Any]:
        """A ``role="tool"`` message answering ``call`` with the JSON-encoded payload."""
        return {
            "role": "tool",
            "tool_call_id": call.call_id,
            "content": json.dumps(result.payload, default=str),
        }

    async def send_tool_responses(self, tool_messages: Sequence[Dict[str, Any]]) -> ChatCompletion:
        """Append the tool messages and request the follow-up completion."""
        self.messages.extend(tool_messages)
        return await self.create()
