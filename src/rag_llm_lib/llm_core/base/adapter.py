"""Protocol for adapting provider-specific tool handling."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from ..tools.models import ToolCallRequest, ToolCallResult


class ToolAdapter(Protocol):
    """
    Protocol for adapting provider-specific responses to the shared tool round trip.

    An adapter is created per chat turn and holds that turn's native request state
    (client, messages, generation settings).
    """

    def get_text(self, response: Any) -> str:
        """Extracts the plain text answer from a provider-specific response."""
        ...

    def get_tool_calls(self, response: Any) -> Sequence[ToolCallRequest]:
        """Extracts generic tool calls from a provider-specific response."""
        ...

    def record_assistant_message(self, response: Any) -> None:
        """Appends the assistant turn (including its tool-call blocks) to the request."""
        ...

    def build_tool_response_message(self, call: ToolCallRequest, result: ToolCallResult) -> Any:
        """Converts a generic tool result into a provider-specific message or block."""
        ...

    async def send_tool_responses(self, messages: Sequence[Any]) -> Any:
        """Sends the tool response messages back to the provider and awaits the next response."""
        ...
