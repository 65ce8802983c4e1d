"""Shared tool-calling round trip for all providers."""

from __future__ import annotations

from typing import Any, List, Optional

from ..logger import get_logger
from ..tools.models import ToolCallRequest, ToolContext
from ..tools.registry import ToolRegistry
from .adapter import ToolAdapter
from .models import ChatResult

logger = get_logger(__name__)


class ToolRoundTrip:
    """Detect tool calls, execute them, and resubmit the results once.

    The provider-specific parts (reading text and tool calls out of a response,
    shaping tool results, sending the follow-up) come from a ``ToolAdapter``.
    A turn takes at most two round trips: the initial request and one follow-up.
    """

    def __init__(self, registry: ToolRegistry) -> None:
        """Initialize the round trip.

        Args:
            registry: Tool registry used to execute requested tools.
        """
        self._registry = registry

    async def run(
        self,
        *,
        initial_response: Any,
        adapter: ToolAdapter,
        context: Optional[ToolContext],
    ) -> ChatResult:
        """Turn the provider's first response into the canonical result.

        Args:
            initial_response: Provider response to the initial request.
            adapter: The provider-specific adapter for this turn.
            context: Tool context of the turn, if any.

        Returns:
            The final result. When the model asked for tools but no context was
            given, the tool calls are returned unexecuted with empty content.
        """
        tool_calls: List[ToolCallRequest] = list(adapter.get_tool_calls(initial_response))

        if not tool_calls:
            logger.debug("No tool calls found in response.")
            return ChatResult(content=adapter.get_text(initial_response))

        if context is None:
            logger.warning(
                f"Model requested {len(tool_calls)} tool call(s) but no tool context was supplied; "
                "returning them unexecuted."
            )
            return ChatResult(content="", tool_calls=tool_calls)

        logger.info(f"Processing {len(tool_calls)} tool call(s) for agent '{context.agent_id}'.")
        tool_results = await self._registry.execute_many(tool_calls, context)

        adapter.record_assistant_message(initial_response)
        messages = [
            adapter.build_tool_response_message(call, result) for call, result in zip(tool_calls, tool_results)
        ]
        final_response = await adapter.send_tool_responses(messages)

        return ChatResult(
            content=adapter.get_text(final_response),
            tool_calls=tool_calls,
            tool_results=tool_results,
        )
