import json
from typing import Any, Dict, List, Sequence

import httpx

from rag_llm_lib.llm_core import LLMProviderError, ToolAdapter, ToolCallRequest, ToolCallResult, get_logger

logger = get_logger(__name__)

PROVIDER = "anthropic"
MESSAGES_PATH = "/v1/messages"


def error_from_response(response: httpx.Response) -> LLMProviderError:
    """Build the error for a non-success response; the body must have been read."""
    return LLMProviderError(PROVIDER, "Anthropic API error", payload=response.text, status_code=response.status_code)


def error_from_transport(error: httpx.HTTPError) -> LLMProviderError:
    return LLMProviderError(PROVIDER, "Anthropic request failed", payload=str(error) or type(error).__name__)


class AnthropicToolAdapter(ToolAdapter):
    """Per-turn request state and tool handling for the Anthropic Messages API."""

    def __init__(self, client: httpx.AsyncClient, headers: Dict[str, str], body: Dict[str, Any]):
        """Initialize the Anthropic tool adapter.

        Args:
            client: HTTP client whose base URL points at the Anthropic API.
            headers: Request headers including ``x-api-key`` and ``anthropic-version``.
            body: The request body; ``body["messages"]`` grows during the turn.
        """
        self.client = client
        self.headers = headers
        self.body = body

    @property
    def messages(self) -> List[Dict[str, Any]]:
        return self.body["messages"]

    async def create(self) -> Dict[str, Any]:
        """POST the current body and return the decoded message.

        Raises:
            LLMProviderError: On transport errors, non-success statuses or malformed bodies.
        """
        try:
            response = await self.client.post(MESSAGES_PATH, json=self.body, headers=self.headers)
        except httpx.HTTPError as e:
            logger.error(f"Error sending message to Anthropic: {e}")
            raise error_from_transport(e) from e

        if not response.is_success:
            logger.error(f"Anthropic API returned status {response.status_code}.")
            raise error_from_response(response)

        try:
            data = response.json()
        except ValueError as e:
            raise LLMProviderError(PROVIDER, "Malformed response from Anthropic", payload=response.text) from e

        if not isinstance(data, dict) or not isinstance(data.get("content"), list):
            raise LLMProviderError(PROVIDER, "Malformed response from Anthropic", payload=response.text)
        return data

    def get_text(self, response: Dict[str, Any]) -> str:
        return "".join(block.get("text", "") for block in response["content"] if block.get("type") == "text")

    def get_tool_calls(self, response: Dict[str, Any]) -> Sequence[ToolCallRequest]:
        """Extract ``tool_use`` content blocks as tool call requests."""
        return [
            ToolCallRequest(name=block.get("name", ""), arguments=block.get("input") or {}, call_id=block.get("id"))
            for block in response["content"]
            if block.get("type") == "tool_use"
        ]

    def record_assistant_message(self, response: Dict[str, Any]) -> None:
        self.messages.append({"role": "assistant", "content": response["content"]})

    def build_tool_response_message(self, call: ToolCallRequest, result: ToolCallResult) -> Dict[str, Any]:
        """Build a ``tool_result`` content block answering ``call``."""
        block: Dict[str, Any] = {
            "type": "tool_result",
            "tool_use_id": call.call_id,
            "content": json.dumps(result.payload, default=str),
        }
        if not result.ok:
            block["is_error"] = True
        return block

    async def send_tool_responses(self, blocks: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
        """Send the tool results as one user turn and return the next message."""
        self.messages.append({"role": "user", "content": list(blocks)})
        return await self.create()
