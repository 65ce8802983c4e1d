"""Translate Gemini tool-calling payloads into the library's provider-agnostic tool protocol."""

import json
from typing import Any, List, Sequence

from google.genai import errors, types
from google.genai.client import Client
from google.genai.types import GenerateContentResponse

from rag_llm_lib.llm_core import LLMProviderError, ToolAdapter, ToolCallRequest, ToolCallResult, get_logger

logger = get_logger(__name__)

PROVIDER = "vertex"


def wrap_genai_error(error: errors.APIError) -> LLMProviderError:
    """Convert a google-genai error into an ``LLMProviderError`` carrying the raw payload."""
    payload = json.dumps(error.details, default=str) if error.details else str(error)
    return LLMProviderError(PROVIDER, "Vertex AI API error", payload=payload, status_code=error.code)


def parts_text(parts: Sequence[types.Part] | None) -> str:
    """Concatenate the text parts of a content, ignoring function calls."""
    return "".join(p.text for p in (parts or []) if p.text)


def _jsonable(value: Any) -> Any:
    # Function responses must be JSON-compatible; stringify what json cannot encode.
    return json.loads(json.dumps(value, default=str))


class VertexToolAdapter(ToolAdapter):
    """Per-turn request state and tool handling for Gemini on Vertex AI."""

    def __init__(
        self,
        client: Client,
        model: str,
        contents: List[types.Content],
        config: types.GenerateContentConfig,
    ):
        """Initialize the Vertex tool adapter.

        Args:
            client: The google-genai client, configured for Vertex AI.
            model: The Gemini model to use.
            contents: The conversation so far, in Gemini format.
            config: Generation config with system instruction and tools.
        """
        self.client = client
        self.model = model
        self.contents = contents
        self.config = config

    async def create(self) -> GenerateContentResponse:
        """Send the current contents and return the response.

        Raises:
            LLMProviderError: On API errors or when no candidate was generated.
        """
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model, contents=self.contents, config=self.config
            )
        except errors.APIError as e:
            logger.error(f"Error sending message to Vertex AI: {e}")
            raise wrap_genai_error(e) from e

        if not response.candidates or response.candidates[0].content is None:
            raise LLMProviderError(PROVIDER, "No response generated")
        return response

    @staticmethod
    def _parts(response: GenerateContentResponse) -> List[types.Part]:
        if not response.candidates or response.candidates[0].content is None:
            return []
        return list(response.candidates[0].content.parts or [])

    def get_text(self, response: GenerateContentResponse) -> str:
        return parts_text(self._parts(response))

    def get_tool_calls(self, response: GenerateContentResponse) -> Sequence[ToolCallRequest]:
        """Extract tool calls from a Gemini content response.

        Args:
            response: The content response from Gemini.

        Returns:
            A sequence of tool call requests extracted from the response.
        """
        return [
            ToolCallRequest(
                name=part.function_call.name or "",
                arguments=dict(part.function_call.args or {}),
                call_id=part.function_call.id,
            )
            for part in self._parts(response)
            if part.function_call
        ]

    def record_assistant_message(self, response: GenerateContentResponse) -> None:
        """Append the model turn holding the function calls to the contents."""
        content = response.candidates[0].content  # type: ignore[index]
        self.contents.append(content)  # type: ignore[arg-type]

    def build_tool_response_message(self, call: ToolCallRequest, result: ToolCallResult) -> types.Part:
        """Build a function response part for the Gemini API.

        Args:
            call: The tool call being answered.
            result: The result of the tool call.

        Returns:
            A Gemini Part object containing the function response.
        """
        return types.Part(
            function_response=types.FunctionResponse(
                id=call.call_id,
                name=result.name,
                response={"result": _jsonable(result.payload)},
            )
        )

    async def send_tool_responses(self, messages: Sequence[types.Part]) -> GenerateContentResponse:
        """Send function response parts back as a user turn and get a new response.

        Args:
            messages: A sequence of Gemini Part objects containing tool responses.

        Returns:
            The next content response from Gemini.
        """
        self.contents.append(types.Content(role="user", parts=list(messages)))
        return await self.create()
