from contextlib import aclosing
from typing import Any, AsyncGenerator, Callable, List, Optional

from google import genai
from google.genai import errors, types
from google.genai.client import Client

from rag_llm_lib.llm_core import (
    ChatOptions,
    ChatProvider,
    ChatResult,
    FunctionDeclaration,
    LLMConfig,
    ProviderConfigurationError,
    ProviderName,
    ProviderSettings,
    ToolRegistry,
    get_logger,
)
from rag_llm_lib.llm_core.messages import ChatMessage
from .adapter import VertexToolAdapter, parts_text, wrap_genai_error
from .declarations import to_vertex_tools

logger = get_logger(__name__)

DEFAULT_VERTEX_MODEL = "gemini-1.5-flash"


class VertexProvider(ChatProvider):
    """
    Chat provider for Google's Gemini models on Vertex AI.

    Authenticates with the ambient project credentials; ``LLMConfig.api_key`` is
    ignored. ``system`` history entries are dropped and the system prompt is sent
    as ``system_instruction``.
    """

    name = ProviderName.VERTEX.value
    display_name = "Vertex AI"
    default_model = DEFAULT_VERTEX_MODEL

    def __init__(
        self,
        registry: ToolRegistry,
        settings: Optional[ProviderSettings] = None,
        client_factory: Optional[Callable[[], Client]] = None,
    ):
        """
        Initializes the Vertex AI provider.

        Args:
            registry: Tool registry used for declarations and tool execution.
            settings: Process-level settings carrying the GCP project and region.
            client_factory: Builds the google-genai client. Defaults to a Vertex AI client
                for ``settings.gcp_project_id``.
        """
        super().__init__(registry, settings)
        self._client_factory = client_factory
        self._client: Optional[Client] = None

    def validate_config(self, config: LLMConfig) -> None:
        if self._client_factory is None and not self.settings.gcp_project_id:
            raise ProviderConfigurationError("GCP_PROJECT_ID environment variable is required for Vertex AI")
        if config.api_key:
            logger.debug("Ignoring api_key for Vertex AI; ambient project credentials are used.")

    def _get_client(self) -> Client:
        if self._client is None:
            if self._client_factory is not None:
                self._client = self._client_factory()
            else:
                self._client = genai.Client(
                    vertexai=True,
                    project=self.settings.gcp_project_id,
                    location=self.settings.gcp_region,
                )
                logger.info(
                    f"Initialized Vertex AI client for project '{self.settings.gcp_project_id}' "
                    f"in '{self.settings.gcp_region}'."
                )
        return self._client

    @staticmethod
    def _convert_history(history: List[ChatMessage]) -> List[types.Content]:
        """
        Converts canonical history to Gemini Content history.

        Gemini has no 'system' role in chat history, so system entries are skipped.

        Args:
            history: List of ChatMessage objects.

        Returns:
            List of Gemini Content objects.
        """
        return [
            types.Content(role="model" if msg.role == "assistant" else "user", parts=[types.Part(text=msg.content)])
            for msg in history
            if msg.role != "system"
        ]

    def _adapter(
        self, message: str, config: LLMConfig, options: ChatOptions, declarations: List[FunctionDeclaration]
    ) -> VertexToolAdapter:
        contents = self._convert_history(options.history)
        contents.append(types.Content(role="user", parts=[types.Part(text=message)]))

        generation_config = types.GenerateContentConfig(
            system_instruction=options.system_prompt,
            temperature=config.temperature,
            max_output_tokens=config.max_tokens,
            tools=to_vertex_tools(declarations),  # type: ignore[arg-type]
        )
        return VertexToolAdapter(
            client=self._get_client(),
            model=self.resolve_model(config),
            contents=contents,
            config=generation_config,
        )

    async def _send_impl(
        self,
        message: str,
        config: LLMConfig,
        options: ChatOptions,
        declarations: List[FunctionDeclaration],
    ) -> ChatResult:
        adapter = self._adapter(message, config, options, declarations)
        response = await adapter.create()
        return await self._round_trip.run(
            initial_response=response, adapter=adapter, context=options.tool_context
        )

    async def _stream_impl(
        self, message: str, config: LLMConfig, options: ChatOptions
    ) -> AsyncGenerator[str, Any]:
        adapter = self._adapter(message, config, options, [])
        try:
            stream = await adapter.client.aio.models.generate_content_stream(
                model=adapter.model, contents=adapter.contents, config=adapter.config
            )
            async with aclosing(stream) as chunks:
                async for chunk in chunks:
                    if not chunk.candidates or chunk.candidates[0].content is None:
                        continue
                    text = parts_text(chunk.candidates[0].content.parts)
                    if text:
                        yield text
        except errors.APIError as e:
            logger.error(f"Error streaming from Vertex AI: {e}")
            raise wrap_genai_error(e) from e

    async def aclose(self) -> None:
        self._client = None
