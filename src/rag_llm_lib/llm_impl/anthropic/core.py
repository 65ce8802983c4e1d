import json
from typing import Any, AsyncGenerator, Dict, List, Optional

import httpx

from rag_llm_lib.llm_core import (
    ChatOptions,
    ChatProvider,
    ChatResult,
    FunctionDeclaration,
    LLMConfig,
    LLMProviderError,
    ProviderName,
    ProviderSettings,
    ToolRegistry,
    get_logger,
)
from .adapter import MESSAGES_PATH, PROVIDER, AnthropicToolAdapter, error_from_response, error_from_transport
from .declarations import to_anthropic_tools
from .sse import iter_sse_data

logger = get_logger(__name__)

DEFAULT_ANTHROPIC_MODEL = "claude-3-haiku-20240307"
DEFAULT_MAX_TOKENS = 4096


class AnthropicProvider(ChatProvider):
    """
    Chat provider for Anthropic's Messages API (bring your own key).

    Talks to the HTTP API directly. The system prompt goes into the top-level
    ``system`` field, so ``system`` history entries are dropped. ``max_tokens`` is
    mandatory on this API and defaults to 4096.
    """

    name = ProviderName.ANTHROPIC.value
    display_name = "Anthropic"
    default_model = DEFAULT_ANTHROPIC_MODEL
    requires_api_key = True

    def __init__(
        self,
        registry: ToolRegistry,
        settings: Optional[ProviderSettings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initializes the Anthropic provider.

        Args:
            registry: Tool registry used for declarations and tool execution.
            settings: Process-level settings carrying the base URL, API version and timeout.
            http_client: Client to send requests with. Its base URL must point at the
                Anthropic API. An injected client is not closed by ``aclose``.
        """
        super().__init__(registry, settings)
        self._client = http_client
        self._owns_client = http_client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.settings.anthropic_base_url,
                timeout=self.settings.request_timeout,
            )
        return self._client

    def _headers(self, config: LLMConfig) -> Dict[str, str]:
        return {
            "x-api-key": config.api_key or "",
            "anthropic-version": self.settings.anthropic_version,
        }

    def _build_body(
        self, message: str, config: LLMConfig, options: ChatOptions, declarations: List[FunctionDeclaration]
    ) -> Dict[str, Any]:
        """
        Builds the Messages API request body.

        Args:
            message: The new user message.
            config: Provider configuration.
            options: Turn options carrying the system prompt and history.
            declarations: Tools offered to the model.

        Returns:
            The JSON request body.
        """
        messages: List[Dict[str, Any]] = [
            {"role": msg.role, "content": msg.content} for msg in options.history if msg.role != "system"
        ]
        messages.append({"role": "user", "content": message})

        body: Dict[str, Any] = {
            "model": self.resolve_model(config),
            "messages": messages,
            "max_tokens": config.max_tokens or DEFAULT_MAX_TOKENS,
        }
        if config.temperature is not None:
            body["temperature"] = config.temperature
        if options.system_prompt:
            body["system"] = options.system_prompt
        tools = to_anthropic_tools(declarations)
        if tools:
            body["tools"] = tools
        return body

    async def _send_impl(
        self,
        message: str,
        config: LLMConfig,
        options: ChatOptions,
        declarations: List[FunctionDeclaration],
    ) -> ChatResult:
        adapter = AnthropicToolAdapter(
            client=self._get_client(),
            headers=self._headers(config),
            body=self._build_body(message, config, options, declarations),
        )
        response = await adapter.create()
        logger.debug(f"Initial response received. Stop reason: {response.get('stop_reason')}")
        return await self._round_trip.run(
            initial_response=response, adapter=adapter, context=options.tool_context
        )

    async def _stream_impl(
        self, message: str, config: LLMConfig, options: ChatOptions
    ) -> AsyncGenerator[str, Any]:
        body = self._build_body(message, config, options, [])
        body["stream"] = True

        try:
            async with self._get_client().stream(
                "POST", MESSAGES_PATH, json=body, headers=self._headers(config)
            ) as response:
                if not response.is_success:
                    await response.aread()
                    logger.error(f"Anthropic API returned status {response.status_code}.")
                    raise error_from_response(response)

                async for event in iter_sse_data(response.aiter_lines()):
                    event_type = event.get("type")
                    if event_type == "content_block_delta":
                        text = (event.get("delta") or {}).get("text")
                        if text:
                            yield text
                    elif event_type == "error":
                        raise LLMProviderError(
                            PROVIDER, "Anthropic stream error", payload=json.dumps(event.get("error"), default=str)
                        )
                    elif event_type == "message_stop":
                        break
        except httpx.HTTPError as e:
            logger.error(f"Error streaming from Anthropic: {e}")
            raise error_from_transport(e) from e

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
