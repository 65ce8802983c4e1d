from typing import Any, AsyncGenerator, Callable, Dict, List, Optional

import openai
from openai import AsyncOpenAI

from rag_llm_lib.llm_core import (
    ChatOptions,
    ChatProvider,
    ChatResult,
    FunctionDeclaration,
    LLMConfig,
    ProviderName,
    ProviderSettings,
    ToolRegistry,
    get_logger,
)
from .adapter import OpenAIToolAdapter, wrap_openai_error
from .declarations import to_openai_tools

logger = get_logger(__name__)

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


class OpenAIProvider(ChatProvider):
    """
    Chat provider for OpenAI's chat completions API (bring your own key).

    The system prompt is sent as the first ``system`` message and history roles
    are passed through unchanged.
    """

    name = ProviderName.OPENAI.value
    display_name = "OpenAI"
    default_model = DEFAULT_OPENAI_MODEL
    requires_api_key = True

    def __init__(
        self,
        registry: ToolRegistry,
        settings: Optional[ProviderSettings] = None,
        client_factory: Optional[Callable[[str], AsyncOpenAI]] = None,
    ):
        """
        Initializes the OpenAI provider.

        Args:
            registry: Tool registry used for declarations and tool execution.
            settings: Process-level provider settings.
            client_factory: Builds a client for an API key. Defaults to ``AsyncOpenAI``
                with SDK retries disabled.
        """
        super().__init__(registry, settings)
        self._client_factory = client_factory or self._default_client
        self._clients: Dict[str, AsyncOpenAI] = {}

    def _default_client(self, api_key: str) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=api_key,
            base_url=self.settings.openai_base_url,
            timeout=self.settings.request_timeout,
            max_retries=0,
        )

    def _get_client(self, config: LLMConfig) -> AsyncOpenAI:
        api_key = config.api_key or ""
        client = self._clients.get(api_key)
        if client is None:
            client = self._client_factory(api_key)
            self._clients[api_key] = client
        return client

    @staticmethod
    def _build_messages(message: str, options: ChatOptions) -> List[Dict[str, Any]]:
        """
        Converts the canonical history into OpenAI messages.

        Args:
            message: The new user message.
            options: Turn options carrying the system prompt and history.

        Returns:
            List of OpenAI message dictionaries.
        """
        messages: List[Dict[str, Any]] = []
        if options.system_prompt:
            messages.append({"role": "system", "content": options.system_prompt})
        for msg in options.history:
            messages.append({"role": msg.role, "content": msg.content})
        messages.append({"role": "user", "content": message})
        return messages

    def _adapter(
        self, message: str, config: LLMConfig, options: ChatOptions, declarations: List[FunctionDeclaration]
    ) -> OpenAIToolAdapter:
        return OpenAIToolAdapter(
            client=self._get_client(config),
            model=self.resolve_model(config),
            messages=self._build_messages(message, options),
            tools=to_openai_tools(declarations),
            temperature=config.temperature,
            max_tokens=config.max_tokens,
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
        logger.debug(f"Initial response received. Finish reason: {response.choices[0].finish_reason}")
        return await self._round_trip.run(
            initial_response=response, adapter=adapter, context=options.tool_context
        )

    async def _stream_impl(
        self, message: str, config: LLMConfig, options: ChatOptions
    ) -> AsyncGenerator[str, Any]:
        adapter = self._adapter(message, config, options, [])
        try:
            stream = await adapter.client.chat.completions.create(**adapter.request_kwargs(stream=True))
        except openai.APIError as e:
            logger.error(f"Error opening OpenAI stream: {e}")
            raise wrap_openai_error(e) from e

        try:
            async for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        except openai.APIError as e:
            raise wrap_openai_error(e) from e
        finally:
            await stream.close()

    async def aclose(self) -> None:
        for client in self._clients.values():
            await client.close()
        self._clients.clear()
