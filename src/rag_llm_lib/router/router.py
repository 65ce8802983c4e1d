"""
Routes chat turns to the provider named in an agent's ``LLMConfig``.

Example:
    registry = ToolRegistry()
    router = LLMRouter(registry, settings=ProviderSettings.from_env())

    result = await router.chat(
        "What time is it in Tokyo?",
        LLMConfig(provider="openai", api_key="sk-..."),
        ChatOptions(tools=True, tool_context=ToolContext(agent_id="a1", user_id="u1")),
    )

    async with router.chat_stream("Tell me a story", LLMConfig()) as stream:
        async for fragment in stream:
            print(fragment, end="")
"""

from typing import Dict, Mapping, Optional, Type

from rag_llm_lib.llm_core import (
    ChatOptions,
    ChatProvider,
    ChatResult,
    ChatStream,
    LLMConfig,
    ProviderName,
    ProviderSettings,
    ToolRegistry,
    UnknownProviderError,
    get_logger,
)
from rag_llm_lib.llm_impl import AnthropicProvider, OpenAIProvider, VertexProvider

logger = get_logger(__name__)

PROVIDER_CLASSES: Dict[str, Type[ChatProvider]] = {
    ProviderName.VERTEX.value: VertexProvider,
    ProviderName.OPENAI.value: OpenAIProvider,
    ProviderName.ANTHROPIC.value: AnthropicProvider,
}

DEFAULT_MODELS: Dict[str, str] = {name: cls.default_model for name, cls in PROVIDER_CLASSES.items()}


def get_default_config(provider: str) -> LLMConfig:
    """
    Returns the default configuration of a provider: its default model and no credential.

    Raises:
        UnknownProviderError: If the provider is not supported.
    """
    key = provider.value if isinstance(provider, ProviderName) else provider
    if key not in DEFAULT_MODELS:
        raise UnknownProviderError(str(provider))
    return LLMConfig(provider=key, model=DEFAULT_MODELS[key])


class LLMRouter:
    """
    Dispatches chat requests to the vertex, openai or anthropic provider.

    Providers are created on first use and share the router's tool registry and
    settings. Instances can be injected, e.g. to supply preconfigured clients.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        providers: Optional[Mapping[str, ChatProvider]] = None,
        settings: Optional[ProviderSettings] = None,
    ):
        """
        Args:
            registry: Tool registry handed to every provider.
            providers: Provider instances keyed by provider name. Missing ones are built on demand.
            settings: Process-level provider settings. Defaults to settings read from the environment
                (``ProviderSettings.from_env(load_env_file=False)``).
        """
        self.registry = registry
        self.settings = settings or ProviderSettings.from_env(load_env_file=False)
        self._providers: Dict[str, ChatProvider] = dict(providers or {})

    def get_provider(self, provider: str) -> ChatProvider:
        """
        Returns the provider instance for a provider name.

        Raises:
            UnknownProviderError: If the provider is not supported.
        """
        instance = self._providers.get(provider)
        if instance is not None:
            return instance

        provider_cls = PROVIDER_CLASSES.get(provider)
        if provider_cls is None:
            raise UnknownProviderError(provider)

        instance = provider_cls(self.registry, self.settings)
        self._providers[provider] = instance
        logger.debug(f"Created provider '{provider}'.")
        return instance

    async def chat(
        self, message: str, config: Optional[LLMConfig] = None, options: Optional[ChatOptions] = None
    ) -> ChatResult:
        """
        Generates a chat response with the configured provider.

        Args:
            message: The user's new message.
            config: Provider configuration. Defaults to the vertex provider.
            options: Turn options (history, system prompt, tools).

        Returns:
            The canonical chat result.

        Raises:
            UnknownProviderError: If ``config.provider`` is not supported.
            ProviderConfigurationError: If the config is missing a credential or project.
            LLMProviderError: If the provider call fails.
        """
        config = config or LLMConfig()
        provider = self.get_provider(config.provider)
        logger.info(f"Routing chat turn to '{config.provider}'.")
        return await provider.send(message, config, options)

    def chat_stream(
        self, message: str, config: Optional[LLMConfig] = None, options: Optional[ChatOptions] = None
    ) -> ChatStream:
        """
        Starts a streamed chat turn with the configured provider.

        Configuration errors are raised here, before any network call.

        Returns:
            A ``ChatStream`` of text fragments.
        """
        config = config or LLMConfig()
        provider = self.get_provider(config.provider)
        logger.info(f"Routing streamed chat turn to '{config.provider}'.")
        return provider.send_streaming(message, config, options)

    def get_default_config(self, provider: str) -> LLMConfig:
        return get_default_config(provider)

    async def aclose(self) -> None:
        """Releases the clients held by every created provider."""
        for provider in self._providers.values():
            await provider.aclose()
