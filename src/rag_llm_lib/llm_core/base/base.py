"""Core abstractions for LLM provider implementations."""

from abc import ABC, abstractmethod
from typing import Any, AsyncGenerator, ClassVar, List, Optional

from ..config import ProviderSettings
from ..exceptions import ProviderConfigurationError
from ..logger import get_logger
from ..tools.registry import ToolRegistry
from ..tools.schema import FunctionDeclaration
from .models import ChatOptions, ChatResult, LLMConfig
from .round_trip import ToolRoundTrip
from .streaming import ChatStream

logger = get_logger(__name__)


class ChatProvider(ABC):
    """Abstract base class for provider adapters.

    Subclasses translate the canonical request into their wire format and supply a
    per-turn ``ToolAdapter``; the tool round trip itself is shared. Provider errors
    propagate to the caller as ``LLMProviderError``, there are no automatic retries.
    """

    name: ClassVar[str]
    display_name: ClassVar[str]
    default_model: ClassVar[str]
    requires_api_key: ClassVar[bool] = False

    def __init__(self, registry: ToolRegistry, settings: Optional[ProviderSettings] = None):
        """
        Args:
            registry: Tool registry used for declarations and tool execution.
            settings: Process-level provider settings. Defaults to settings read from the environment
                (``ProviderSettings.from_env(load_env_file=False)``).
        """
        self.registry = registry
        self.settings = settings or ProviderSettings.from_env(load_env_file=False)
        self._round_trip = ToolRoundTrip(registry)

    async def send(self, message: str, config: LLMConfig, options: Optional[ChatOptions] = None) -> ChatResult:
        """
        Conducts a chat turn, running requested tools if the model asks for them.

        Args:
            message: The user's new message.
            config: Provider configuration.
            options: Turn options (history, system prompt, tools).

        Returns:
            The canonical result.

        Raises:
            ProviderConfigurationError: Before any network call, if the config is unusable.
            LLMProviderError: If the provider call fails.
        """
        options = options or ChatOptions()
        self.validate_config(config)
        declarations = self.collect_declarations(options)
        logger.debug(
            f"[{self.name}] chat turn with model '{self.resolve_model(config)}', "
            f"{len(options.history)} history message(s), {len(declarations)} tool(s)."
        )
        return await self._send_impl(message, config, options, declarations)

    def send_streaming(self, message: str, config: LLMConfig, options: Optional[ChatOptions] = None) -> ChatStream:
        """
        Starts a streamed chat turn. Tools are not offered to the model when streaming.

        Configuration is checked immediately; the network call starts when the
        returned stream is first iterated.

        Args:
            message: The user's new message.
            config: Provider configuration.
            options: Turn options.

        Returns:
            A stream of text fragments.

        Raises:
            ProviderConfigurationError: If the config is unusable.
        """
        options = options or ChatOptions()
        self.validate_config(config)
        logger.debug(f"[{self.name}] streaming turn with model '{self.resolve_model(config)}'.")
        return ChatStream(
            self._stream_impl(message, config, options),
            max_buffered=self.settings.stream_buffer_size,
        )

    def validate_config(self, config: LLMConfig) -> None:
        """Fail fast on configuration problems.

        Raises:
            ProviderConfigurationError: If an API key is required but missing.
        """
        if self.requires_api_key and not config.api_key:
            raise ProviderConfigurationError(f"{self.display_name} API key is required")

    def resolve_model(self, config: LLMConfig) -> str:
        return config.model or self.default_model

    def collect_declarations(self, options: ChatOptions) -> List[FunctionDeclaration]:
        """Declarations of the agent's tools, or none if tools are disabled or there is no context."""
        if not options.tools or options.tool_context is None:
            return []
        return self.registry.get_function_declarations(options.tool_context.agent_id)

    async def aclose(self) -> None:
        """Release clients held by the provider."""
        pass

    @abstractmethod
    async def _send_impl(
        self,
        message: str,
        config: LLMConfig,
        options: ChatOptions,
        declarations: List[FunctionDeclaration],
    ) -> ChatResult:
        pass

    @abstractmethod
    def _stream_impl(self, message: str, config: LLMConfig, options: ChatOptions) -> AsyncGenerator[str, Any]:
        pass
