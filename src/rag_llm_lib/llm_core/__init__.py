"""Public exports for the core LLM abstractions and utilities."""

from .base import (
    ChatProvider,
    ChatResult,
    ChatOptions,
    ChatStream,
    LLMConfig,
    ProviderName,
    DEFAULT_PROVIDER,
    ToolAdapter,
    ToolRoundTrip,
)
from .config import ProviderSettings
from .exceptions import (
    LLMToolError,
    ToolRegistrationError,
    ToolNotFoundError,
    ToolExecutionError,
    ToolValidationError,
    LLMError,
    ProviderConfigurationError,
    UnknownProviderError,
    LLMProviderError,
)
from .logger import get_logger, setup_logging
from .messages import ChatMessage, UserMessage, AssistantMessage, SystemMessage
from .tools import (
    Tool,
    ToolDefinition,
    ToolParameterSpec,
    ToolContext,
    ToolCallRequest,
    ToolCallResult,
    ToolRegistry,
    FunctionDeclaration,
    create_tool,
    to_function_declaration,
)

__all__ = [
    "ChatProvider",
    "ChatResult",
    "ChatOptions",
    "ChatStream",
    "LLMConfig",
    "ProviderName",
    "DEFAULT_PROVIDER",
    "ToolAdapter",
    "ToolRoundTrip",
    "ProviderSettings",
    "LLMToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "ToolValidationError",
    "LLMError",
    "ProviderConfigurationError",
    "UnknownProviderError",
    "LLMProviderError",
    "get_logger",
    "setup_logging",
    "ChatMessage",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "Tool",
    "ToolDefinition",
    "ToolParameterSpec",
    "ToolContext",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolRegistry",
    "FunctionDeclaration",
    "create_tool",
    "to_function_declaration",
]
