"""
rag_llm_lib: tool calling and multi-provider chat routing for retrieval-augmented agents.
"""

from .llm_core import (
    ChatMessage,
    ChatOptions,
    ChatProvider,
    ChatResult,
    ChatStream,
    LLMConfig,
    ProviderName,
    ProviderSettings,
    Tool,
    ToolCallRequest,
    ToolCallResult,
    ToolContext,
    ToolDefinition,
    ToolParameterSpec,
    ToolRegistry,
    create_tool,
    setup_logging,
    LLMError,
    LLMToolError,
    LLMProviderError,
    ProviderConfigurationError,
    UnknownProviderError,
    ToolExecutionError,
    ToolNotFoundError,
    ToolRegistrationError,
    ToolValidationError,
)
from .llm_impl import AnthropicProvider, OpenAIProvider, VertexProvider
from .router import LLMRouter, get_default_config
from .builtin_tools import register_builtin_tools
from .interfaces import AuthResult, AuthVerifier, EmbeddingService, SearchHit, VectorSearchService

__all__ = [
    "ChatMessage",
    "ChatOptions",
    "ChatProvider",
    "ChatResult",
    "ChatStream",
    "LLMConfig",
    "ProviderName",
    "ProviderSettings",
    "Tool",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolContext",
    "ToolDefinition",
    "ToolParameterSpec",
    "ToolRegistry",
    "create_tool",
    "setup_logging",
    "LLMError",
    "LLMToolError",
    "LLMProviderError",
    "ProviderConfigurationError",
    "UnknownProviderError",
    "ToolExecutionError",
    "ToolNotFoundError",
    "ToolRegistrationError",
    "ToolValidationError",
    "AnthropicProvider",
    "OpenAIProvider",
    "VertexProvider",
    "LLMRouter",
    "get_default_config",
    "register_builtin_tools",
    "AuthResult",
    "AuthVerifier",
    "EmbeddingService",
    "SearchHit",
    "VectorSearchService",
]
