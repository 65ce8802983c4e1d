"""Provider implementations for the chat abstraction in ``llm_core``."""

from .vertex import VertexProvider, DEFAULT_VERTEX_MODEL
from .openai_api import OpenAIProvider, DEFAULT_OPENAI_MODEL
from .anthropic import AnthropicProvider, DEFAULT_ANTHROPIC_MODEL

__all__ = [
    "VertexProvider",
    "DEFAULT_VERTEX_MODEL",
    "OpenAIProvider",
    "DEFAULT_OPENAI_MODEL",
    "AnthropicProvider",
    "DEFAULT_ANTHROPIC_MODEL",
]
