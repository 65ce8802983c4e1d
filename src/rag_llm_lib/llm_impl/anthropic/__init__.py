"""Anthropic Messages API implementation over plain HTTP."""

from .core import AnthropicProvider, DEFAULT_ANTHROPIC_MODEL, DEFAULT_MAX_TOKENS
from .adapter import AnthropicToolAdapter
from .declarations import to_anthropic_tool, to_anthropic_tools
from .sse import iter_sse_data

__all__ = [
    "AnthropicProvider",
    "DEFAULT_ANTHROPIC_MODEL",
    "DEFAULT_MAX_TOKENS",
    "AnthropicToolAdapter",
    "to_anthropic_tool",
    "to_anthropic_tools",
    "iter_sse_data",
]
