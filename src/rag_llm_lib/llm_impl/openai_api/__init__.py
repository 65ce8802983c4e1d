"""Expose the OpenAI chat provider and its tool translation helpers."""

from .core import OpenAIProvider, DEFAULT_OPENAI_MODEL
from .adapter import OpenAIToolAdapter
from .declarations import to_openai_tool, to_openai_tools

__all__ = ["OpenAIProvider", "DEFAULT_OPENAI_MODEL", "OpenAIToolAdapter", "to_openai_tool", "to_openai_tools"]
