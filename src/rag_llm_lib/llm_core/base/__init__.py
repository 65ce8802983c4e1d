"""Re-export the provider base class and the canonical request/response models."""

from .models import ChatOptions, ChatResult, LLMConfig, ProviderName, DEFAULT_PROVIDER
from .adapter import ToolAdapter
from .round_trip import ToolRoundTrip
from .streaming import ChatStream
from .base import ChatProvider

__all__ = [
    "ChatOptions",
    "ChatResult",
    "LLMConfig",
    "ProviderName",
    "DEFAULT_PROVIDER",
    "ToolAdapter",
    "ToolRoundTrip",
    "ChatStream",
    "ChatProvider",
]
