"""Export the tool and provider exception hierarchies used across the library."""

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

__all__ = [
    "LLMToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "ToolValidationError",
    "LLMError",
    "ProviderConfigurationError",
    "UnknownProviderError",
    "LLMProviderError",
]
