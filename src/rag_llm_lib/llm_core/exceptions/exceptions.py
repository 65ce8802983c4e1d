"""
Custom exception classes for the tool system and the provider router.

Tool errors describe problems with defining, registering, validating or running
tools. Inside the registry they are converted into ``ToolCallResult.error``
strings and never cross its boundary. Provider errors describe configuration
and transport problems and are raised to the caller of ``chat``/``chat_stream``.
"""

from typing import Optional


class LLMToolError(Exception):
    """Base exception for all tool-related errors."""

    pass


class ToolRegistrationError(LLMToolError):
    """Raised when there is an error registering a tool."""

    pass


class ToolNotFoundError(LLMToolError):
    """Raised when a requested tool is not found in the registry."""

    pass


class ToolExecutionError(LLMToolError):
    """Raised when a tool fails during execution."""

    pass


class ToolValidationError(LLMToolError):
    """Raised when tool parameters or definition are invalid."""

    pass


class LLMError(Exception):
    """Base exception for provider and routing errors."""

    pass


class ProviderConfigurationError(LLMError):
    """Raised before any network call when a provider is misconfigured (e.g. missing API key)."""

    pass


class UnknownProviderError(ProviderConfigurationError):
    """Raised when ``LLMConfig.provider`` names no known provider."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Unknown LLM provider: {provider}")


class LLMProviderError(LLMError):
    """Raised when a provider call fails or returns an unusable response.

    Attributes:
        provider: Name of the provider that failed.
        payload: Raw error payload returned by the provider, if any.
        status_code: HTTP status code, if the failure came from a response.
    """

    def __init__(
        self,
        provider: str,
        message: str,
        payload: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.provider = provider
        self.payload = payload
        self.status_code = status_code
        text = f"{message}: {payload}" if payload else message
        super().__init__(text)
