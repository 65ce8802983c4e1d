"""Data models for tool execution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ToolCallRequest:
    """Represents a normalized tool call request from an LLM response.

    ``arguments`` is usually a mapping. Providers that deliver arguments as a JSON
    string (OpenAI) may pass the raw string; the registry decodes it.
    """

    name: str
    arguments: Any = None
    call_id: Optional[str] = None


@dataclass(frozen=True)
class ToolCallResult:
    """Represents the outcome of executing a tool call.

    Exactly one of ``result`` and ``error`` carries the outcome; ``result`` is
    ``None`` whenever ``error`` is set.
    """

    name: str
    result: Any = None
    error: Optional[str] = None
    call_id: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def payload(self) -> Any:
        """What is reported back to the model: the error message if any, else the result."""
        return self.error if self.error is not None else self.result
