"""Tool-related data models."""

from .models import (
    ToolDefinition,
    ToolParameterSpec,
    ToolParameterItems,
    ToolContext,
    ParameterType,
    TOOL_NAME_PATTERN,
)
from .tool_call import ToolCallRequest, ToolCallResult

__all__ = [
    "ToolDefinition",
    "ToolParameterSpec",
    "ToolParameterItems",
    "ToolContext",
    "ParameterType",
    "TOOL_NAME_PATTERN",
    "ToolCallRequest",
    "ToolCallResult",
]
