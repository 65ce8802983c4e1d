from .models import (
    ToolDefinition,
    ToolParameterSpec,
    ToolParameterItems,
    ToolContext,
    ToolCallRequest,
    ToolCallResult,
)
from .schema import ParameterValidator, FunctionDeclaration, to_function_declaration
from .tool import Tool, ToolHandler, create_tool
from .registry import ToolRegistry

__all__ = [
    "ToolDefinition",
    "ToolParameterSpec",
    "ToolParameterItems",
    "ToolContext",
    "ToolCallRequest",
    "ToolCallResult",
    "ParameterValidator",
    "FunctionDeclaration",
    "to_function_declaration",
    "Tool",
    "ToolHandler",
    "create_tool",
    "ToolRegistry",
]
