"""Adapt generic function declarations into OpenAI tool definitions."""

from typing import Any, Dict, List, Sequence

from rag_llm_lib.llm_core import FunctionDeclaration


def to_openai_tool(declaration: FunctionDeclaration) -> Dict[str, Any]:
    """
    Builds a ``{"type": "function", "function": {...}}`` entry for the ``tools`` parameter.

    Args:
        declaration: The provider-agnostic declaration.

    Returns:
        A dictionary in OpenAI's tool format.
    """
    return {
        "type": "function",
        "function": {
            "name": declaration.name,
            "description": declaration.description,
            "parameters": declaration.parameters,
        },
    }


def to_openai_tools(declarations: Sequence[FunctionDeclaration]) -> List[Dict[str, Any]]:
    return [to_openai_tool(d) for d in declarations]
