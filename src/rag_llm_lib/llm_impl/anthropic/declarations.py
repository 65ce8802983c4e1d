from typing import Any, Dict, List

from rag_llm_lib.llm_core import FunctionDeclaration


def to_anthropic_tool(declaration: FunctionDeclaration) -> Dict[str, Any]:
    """Convert a neutral declaration to an Anthropic tool definition."""
    return {
        "name": declaration.name,
        "description": declaration.description,
        "input_schema": declaration.parameters,
    }


def to_anthropic_tools(declarations: List[FunctionDeclaration]) -> List[Dict[str, Any]]:
    return [to_anthropic_tool(d) for d in declarations]
