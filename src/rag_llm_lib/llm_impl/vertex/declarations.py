"""Adapt generic function declarations into Gemini function declaration structures."""

from typing import List, Optional, Sequence

from google.genai import types

from rag_llm_lib.llm_core import FunctionDeclaration
from .schema_sanitizer import sanitize


def to_vertex_declaration(declaration: FunctionDeclaration) -> types.FunctionDeclaration:
    """
    Builds a Gemini ``FunctionDeclaration``.

    Args:
        declaration: The provider-agnostic declaration.

    Returns:
        The Gemini declaration. Tools without parameters are declared without a schema.
    """
    if declaration.parameters.get("properties"):
        return types.FunctionDeclaration(
            name=declaration.name,
            description=declaration.description,
            parameters=sanitize(declaration.parameters),  # type: ignore[arg-type]
        )
    return types.FunctionDeclaration(name=declaration.name, description=declaration.description)


def to_vertex_tools(declarations: Sequence[FunctionDeclaration]) -> Optional[List[types.Tool]]:
    """
    Wraps all declarations in a single ``types.Tool``.

    Returns:
        A one-element list, or None when there is nothing to declare.
    """
    if not declarations:
        return None
    return [types.Tool(function_declarations=[to_vertex_declaration(d) for d in declarations])]
