"""Translate tool definitions into a provider-agnostic function declaration record."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from ..tool import Tool


class FunctionDeclaration(BaseModel):
    """
    JSON-schema style declaration of a tool, as sent to a model.

    Attributes:
        name: The tool name.
        description: What the tool does.
        parameters: ``{"type": "object", "properties": {...}, "required": [...]}``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: Dict[str, Any] = Field(default_factory=dict)


def to_function_declaration(tool: Tool) -> FunctionDeclaration:
    """Builds the declaration of ``tool``.

    Pure data transformation: calling it twice on the same tool yields equal
    declarations, and nothing in the returned record is shared with the tool.

    Args:
        tool: The tool to declare.

    Returns:
        The provider-agnostic declaration.
    """
    properties: Dict[str, Dict[str, Any]] = {}
    required: List[str] = []

    for param_name, spec in tool.definition.parameters.items():
        prop: Dict[str, Any] = {"type": spec.type, "description": spec.description}
        if spec.enum is not None:
            prop["enum"] = list(spec.enum)
        if spec.items is not None:
            prop["items"] = {"type": spec.items.type}
        properties[param_name] = prop

        if spec.required:
            required.append(param_name)

    return FunctionDeclaration(
        name=tool.definition.name,
        description=tool.definition.description,
        parameters={"type": "object", "properties": properties, "required": required},
    )
