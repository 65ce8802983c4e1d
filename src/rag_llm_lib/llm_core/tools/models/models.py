from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

TOOL_NAME_PATTERN = r"^[a-z][a-z0-9_]*$"

ParameterType = Literal["string", "number", "boolean", "array", "object"]


class ToolParameterItems(BaseModel):
    """Element type of an ``array`` parameter."""

    model_config = ConfigDict(frozen=True)

    type: ParameterType


class ToolParameterSpec(BaseModel):
    """
    Declares one parameter of a tool.

    Attributes:
        type: JSON type of the parameter.
        description: Text shown to the model.
        required: Whether a value must be supplied. A required parameter never falls back to ``default``.
        enum: Allowed string values, if restricted.
        items: Element type for ``array`` parameters.
        default: Value injected when the argument is absent. Only counts when set explicitly.
    """

    model_config = ConfigDict(frozen=True)

    type: ParameterType
    description: str
    required: bool = False
    enum: Optional[List[str]] = None
    items: Optional[ToolParameterItems] = None
    default: Any = None

    @property
    def has_default(self) -> bool:
        """True when a default was declared, including an explicit ``None``."""
        return "default" in self.model_fields_set


class ToolDefinition(BaseModel):
    """
    Represents the definition of a tool that can be exposed to an LLM.

    Attributes:
        name: The unique name of the tool, lowercase snake case.
        description: A brief description of what the tool does.
        parameters: Parameter name to spec, in declaration order.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(pattern=TOOL_NAME_PATTERN)
    description: str
    parameters: Dict[str, ToolParameterSpec] = Field(default_factory=dict)


class ToolContext(BaseModel):
    """Per-invocation data handed to every tool handler.

    Attributes:
        agent_id: The bot owning the conversation. Scopes tool lookup.
        user_id: The caller, as resolved by the HTTP layer.
        conversation_id: The conversation, when there is one.
    """

    model_config = ConfigDict(frozen=True)

    agent_id: str
    user_id: str
    conversation_id: Optional[str] = None
