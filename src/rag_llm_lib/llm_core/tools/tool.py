"""Define tools: a validated definition bound to a handler.

Usage::

    weather = create_tool(
        name="get_weather",
        description="Get current weather for a location",
        parameters={
            "location": {"type": "string", "description": "City name", "required": True},
            "units": {
                "type": "string",
                "description": "Temperature units",
                "enum": ["celsius", "fahrenheit"],
                "default": "celsius",
            },
        },
        handler=fetch_weather,
    )
"""

import inspect
import re
from typing import Any, Awaitable, Callable, Dict, Mapping, Union

from pydantic import BaseModel, ConfigDict

from ..exceptions import ToolExecutionError, ToolValidationError
from ..logger import get_logger
from .models import ToolContext, ToolDefinition, ToolParameterSpec, TOOL_NAME_PATTERN
from .schema import ParameterValidator

logger = get_logger(__name__)

ToolHandler = Callable[[Dict[str, Any], ToolContext], Union[Any, Awaitable[Any]]]

_NAME_RE = re.compile(TOOL_NAME_PATTERN)


class Tool(BaseModel):
    """
    A tool that can be exposed to a model and executed on its behalf.

    The handler only ever sees arguments that went through the validation gate.
    Use :func:`create_tool` to build one.

    Attributes:
        definition: Name, description and parameter specs.
        handler: Called as ``handler(arguments, context)``. May be sync or async.
    """

    model_config = ConfigDict(frozen=True)

    definition: ToolDefinition
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.definition.name

    async def invoke(self, arguments: Mapping[str, Any], context: ToolContext) -> Any:
        """Validate ``arguments`` and run the handler.

        Args:
            arguments: Arguments as supplied by the model.
            context: The per-request tool context.

        Returns:
            Whatever the handler returns.

        Raises:
            ToolValidationError: If the arguments fail validation. The handler is not called.
            ToolExecutionError: If the handler raises. The original exception is chained.
        """
        validated = ParameterValidator.validate(self.definition, arguments)
        try:
            result = self.handler(validated, context)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            raise ToolExecutionError(str(e) or type(e).__name__) from e
        return result


def create_tool(
    name: str,
    description: str,
    parameters: Mapping[str, Union[ToolParameterSpec, Mapping[str, Any]]],
    handler: ToolHandler,
) -> Tool:
    """Create a tool, failing fast on a malformed definition.

    Args:
        name: Tool name. Must start with a lowercase letter and contain only lowercase
            letters, digits and underscores.
        description: What the tool does, for the model.
        parameters: Parameter name to spec. Plain dicts are validated into ``ToolParameterSpec``.
        handler: The implementation, called with validated arguments and the tool context.

    Returns:
        The immutable tool.

    Raises:
        ToolValidationError: If the name or a parameter spec is invalid.
    """
    if not _NAME_RE.fullmatch(name):
        msg = (
            f'Invalid tool name "{name}". Must start with lowercase letter and contain only '
            f"lowercase letters, numbers, and underscores."
        )
        logger.error(msg)
        raise ToolValidationError(msg)

    if not callable(handler):
        raise ToolValidationError(f"Handler of tool '{name}' is not callable.")

    specs: Dict[str, ToolParameterSpec] = {}
    for param_name, spec in parameters.items():
        try:
            specs[param_name] = (
                spec if isinstance(spec, ToolParameterSpec) else ToolParameterSpec.model_validate(spec)
            )
        except ValueError as e:
            msg = f"Parameter '{param_name}' in tool '{name}' is invalid: {e}"
            logger.error(msg)
            raise ToolValidationError(msg) from e

    definition = ToolDefinition(name=name, description=description, parameters=specs)
    return Tool(definition=definition, handler=handler)
