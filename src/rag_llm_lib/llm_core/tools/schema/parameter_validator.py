import json
from typing import Any, Dict, Mapping

from ...exceptions import ToolValidationError
from ...logger import get_logger
from ..models.models import ToolDefinition, ToolParameterSpec

logger = get_logger(__name__)


class ParameterValidator:
    """Capsules the checks a tool's arguments go through before its handler is called."""

    @classmethod
    def validate(cls, definition: ToolDefinition, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        """Checks ``arguments`` against the declared parameters and applies defaults.

        Parameters are checked in declaration order. Arguments that are not declared
        are passed through untouched.

        Args:
            definition: The definition of the tool being called.
            arguments: The arguments supplied by the model.

        Returns:
            A new dict with defaults injected. ``arguments`` itself is not modified.

        Raises:
            ToolValidationError: If a required parameter is missing or an enum is violated.
        """
        validated: Dict[str, Any] = dict(arguments)

        for param_name, spec in definition.parameters.items():
            value = validated.get(param_name)

            if value is None:
                if spec.required:
                    raise ToolValidationError(f"Missing required parameter: {param_name}")
                if spec.has_default:
                    validated[param_name] = spec.default
                    value = spec.default

            cls._check_enum(param_name, spec, value)

        return validated

    @staticmethod
    def _check_enum(param_name: str, spec: ToolParameterSpec, value: Any) -> None:
        """Rejects a present value that is not one of the declared enum values.

        Args:
            param_name: The name of the parameter being checked.
            spec: The parameter's spec.
            value: The (possibly defaulted) argument value.

        Raises:
            ToolValidationError: If the value is outside the allowed set.
        """
        if spec.enum is None or value is None:
            return

        if value not in spec.enum:
            allowed = ", ".join(spec.enum)
            raise ToolValidationError(f'Invalid value for {param_name}: "{value}". Must be one of: {allowed}')

    @staticmethod
    def normalize_arguments(tool_name: str, raw_args: Any) -> Dict[str, Any]:
        """Normalize tool arguments into a dictionary.

        Handles JSON strings, mappings, or None values.

        Args:
            tool_name: Name of the tool (for error reporting).
            raw_args: The raw arguments (mapping, string, or None).

        Returns:
            A dictionary of normalized arguments.

        Raises:
            ToolValidationError: If arguments cannot be parsed or are not an object.
        """
        if raw_args is None or raw_args == "":
            return {}

        if isinstance(raw_args, Mapping):
            return dict(raw_args)

        if isinstance(raw_args, str):
            try:
                parsed = json.loads(raw_args)
            except json.JSONDecodeError as exc:
                msg = f"Failed to parse arguments for tool '{tool_name}': {exc}"
                logger.warning(msg)
                raise ToolValidationError(msg) from exc

            if parsed is None:
                return {}

            if not isinstance(parsed, dict):
                raise ToolValidationError(
                    f"Failed to parse arguments for tool '{tool_name}': arguments must decode to a JSON object."
                )

            return parsed

        raise ToolValidationError(
            f"Failed to parse arguments for tool '{tool_name}': unsupported type {type(raw_args).__name__}."
        )
