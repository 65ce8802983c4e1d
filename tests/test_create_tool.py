import pytest
from typing import Any, Dict, List

from rag_llm_lib import ToolContext, ToolExecutionError, ToolParameterSpec, ToolValidationError, create_tool
from rag_llm_lib.llm_core import to_function_declaration


def _noop(arguments: Dict[str, Any], context: ToolContext) -> Any:
    return arguments


class RecordingHandler:
    """Handler that records every call it receives."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, arguments: Dict[str, Any], context: ToolContext) -> Dict[str, Any]:
        self.calls.append(arguments)
        return arguments


@pytest.mark.parametrize("name", ["a", "get_weather", "tool2", "x_1_y"])
def test_valid_tool_names(name: str) -> None:
    tool = create_tool(name=name, description="d", parameters={}, handler=_noop)
    assert tool.name == name


@pytest.mark.parametrize("name", ["GetWeather", "getWeather", "2tool", "get-weather", "_hidden", "", "get weather"])
def test_invalid_tool_names_are_rejected(name: str) -> None:
    with pytest.raises(ToolValidationError):
        create_tool(name=name, description="d", parameters={}, handler=_noop)


def test_invalid_parameter_spec_is_rejected() -> None:
    with pytest.raises(ToolValidationError, match="Parameter 'when'"):
        create_tool(
            name="bad_spec",
            description="d",
            parameters={"when": {"type": "date", "description": "not a json type"}},
            handler=_noop,
        )


def test_non_callable_handler_is_rejected() -> None:
    with pytest.raises(ToolValidationError):
        create_tool(name="broken", description="d", parameters={}, handler="not callable")  # type: ignore[arg-type]


def test_explicit_none_default_counts_as_declared() -> None:
    assert ToolParameterSpec(type="string", description="d", default=None).has_default
    assert not ToolParameterSpec(type="string", description="d").has_default


@pytest.mark.asyncio
async def test_defaults_are_injected_regardless_of_parameter_order(tool_context: ToolContext) -> None:
    """Defaults apply whether the defaulted parameter is declared first or last."""
    orders = [
        {
            "units": {"type": "string", "description": "u", "default": "celsius"},
            "location": {"type": "string", "description": "l", "required": True},
        },
        {
            "location": {"type": "string", "description": "l", "required": True},
            "units": {"type": "string", "description": "u", "default": "celsius"},
        },
    ]
    for parameters in orders:
        handler = RecordingHandler()
        tool = create_tool(name="weather", description="d", parameters=parameters, handler=handler)

        await tool.invoke({"location": "Berlin"}, tool_context)

        assert handler.calls == [{"location": "Berlin", "units": "celsius"}]


@pytest.mark.asyncio
async def test_none_argument_receives_default(tool_context: ToolContext) -> None:
    handler = RecordingHandler()
    tool = create_tool(
        name="search",
        description="d",
        parameters={"limit": {"type": "number", "description": "l", "default": 5}},
        handler=handler,
    )

    await tool.invoke({"limit": None}, tool_context)

    assert handler.calls == [{"limit": 5}]


@pytest.mark.asyncio
async def test_required_parameter_ignores_default(tool_context: ToolContext) -> None:
    handler = RecordingHandler()
    tool = create_tool(
        name="lookup",
        description="d",
        parameters={"key": {"type": "string", "description": "k", "required": True, "default": "x"}},
        handler=handler,
    )

    with pytest.raises(ToolValidationError, match="Missing required parameter: key"):
        await tool.invoke({}, tool_context)
    assert handler.calls == []


@pytest.mark.asyncio
async def test_enum_violation_does_not_call_handler(tool_context: ToolContext) -> None:
    handler = RecordingHandler()
    tool = create_tool(
        name="weather",
        description="d",
        parameters={"units": {"type": "string", "description": "u", "enum": ["celsius", "fahrenheit"]}},
        handler=handler,
    )

    with pytest.raises(ToolValidationError) as exc_info:
        await tool.invoke({"units": "kelvin"}, tool_context)

    assert "kelvin" in str(exc_info.value)
    assert "celsius, fahrenheit" in str(exc_info.value)
    assert len(handler.calls) == 0


@pytest.mark.asyncio
async def test_undeclared_arguments_pass_through_and_input_is_not_mutated(tool_context: ToolContext) -> None:
    handler = RecordingHandler()
    tool = create_tool(
        name="weather",
        description="d",
        parameters={"units": {"type": "string", "description": "u", "default": "celsius"}},
        handler=handler,
    )
    supplied = {"extra": 1}

    await tool.invoke(supplied, tool_context)

    assert handler.calls == [{"extra": 1, "units": "celsius"}]
    assert supplied == {"extra": 1}


@pytest.mark.asyncio
async def test_async_handler_is_awaited(tool_context: ToolContext) -> None:
    async def handler(arguments: Dict[str, Any], context: ToolContext) -> str:
        return f"hello {context.user_id}"

    tool = create_tool(name="greet", description="d", parameters={}, handler=handler)

    assert await tool.invoke({}, tool_context) == "hello user-1"


@pytest.mark.asyncio
async def test_handler_failure_is_wrapped(tool_context: ToolContext) -> None:
    async def handler(arguments: Dict[str, Any], context: ToolContext) -> None:
        raise KeyError

    tool = create_tool(name="broken", description="d", parameters={}, handler=handler)

    with pytest.raises(ToolExecutionError, match="KeyError") as exc_info:
        await tool.invoke({}, tool_context)

    assert isinstance(exc_info.value.__cause__, KeyError)


def test_function_declaration_shape() -> None:
    tool = create_tool(
        name="weather",
        description="Get the weather",
        parameters={
            "location": {"type": "string", "description": "City", "required": True},
            "units": {"type": "string", "description": "Units", "enum": ["celsius", "fahrenheit"]},
            "days": {"type": "array", "description": "Days", "items": {"type": "number"}},
        },
        handler=_noop,
    )

    declaration = to_function_declaration(tool)

    assert declaration.name == "weather"
    assert declaration.description == "Get the weather"
    assert declaration.parameters == {
        "type": "object",
        "properties": {
            "location": {"type": "string", "description": "City"},
            "units": {"type": "string", "description": "Units", "enum": ["celsius", "fahrenheit"]},
            "days": {"type": "array", "description": "Days", "items": {"type": "number"}},
        },
        "required": ["location"],
    }


def test_function_declaration_is_idempotent() -> None:
    tool = create_tool(
        name="weather",
        description="d",
        parameters={"units": {"type": "string", "description": "u", "enum": ["c", "f"]}},
        handler=_noop,
    )

    first = to_function_declaration(tool)
    second = to_function_declaration(tool)

    assert first == second
    assert first.model_dump() == second.model_dump()
    first.parameters["properties"]["units"]["enum"].append("k")
    assert tool.definition.parameters["units"].enum == ["c", "f"]
