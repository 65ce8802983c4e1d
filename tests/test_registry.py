import asyncio
import logging
from typing import Any, Dict

import pytest

from rag_llm_lib import (
    ToolCallRequest,
    ToolContext,
    ToolNotFoundError,
    ToolRegistrationError,
    ToolRegistry,
    create_tool,
)


def _make_tool(name: str, marker: str, parameters: Dict[str, Any] = None):
    def handler(arguments: Dict[str, Any], context: ToolContext) -> str:
        return marker

    return create_tool(name=name, description=f"{name} ({marker})", parameters=parameters or {}, handler=handler)


class TestScoping:
    """Global and agent-scoped lookups."""

    def test_agent_tool_shadows_global_tool(self, registry: ToolRegistry) -> None:
        global_tool = _make_tool("t", "global")
        agent_tool = _make_tool("t", "agent")
        registry.register(global_tool)
        registry.register_for_agent("A", agent_tool)

        assert registry.get("t", "A") is agent_tool
        assert registry.get("t", "B") is global_tool
        assert registry.get("t") is global_tool

    def test_missing_tool_returns_none(self, registry: ToolRegistry) -> None:
        assert registry.get("missing") is None
        assert registry.get("missing", "A") is None

    def test_get_tools_for_agent_order_and_override(self, registry: ToolRegistry) -> None:
        registry.register(_make_tool("first", "g"))
        registry.register(_make_tool("second", "g"))
        registry.register_for_agent("A", _make_tool("only_agent", "a"))
        override = _make_tool("first", "a")
        registry.register_for_agent("A", override)

        tools = registry.get_tools_for_agent("A")

        assert [t.name for t in tools] == ["first", "second", "only_agent"]
        assert tools[0] is override
        assert [t.name for t in registry.get_tools_for_agent("B")] == ["first", "second"]

    def test_get_tools_for_agent_returns_snapshot(self, registry: ToolRegistry) -> None:
        registry.register(_make_tool("first", "g"))
        snapshot = registry.get_tools_for_agent("A")

        registry.register(_make_tool("later", "g"))
        snapshot.clear()

        assert [t.name for t in registry.get_tools_for_agent("A")] == ["first", "later"]

    def test_unregister(self, registry: ToolRegistry) -> None:
        registry.register(_make_tool("t", "g"))
        registry.register_for_agent("A", _make_tool("t", "a"))

        assert registry.unregister_for_agent("A", "t") is True
        assert registry.unregister_for_agent("A", "t") is False
        assert registry.get("t", "A").description == "t (g)"
        assert registry.unregister("t") is True
        assert registry.unregister("t") is False
        assert registry.get("t") is None

    def test_register_rejects_non_tools(self, registry: ToolRegistry) -> None:
        def handler(arguments: Dict[str, Any], context: ToolContext) -> None:
            return None

        with pytest.raises(ToolRegistrationError, match="Expected a Tool, got function"):
            registry.register(handler)
        with pytest.raises(ToolRegistrationError):
            registry.register_for_agent("A", handler)
        with pytest.raises(ToolRegistrationError, match="empty agent id"):
            registry.register_for_agent("", _make_tool("t", "a"))

        assert registry.list_tools() == []
        assert registry.agent_tools == {}

    def test_require_raises_for_unknown_tool(self, registry: ToolRegistry) -> None:
        registry.register_for_agent("A", _make_tool("t", "a"))

        assert registry.require("t", "A").description == "t (a)"
        with pytest.raises(ToolNotFoundError, match="Tool not found: t"):
            registry.require("t", "B")

    def test_overwrite_logs_warning(self, registry: ToolRegistry, caplog: pytest.LogCaptureFixture) -> None:
        registry.register(_make_tool("t", "one"))

        with caplog.at_level(logging.WARNING, logger="rag_llm_lib"):
            registry.register(_make_tool("t", "two"))
            registry.register_for_agent("A", _make_tool("u", "one"))
            registry.register_for_agent("A", _make_tool("u", "two"))

        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert any("Overwriting existing global tool: 't'" in m for m in warnings)
        assert any("'u' for agent 'A'" in m for m in warnings)
        assert registry.get("t").description == "t (two)"

    def test_list_has_and_clear(self, registry: ToolRegistry) -> None:
        assert not registry.has_tools("A")

        registry.register(_make_tool("g", "g"))
        registry.register_for_agent("A", _make_tool("a", "a"))

        assert registry.list_tools() == ["g"]
        assert registry.list_tools("A") == ["g", "a"]
        assert registry.has_tools("B")

        registry.clear()

        assert registry.list_tools("A") == []
        assert not registry.has_tools("A")

    def test_decorator_registers_and_returns_handler(self, registry: ToolRegistry) -> None:
        @registry.tool(
            name="add",
            description="Add two numbers",
            parameters={
                "a": {"type": "number", "description": "a", "required": True},
                "b": {"type": "number", "description": "b", "required": True},
            },
        )
        def add(arguments: Dict[str, Any], context: ToolContext) -> float:
            return arguments["a"] + arguments["b"]

        @registry.tool(name="secret", description="Agent only", agent_id="A")
        def secret(arguments: Dict[str, Any], context: ToolContext) -> str:
            return "s"

        assert add({"a": 1, "b": 2}, None) == 3
        assert registry.get("add") is not None
        assert registry.get("secret") is None
        assert registry.get("secret", "A") is not None

    def test_function_declarations_for_agent(self, registry: ToolRegistry) -> None:
        registry.register(_make_tool("g", "g"))
        registry.register_for_agent("A", _make_tool("a", "a"))

        names = [d.name for d in registry.get_function_declarations("A")]

        assert names == ["g", "a"]


class TestExecution:
    """Tool execution never raises; failures come back as data."""

    @pytest.mark.asyncio
    async def test_execute_success_echoes_call_id(self, registry: ToolRegistry, echo_tool, tool_context) -> None:
        registry.register(echo_tool)

        result = await registry.execute(
            ToolCallRequest(name="echo", arguments={"text": "hi"}, call_id="call_1"), tool_context
        )

        assert result.ok
        assert result.error is None
        assert result.call_id == "call_1"
        assert result.result == {"echo": {"text": "hi"}, "agent": "agent-1"}

    @pytest.mark.asyncio
    async def test_execute_unknown_tool(self, registry: ToolRegistry, tool_context) -> None:
        result = await registry.execute(ToolCallRequest(name="nope", call_id="c"), tool_context)

        assert result.error == "Tool not found: nope"
        assert result.result is None
        assert result.call_id == "c"

    @pytest.mark.asyncio
    async def test_execute_missing_required_parameter(self, registry: ToolRegistry, echo_tool, tool_context) -> None:
        registry.register(echo_tool)

        result = await registry.execute(ToolCallRequest(name="echo", arguments={}), tool_context)

        assert result.error == "Missing required parameter: text"
        assert result.result is None

    @pytest.mark.asyncio
    async def test_execute_decodes_json_string_arguments(self, registry: ToolRegistry, echo_tool, tool_context) -> None:
        registry.register(echo_tool)

        result = await registry.execute(ToolCallRequest(name="echo", arguments='{"text": "json"}'), tool_context)

        assert result.result["echo"] == {"text": "json"}

    @pytest.mark.asyncio
    async def test_execute_malformed_json_arguments(self, registry: ToolRegistry, echo_tool, tool_context) -> None:
        registry.register(echo_tool)

        result = await registry.execute(ToolCallRequest(name="echo", arguments="{not json"), tool_context)

        assert result.result is None
        assert "Failed to parse arguments for tool 'echo'" in result.error

    @pytest.mark.asyncio
    async def test_execute_handler_exception(self, registry: ToolRegistry, tool_context) -> None:
        def handler(arguments: Dict[str, Any], context: ToolContext) -> None:
            raise RuntimeError("boom")

        registry.register(create_tool(name="explode", description="d", parameters={}, handler=handler))

        result = await registry.execute(ToolCallRequest(name="explode"), tool_context)

        assert result.error == "boom"
        assert result.result is None

    @pytest.mark.asyncio
    async def test_execute_uses_agent_scope(self, registry: ToolRegistry) -> None:
        registry.register(_make_tool("t", "global"))
        registry.register_for_agent("A", _make_tool("t", "agent"))

        in_a = await registry.execute(ToolCallRequest(name="t"), ToolContext(agent_id="A", user_id="u"))
        in_b = await registry.execute(ToolCallRequest(name="t"), ToolContext(agent_id="B", user_id="u"))

        assert in_a.result == "agent"
        assert in_b.result == "global"

    @pytest.mark.asyncio
    async def test_execute_many_preserves_input_order(self, registry: ToolRegistry, tool_context) -> None:
        """The first call finishes last; results still follow the request order."""
        finished = []

        async def slow(arguments: Dict[str, Any], context: ToolContext) -> str:
            await asyncio.sleep(arguments["delay"])
            finished.append(arguments["label"])
            return arguments["label"]

        registry.register(
            create_tool(
                name="slow",
                description="d",
                parameters={
                    "delay": {"type": "number", "description": "seconds", "required": True},
                    "label": {"type": "string", "description": "label", "required": True},
                },
                handler=slow,
            )
        )

        results = await registry.execute_many(
            [
                ToolCallRequest(name="slow", arguments={"delay": 0.05, "label": "first"}, call_id="1"),
                ToolCallRequest(name="slow", arguments={"delay": 0.0, "label": "second"}, call_id="2"),
            ],
            tool_context,
        )

        assert finished == ["second", "first"]
        assert [r.result for r in results] == ["first", "second"]
        assert [r.call_id for r in results] == ["1", "2"]

    @pytest.mark.asyncio
    async def test_execute_many_partial_failure(self, registry: ToolRegistry, echo_tool, tool_context) -> None:
        registry.register(echo_tool)

        results = await registry.execute_many(
            [
                ToolCallRequest(name="echo", arguments={"text": "ok"}),
                ToolCallRequest(name="unregistered_tool", arguments={}),
            ],
            tool_context,
        )

        assert len(results) == 2
        assert results[0].result is not None
        assert results[0].error is None
        assert results[1].error == "Tool not found: unregistered_tool"
        assert results[1].result is None

    @pytest.mark.asyncio
    async def test_execute_many_empty(self, registry: ToolRegistry, tool_context) -> None:
        assert await registry.execute_many([], tool_context) == []
