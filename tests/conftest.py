from datetime import datetime, timezone
from typing import Any, Dict

import pytest

from rag_llm_lib import ToolContext, ToolRegistry, create_tool
from rag_llm_lib.builtin_tools import create_current_time_tool

FIXED_NOW = datetime(2024, 1, 2, 15, 4, 5, tzinfo=timezone.utc)


@pytest.fixture
def registry() -> ToolRegistry:
    """A fresh registry per test; there is no shared global state."""
    return ToolRegistry()


@pytest.fixture
def tool_context() -> ToolContext:
    return ToolContext(agent_id="agent-1", user_id="user-1", conversation_id="conv-1")


@pytest.fixture
def time_registry(registry: ToolRegistry) -> ToolRegistry:
    """Registry holding only ``get_current_time`` with a frozen clock."""
    registry.register(create_current_time_tool(now=lambda: FIXED_NOW))
    return registry


@pytest.fixture
def echo_tool():
    def handler(arguments: Dict[str, Any], context: ToolContext) -> Dict[str, Any]:
        return {"echo": arguments, "agent": context.agent_id}

    return create_tool(
        name="echo",
        description="Echo the arguments back",
        parameters={"text": {"type": "string", "description": "Text to echo", "required": True}},
        handler=handler,
    )
