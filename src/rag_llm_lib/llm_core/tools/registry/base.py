"""Tool registry with global and agent-scoped tools."""

import asyncio
from typing import Any, Callable, Dict, List, Optional, Sequence

from ...exceptions import LLMToolError, ToolNotFoundError, ToolRegistrationError
from ..models import ToolCallRequest, ToolCallResult, ToolContext
from ..schema import FunctionDeclaration, ParameterValidator, to_function_declaration
from ..tool import Tool, create_tool
from ...logger import get_logger

logger = get_logger(__name__)


class ToolRegistry:
    """
    A registry of the tools available to the models.

    Tools are registered either globally (available to every agent) or for a
    single agent. An agent-scoped tool shadows a global tool of the same name.

    The registry is a plain object: build one at startup and hand it to the
    router and to whatever registers tools. Tests build fresh ones.
    """

    def __init__(self) -> None:
        """Initialize an empty ToolRegistry."""
        self.tools: Dict[str, Tool] = {}
        self.agent_tools: Dict[str, Dict[str, Tool]] = {}

    def register(self, tool: Tool) -> None:
        """Register a tool globally (available to all agents).

        Replacing a tool with the same name is allowed and logged as a warning.

        Args:
            tool: The tool to register.

        Raises:
            ToolRegistrationError: If ``tool`` is not a :class:`Tool`.
        """
        self._check_tool(tool)
        if tool.name in self.tools:
            logger.warning(f"Overwriting existing global tool: '{tool.name}'")
        self.tools[tool.name] = tool
        logger.info(f"Successfully registered tool: '{tool.name}'")

    def register_for_agent(self, agent_id: str, tool: Tool) -> None:
        """Register a tool for a specific agent.

        Args:
            agent_id: The agent the tool belongs to.
            tool: The tool to register.

        Raises:
            ToolRegistrationError: If ``agent_id`` is empty or ``tool`` is not a :class:`Tool`.
        """
        if not agent_id:
            raise ToolRegistrationError("Cannot register a tool for an empty agent id.")
        self._check_tool(tool)
        agent_map = self.agent_tools.setdefault(agent_id, {})
        if tool.name in agent_map:
            logger.warning(f"Overwriting existing agent tool: '{tool.name}' for agent '{agent_id}'")
        agent_map[tool.name] = tool
        logger.info(f"Successfully registered tool '{tool.name}' for agent '{agent_id}'")

    @staticmethod
    def _check_tool(tool: Any) -> None:
        if not isinstance(tool, Tool):
            msg = f"Expected a Tool, got {type(tool).__name__}. Build tools with create_tool()."
            logger.error(msg)
            raise ToolRegistrationError(msg)

    def unregister(self, tool_name: str) -> bool:
        """Unregister a global tool.

        Args:
            tool_name: The name of the tool to remove.

        Returns:
            True if a tool was removed.
        """
        removed = self.tools.pop(tool_name, None) is not None
        if removed:
            logger.info(f"Successfully unregistered tool: '{tool_name}'")
        return removed

    def unregister_for_agent(self, agent_id: str, tool_name: str) -> bool:
        """Unregister an agent-scoped tool.

        Args:
            agent_id: The agent owning the tool.
            tool_name: The name of the tool to remove.

        Returns:
            True if a tool was removed.
        """
        agent_map = self.agent_tools.get(agent_id)
        if not agent_map or tool_name not in agent_map:
            return False
        del agent_map[tool_name]
        if not agent_map:
            del self.agent_tools[agent_id]
        logger.info(f"Successfully unregistered tool '{tool_name}' for agent '{agent_id}'")
        return True

    def tool(
        self,
        name: str,
        description: str,
        parameters: Optional[Dict[str, Any]] = None,
        agent_id: Optional[str] = None,
    ) -> Callable[[Callable], Callable]:
        """A decorator to turn a handler into a registered tool.

        Args:
            name: Tool name.
            description: What the tool does.
            parameters: Parameter specs, see :func:`create_tool`.
            agent_id: Register for this agent instead of globally.

        Returns:
            A decorator returning the original handler, after registering it.
        """

        def decorator(handler: Callable) -> Callable:
            new_tool = create_tool(name, description, parameters or {}, handler)
            if agent_id is None:
                self.register(new_tool)
            else:
                self.register_for_agent(agent_id, new_tool)
            return handler

        return decorator

    def get(self, tool_name: str, agent_id: Optional[str] = None) -> Optional[Tool]:
        """Look up a tool, agent-scoped tools first.

        Args:
            tool_name: The tool name.
            agent_id: The agent whose tools take precedence, if any.

        Returns:
            The tool, or None if neither scope has it.
        """
        if agent_id is not None:
            agent_map = self.agent_tools.get(agent_id)
            if agent_map and tool_name in agent_map:
                return agent_map[tool_name]
        return self.tools.get(tool_name)

    def require(self, tool_name: str, agent_id: Optional[str] = None) -> Tool:
        """Like :meth:`get`, but raises when the tool is unknown.

        Raises:
            ToolNotFoundError: If neither scope has the tool.
        """
        tool = self.get(tool_name, agent_id)
        if tool is None:
            raise ToolNotFoundError(f"Tool not found: {tool_name}")
        return tool

    def get_tools_for_agent(self, agent_id: str) -> List[Tool]:
        """All tools available to an agent.

        Global tools come first in registration order, with same-named agent tools
        substituted in place; agent-only tools follow. The returned list is a
        snapshot, later registry changes do not affect it.

        Args:
            agent_id: The agent.

        Returns:
            The union of global and agent-scoped tools.
        """
        merged: Dict[str, Tool] = dict(self.tools)
        merged.update(self.agent_tools.get(agent_id, {}))
        return list(merged.values())

    def get_function_declarations(self, agent_id: str) -> List[FunctionDeclaration]:
        """Provider-agnostic declarations of every tool available to an agent."""
        return [to_function_declaration(t) for t in self.get_tools_for_agent(agent_id)]

    def list_tools(self, agent_id: Optional[str] = None) -> List[str]:
        """Names of the tools available to ``agent_id``, or of the global tools."""
        if agent_id is not None:
            return [t.name for t in self.get_tools_for_agent(agent_id)]
        return list(self.tools.keys())

    def has_tools(self, agent_id: str) -> bool:
        return bool(self.tools) or bool(self.agent_tools.get(agent_id))

    def clear(self) -> None:
        """Remove every tool from both scopes."""
        self.tools.clear()
        self.agent_tools.clear()

    async def execute(self, request: ToolCallRequest, context: ToolContext) -> ToolCallResult:
        """Execute one tool call.

        Never raises for tool-level problems: unknown tools, undecodable or invalid
        arguments and handler exceptions all come back as ``ToolCallResult.error``.

        Args:
            request: The tool call as requested by the model.
            context: The per-request tool context; ``agent_id`` scopes the lookup.

        Returns:
            The result of the tool execution, including any errors.
        """
        logger.debug(f"Handling tool call: {request.name} (ID: {request.call_id})")

        try:
            tool = self.require(request.name, context.agent_id)
            arguments = ParameterValidator.normalize_arguments(request.name, request.arguments)
            logger.info(f"Executing tool '{request.name}'...")
            result = await tool.invoke(arguments, context)
        except LLMToolError as exc:
            msg = str(exc) or type(exc).__name__
            logger.warning(f"Tool '{request.name}' failed: {msg} ({type(exc).__name__})")
            return ToolCallResult(name=request.name, result=None, error=msg, call_id=request.call_id)

        logger.info(f"Tool '{request.name}' executed successfully.")
        return ToolCallResult(name=request.name, result=result, call_id=request.call_id)

    async def execute_many(
        self, requests: Sequence[ToolCallRequest], context: ToolContext
    ) -> List[ToolCallResult]:
        """Execute several tool calls concurrently.

        Args:
            requests: The tool calls, in the order the model issued them.
            context: The per-request tool context.

        Returns:
            One result per request, in request order regardless of completion order.
        """
        results = await asyncio.gather(*(self.execute(r, context) for r in requests))
        return list(results)
