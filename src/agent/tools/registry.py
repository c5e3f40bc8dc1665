"""
agent.tools.registry - Tool registration and LangChain wrapping.

Central registry that manages all available tools and provides
LangChain-compatible tool wrappers.
"""

from __future__ import annotations

import logging
from typing import Any

from langchain_core.tools import StructuredTool

from agent.tools.base import BaseTool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Manages tool registration."""

    def __init__(self):
        self._tools: dict[str, BaseTool] = {}

    def register(self, tool: BaseTool) -> None:
        """Register a tool by its name."""
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' already registered")
        self._tools[tool.name] = tool
        logger.debug("Registered tool: %s", tool.name)

    def all(self) -> list[BaseTool]:
        return list(self._tools.values())

    def names(self) -> list[str]:
        return list(self._tools.keys())

    def to_langchain_tools(self) -> list[StructuredTool]:
        """Convert all registered tools to async LangChain StructuredTools."""
        lc_tools = []
        for tool in self._tools.values():

            def _make_coroutine(t: BaseTool):
                async def coroutine(**kwargs: Any) -> str:
                    result = await t.execute(**kwargs)
                    return result.output
                return coroutine

            lc_tools.append(StructuredTool.from_function(
                coroutine=_make_coroutine(tool),
                name=tool.name,
                description=tool.description,
                args_schema=tool.get_schema(),
            ))
        return lc_tools
