"""
agent.tools.base - Base tool interface and result container.

All agent tools inherit from BaseTool and return ToolResult.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from domain.ports import WalletPort


@dataclass
class ToolResult:
    """Result returned by a tool execution.

    output:  String observed by the agent (never shown to the user directly).
    data:    Structured data for logging/tests (not passed through the LLM).
    """
    output: str
    data: Any = None


class BaseTool(ABC):
    """Abstract base for all on-chain action tools."""

    name: str
    description: str

    def __init__(self, wallet: WalletPort):
        self._wallet = wallet

    @abstractmethod
    async def execute(self, **kwargs) -> ToolResult:
        """Execute the tool with the given arguments."""
        ...

    @abstractmethod
    def get_schema(self) -> type[BaseModel]:
        """Return the Pydantic schema for this tool's input arguments."""
        ...
