"""
domain.models - Value objects for the conversation core.

These are immutable data containers with no business logic and no
dependencies on infrastructure (no LangChain, no LangGraph, no Solana).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union
from uuid import uuid4


class Role(str, Enum):
    """Author of a transcript message."""
    USER = "user"
    AGENT = "agent"
    TOOL = "tool"


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ToolCall:
    """A tool invocation requested by an agent message."""
    id: str
    name: str
    args: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Message:
    """One conversational utterance. Never mutated once created.

    id:            Stable identifier, reused when the message is replayed to
                   the reasoning engine so its own state is not duplicated.
    tool_name:     Originating tool (tool messages only).
    tool_call_id:  The agent tool call this observation answers (tool messages).
    tool_calls:    Tool invocations requested by an agent message.
    """
    role: Role
    content: str
    tool_name: Optional[str] = None
    id: str = field(default_factory=lambda: uuid4().hex)
    tool_call_id: Optional[str] = None
    tool_calls: tuple[ToolCall, ...] = ()

    @classmethod
    def user(cls, content: str) -> Message:
        return cls(role=Role.USER, content=content)

    @classmethod
    def agent(cls, content: str, **kwargs: Any) -> Message:
        return cls(role=Role.AGENT, content=content, **kwargs)

    @classmethod
    def tool(cls, content: str, tool_name: str, **kwargs: Any) -> Message:
        return cls(role=Role.TOOL, content=content, tool_name=tool_name, **kwargs)


# ---------------------------------------------------------------------------
# Engine steps
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AgentStep:
    """The engine produced a natural-language message."""
    message: Message


@dataclass(frozen=True)
class ToolStep:
    """The engine invoked a tool and observed its result."""
    message: Message


Step = Union[AgentStep, ToolStep]


# ---------------------------------------------------------------------------
# Session / turn
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SessionConfig:
    """Correlates every turn of one conversation with the engine's own state."""
    thread_id: str = field(default_factory=lambda: uuid4().hex)


@dataclass(frozen=True)
class TurnResult:
    """Outcome of one turn.

    text is the concatenation, in emission order and without a separator,
    of every agent step's content. Tool output never appears in it.
    """
    text: str
    steps: tuple[Step, ...] = ()

    @property
    def tool_steps(self) -> int:
        return sum(1 for step in self.steps if isinstance(step, ToolStep))

    @classmethod
    def from_steps(cls, steps: list[Step]) -> TurnResult:
        text = "".join(
            step.message.content for step in steps if isinstance(step, AgentStep)
        )
        return cls(text=text, steps=tuple(steps))
