"""
infrastructure.llm.react_engine - LangGraph ReAct agent as a reasoning engine.

Wraps a prebuilt LangGraph ReAct graph (LLM node + tool node) and turns its
"updates" stream into domain steps:

    {"agent": {"messages": [AIMessage]}}     → AgentStep
    {"tools": {"messages": [ToolMessage]}}   → ToolStep

The graph is compiled without a checkpointer. The full transcript is replayed
on every turn, so the transcript is the only conversation state; the session
thread id is passed through the run config for tracing.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Optional, Sequence
from uuid import uuid4

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, ToolMessage
from langchain_core.tools import BaseTool as LangChainTool
from langgraph.errors import GraphRecursionError
from langgraph.prebuilt import ToolNode, create_react_agent

from domain.exceptions import TurnBudgetExceeded
from domain.models import AgentStep, Message, Role, SessionConfig, Step, ToolCall, ToolStep

logger = logging.getLogger(__name__)

AGENT_NODE = "agent"
TOOLS_NODE = "tools"


class ReactAgentEngine:
    """ReasoningEnginePort implementation backed by a compiled LangGraph graph.

    Any object exposing LangGraph's ``astream(input, config, stream_mode=...)``
    works as ``graph``, which keeps the adapter testable without a model.
    """

    def __init__(self, graph: Any, max_steps: int = 25):
        self._graph = graph
        self._max_steps = max_steps

    @classmethod
    def build(
        cls,
        llm: BaseChatModel,
        tools: Sequence[LangChainTool],
        system_prompt: str,
        max_steps: int = 25,
    ) -> ReactAgentEngine:
        """Compile a ReAct graph for the given model and tools.

        Tool errors are not turned into observations: they propagate and abort
        the turn.
        """
        graph = create_react_agent(
            llm,
            tools=ToolNode(list(tools), handle_tool_errors=False),
            prompt=system_prompt,
        )
        logger.info("ReAct agent compiled with %d tool(s)", len(tools))
        return cls(graph, max_steps=max_steps)

    async def stream(
        self, messages: Sequence[Message], session: SessionConfig,
    ) -> AsyncIterator[Step]:
        config = {
            "configurable": {"thread_id": session.thread_id},
            "recursion_limit": recursion_limit(self._max_steps),
        }
        payload = {"messages": to_langchain_history(messages)}
        try:
            async for chunk in self._graph.astream(payload, config, stream_mode="updates"):
                for step in steps_from_chunk(chunk):
                    yield step
        except GraphRecursionError as exc:
            raise TurnBudgetExceeded(self._max_steps) from exc


def recursion_limit(max_steps: int) -> int:
    """LangGraph recursion limit for a turn capped at max_steps.

    Every superstep emits at least one step, and the prebuilt agent replaces
    its reply with a canned "need more steps" answer once fewer than two
    supersteps remain. The limit leaves room for max_steps + 1 steps before
    that guard, so the turn driver always stops the turn first.
    """
    return 2 * max_steps + 3


# ---------------------------------------------------------------------------
# Message conversion
# ---------------------------------------------------------------------------

def to_langchain_history(messages: Sequence[Message]) -> list[BaseMessage]:
    """Convert the transcript for replay.

    A turn that failed between a tool request and its observation leaves
    unanswered tool calls behind; chat APIs reject those, so they are dropped
    from the replayed agent message.
    """
    answered = {m.tool_call_id for m in messages if m.role == Role.TOOL and m.tool_call_id}
    return [to_langchain(m, answered) for m in messages]


def to_langchain(message: Message, answered: Optional[set[str]] = None) -> BaseMessage:
    """Convert a transcript message to its LangChain equivalent.

    answered: tool call ids that have an observation; None keeps every call.
    """
    if message.role == Role.USER:
        return HumanMessage(content=message.content, id=message.id)
    if message.role == Role.AGENT:
        return AIMessage(
            content=message.content,
            id=message.id,
            tool_calls=[
                {"id": call.id, "name": call.name, "args": dict(call.args)}
                for call in message.tool_calls
                if answered is None or call.id in answered
            ],
        )
    return ToolMessage(
        content=message.content,
        id=message.id,
        name=message.tool_name,
        tool_call_id=message.tool_call_id or "",
    )


def from_langchain(message: BaseMessage, node: str) -> Optional[Step]:
    """Classify one LangChain message emitted by a graph node.

    Returns None for messages that are neither agent output nor tool
    observations.
    """
    msg_id = message.id or uuid4().hex
    text = content_text(message.content)

    if node == AGENT_NODE and isinstance(message, AIMessage):
        calls = tuple(
            ToolCall(id=call.get("id") or "", name=call["name"], args=dict(call.get("args") or {}))
            for call in message.tool_calls
        )
        return AgentStep(Message.agent(text, id=msg_id, tool_calls=calls))

    if node == TOOLS_NODE and isinstance(message, ToolMessage):
        return ToolStep(Message.tool(
            text,
            tool_name=message.name or "",
            id=msg_id,
            tool_call_id=message.tool_call_id,
        ))

    logger.debug("Ignoring %s from node '%s'", type(message).__name__, node)
    return None


def steps_from_chunk(chunk: dict[str, Any]) -> list[Step]:
    """Flatten one "updates" chunk into steps, preserving message order."""
    steps: list[Step] = []
    for node, update in chunk.items():
        if not isinstance(update, dict):
            continue
        messages = update.get("messages") or []
        if isinstance(messages, BaseMessage):
            messages = [messages]
        for message in messages:
            step = from_langchain(message, node)
            if step is not None:
                steps.append(step)
    return steps


def content_text(content: Any) -> str:
    """Flatten LangChain message content (str or content blocks) to text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text", "")))
        return "".join(parts)
    return str(content)
