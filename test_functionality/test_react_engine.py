"""
Test the LangGraph adapter. Most tests use a stub graph that replays
"updates" chunks shaped like the prebuilt ReAct agent's; the step budget is
also checked against the real graph with a fake looping model.
"""

import pytest
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, HumanMessage, ToolMessage
from langchain_core.outputs import ChatGeneration, ChatResult
from langchain_core.tools import tool
from langgraph.errors import GraphRecursionError

from domain.exceptions import TurnBudgetExceeded
from agent.executor import TurnDriver
from agent.memory import Transcript
from domain.models import AgentStep, Message, Role, SessionConfig, ToolCall, ToolStep
from infrastructure.llm.react_engine import (
    ReactAgentEngine,
    content_text,
    steps_from_chunk,
    to_langchain_history,
)


class StubGraph:
    def __init__(self, chunks, error=None):
        self._chunks = chunks
        self._error = error
        self.inputs = []
        self.configs = []

    async def astream(self, payload, config, stream_mode="values"):
        self.inputs.append(payload)
        self.configs.append((config, stream_mode))
        for chunk in self._chunks:
            yield chunk
        if self._error is not None:
            raise self._error


def _tool_call_message():
    return AIMessage(
        content="",
        id="ai-1",
        tool_calls=[{"id": "call-1", "name": "get_balance", "args": {}}],
    )


def test_agent_chunk_becomes_agent_step():
    steps = steps_from_chunk({"agent": {"messages": [AIMessage(content="Hi there", id="ai-9")]}})

    assert len(steps) == 1
    assert isinstance(steps[0], AgentStep)
    assert steps[0].message.content == "Hi there"
    assert steps[0].message.id == "ai-9"


def test_tool_request_keeps_tool_calls():
    (step,) = steps_from_chunk({"agent": {"messages": [_tool_call_message()]}})

    assert step.message.content == ""
    assert step.message.tool_calls == (ToolCall(id="call-1", name="get_balance", args={}),)


def test_tools_chunk_becomes_tool_steps_in_order():
    chunk = {"tools": {"messages": [
        ToolMessage(content="Balance: 1 SOL", name="get_balance", tool_call_id="call-1"),
        ToolMessage(content="Wallet address: abc", name="get_wallet_address", tool_call_id="call-2"),
    ]}}

    steps = steps_from_chunk(chunk)

    assert [type(s) for s in steps] == [ToolStep, ToolStep]
    assert [s.message.tool_name for s in steps] == ["get_balance", "get_wallet_address"]
    assert steps[0].message.tool_call_id == "call-1"


def test_unrelated_chunks_are_ignored():
    assert steps_from_chunk({"__interrupt__": ()}) == []
    assert steps_from_chunk({"agent": None}) == []
    assert steps_from_chunk({"other": {"messages": [AIMessage(content="x")]}}) == []


def test_content_blocks_are_flattened():
    assert content_text([{"type": "text", "text": "A"}, {"type": "image_url"}, "B"]) == "AB"
    assert content_text("plain") == "plain"


def test_history_conversion_preserves_ids_and_roles():
    user = Message.user("balance?")
    request = Message.agent("", tool_calls=(ToolCall(id="call-1", name="get_balance"),))
    observation = Message.tool("1 SOL", tool_name="get_balance", tool_call_id="call-1")
    reply = Message.agent("You have 1 SOL")

    converted = to_langchain_history([user, request, observation, reply])

    assert [type(m) for m in converted] == [HumanMessage, AIMessage, ToolMessage, AIMessage]
    assert [m.id for m in converted] == [user.id, request.id, observation.id, reply.id]
    assert converted[1].tool_calls[0]["id"] == "call-1"
    assert converted[2].tool_call_id == "call-1"


def test_history_conversion_drops_unanswered_tool_calls():
    request = Message.agent("", tool_calls=(
        ToolCall(id="call-1", name="get_balance"),
        ToolCall(id="call-2", name="transfer_sol", args={"to_address": "x", "amount": 1}),
    ))
    observation = Message.tool("1 SOL", tool_name="get_balance", tool_call_id="call-1")

    converted = to_langchain_history([Message.user("go"), request, observation])

    assert [c["id"] for c in converted[1].tool_calls] == ["call-1"]


@pytest.mark.asyncio
async def test_stream_replays_transcript_and_yields_steps():
    graph = StubGraph([
        {"agent": {"messages": [_tool_call_message()]}},
        {"tools": {"messages": [ToolMessage(content="Balance: 1 SOL", name="get_balance", tool_call_id="call-1")]}},
        {"agent": {"messages": [AIMessage(content="You have 1 SOL", id="ai-2")]}},
    ])
    engine = ReactAgentEngine(graph, max_steps=10)
    session = SessionConfig(thread_id="t-1")

    steps = [s async for s in engine.stream([Message.user("balance?")], session)]

    assert [type(s) for s in steps] == [AgentStep, ToolStep, AgentStep]
    assert steps[-1].message.content == "You have 1 SOL"
    config, mode = graph.configs[0]
    assert mode == "updates"
    assert config["configurable"]["thread_id"] == "t-1"
    assert config["recursion_limit"] == 23
    assert [m.content for m in graph.inputs[0]["messages"]] == ["balance?"]


@pytest.mark.asyncio
async def test_recursion_error_maps_to_budget_exceeded():
    graph = StubGraph([{"agent": {"messages": [AIMessage(content="thinking")]}}], error=GraphRecursionError("limit"))
    engine = ReactAgentEngine(graph, max_steps=4)

    with pytest.raises(TurnBudgetExceeded):
        [s async for s in engine.stream([Message.user("loop")], SessionConfig())]


@pytest.mark.asyncio
async def test_other_graph_errors_propagate():
    graph = StubGraph([], error=RuntimeError("openai 500"))
    engine = ReactAgentEngine(graph)

    with pytest.raises(RuntimeError, match="openai 500"):
        [s async for s in engine.stream([Message.user("hi")], SessionConfig())]


class LoopingToolModel(BaseChatModel):
    """Chat model that asks for the ping tool on every call and never answers."""

    calls: int = 0

    @property
    def _llm_type(self) -> str:
        return "looping-tool-model"

    def bind_tools(self, tools, **kwargs):
        return self

    def _generate(self, messages, stop=None, run_manager=None, **kwargs):
        self.calls += 1
        message = AIMessage(
            content="",
            tool_calls=[{"id": f"call-{self.calls}", "name": "ping", "args": {}}],
        )
        return ChatResult(generations=[ChatGeneration(message=message)])


@tool
async def ping() -> str:
    """Check that the tool loop is alive."""
    return "pong"


@pytest.mark.asyncio
@pytest.mark.parametrize("max_steps", [2, 3, 4, 25])
async def test_runaway_tool_loop_exceeds_budget(max_steps):
    engine = ReactAgentEngine.build(LoopingToolModel(), [ping], "You ping.", max_steps=max_steps)
    driver = TurnDriver(engine, max_steps=max_steps)
    transcript = Transcript()
    transcript.append(Message.user("keep going"))

    with pytest.raises(TurnBudgetExceeded):
        await driver.run(transcript, SessionConfig())

    steps = transcript.snapshot()[1:]
    assert len(steps) == max_steps
    assert all(m.role != Role.AGENT or m.tool_calls for m in steps)
