"""
agent.executor - Turn driver.

Runs one decide -> act -> observe turn against the reasoning engine and
records every step in the transcript as it is observed.
No component construction, no global state, no lock handling: the session
controller owns those.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator

from domain.exceptions import TurnBudgetExceeded
from domain.models import AgentStep, SessionConfig, Step, ToolStep, TurnResult
from domain.ports import ReasoningEnginePort
from agent.memory import Transcript

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 25


class TurnDriver:
    """Drives the reasoning engine until its step sequence is exhausted.

    Constructed once per session with the engine injected.
    """

    def __init__(self, engine: ReasoningEnginePort, max_steps: int = DEFAULT_MAX_STEPS):
        if max_steps < 1:
            raise ValueError("max_steps must be >= 1")
        self._engine = engine
        self._max_steps = max_steps

    @property
    def max_steps(self) -> int:
        return self._max_steps

    async def run_turn(
        self, transcript: Transcript, session: SessionConfig,
    ) -> AsyncIterator[Step]:
        """Yield each step in emission order after appending it to the transcript.

        The engine sees the transcript as it stood when the turn started (the
        user message included). Tool observations go to the transcript too, so
        later turns can refer back to them.

        Raises:
            TurnBudgetExceeded: the engine emitted more than max_steps steps.
            Exception: anything the engine or a tool raises, unchanged.
        """
        count = 0
        async for step in self._engine.stream(transcript.snapshot(), session):
            count += 1
            if count > self._max_steps:
                logger.warning(
                    "Turn aborted after %d steps (thread=%s)",
                    self._max_steps, session.thread_id,
                )
                raise TurnBudgetExceeded(self._max_steps)

            transcript.append(step.message)
            if isinstance(step, ToolStep):
                logger.info(
                    "Tool %s observed: %s",
                    step.message.tool_name, step.message.content[:200],
                )
            elif isinstance(step, AgentStep) and step.message.tool_calls:
                logger.info(
                    "Agent requested tools: %s",
                    ", ".join(call.name for call in step.message.tool_calls),
                )
            yield step

    async def run(self, transcript: Transcript, session: SessionConfig) -> TurnResult:
        """Drain run_turn() and assemble the TurnResult."""
        steps = [step async for step in self.run_turn(transcript, session)]
        result = TurnResult.from_steps(steps)
        logger.info(
            "Turn finished: %d step(s), %d tool step(s), reply starts with: %s",
            len(steps), result.tool_steps, result.text[:80],
        )
        return result
