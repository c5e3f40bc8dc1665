"""
application.services.chat_session - Session controller.

Single entry point for adapters (REST, CLI): validates the submission,
lazily binds the reasoning engine on first use, serializes turns on the
shared session and converts every failure into a domain error.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Optional

from domain.exceptions import (
    InitializationFailure,
    InvalidRequest,
    SessionBusy,
    TurnBudgetExceeded,
    TurnExecutionFailure,
)
from domain.models import Message, SessionConfig, TurnResult
from domain.ports import EngineFactory
from agent.executor import DEFAULT_MAX_STEPS, TurnDriver
from application.context import AgentSession

logger = logging.getLogger(__name__)

BUSY_POLICIES = ("wait", "reject")


class ChatSessionService:
    """Owns the process-wide conversation and runs turns against it.

    The engine is not built until the first valid turn. If building it fails
    the service stays uninitialized and the next turn tries again.
    """

    def __init__(
        self,
        engine_factory: EngineFactory,
        max_steps: int = DEFAULT_MAX_STEPS,
        busy_policy: str = "wait",
        thread_id: Optional[str] = None,
    ):
        if busy_policy not in BUSY_POLICIES:
            raise ValueError(
                f"Unsupported busy policy '{busy_policy}'. Must be one of {BUSY_POLICIES}."
            )
        self._engine_factory = engine_factory
        self._max_steps = max_steps
        self._busy_policy = busy_policy
        self._thread_id = thread_id
        self._session: AgentSession | None = None
        self._init_lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._session is not None

    @property
    def session_id(self) -> str | None:
        return self._session.config.thread_id if self._session else None

    def history(self) -> tuple[Message, ...]:
        """Transcript snapshot; empty before the first turn."""
        if self._session is None:
            return ()
        return self._session.transcript.snapshot()

    async def handle_turn(self, user_text: str) -> TurnResult:
        """Run one turn and return the agent's concatenated reply.

        Raises:
            InvalidRequest:        user_text is missing or blank.
            InitializationFailure: the engine could not be bound.
            SessionBusy:           busy policy is "reject" and a turn is running.
            TurnExecutionFailure:  the turn failed; partial transcript is kept.
        """
        if not isinstance(user_text, str) or not user_text.strip():
            raise InvalidRequest("Message is required")

        session = await self._ensure_session()

        if self._busy_policy == "reject" and session.busy:
            raise SessionBusy("A turn is already in progress for this session")

        async with session.turn_lock:
            logger.info(
                "Turn start (thread=%s, transcript=%d): %s",
                session.config.thread_id, len(session.transcript), user_text[:80],
            )
            session.transcript.append(Message.user(user_text))
            try:
                return await session.driver.run(session.transcript, session.config)
            except TurnBudgetExceeded:
                logger.exception("Turn exceeded its step budget")
                raise
            except Exception as exc:
                logger.exception(
                    "Turn failed (thread=%s), %d message(s) kept in transcript",
                    session.config.thread_id, len(session.transcript),
                )
                raise TurnExecutionFailure(str(exc)) from exc

    async def _ensure_session(self) -> AgentSession:
        if self._session is not None:
            return self._session

        async with self._init_lock:
            # Another caller may have finished initializing while we waited.
            if self._session is not None:
                return self._session

            logger.info("Initializing agent session...")
            try:
                engine = self._engine_factory()
                if inspect.isawaitable(engine):
                    engine = await engine
                driver = TurnDriver(engine, max_steps=self._max_steps)
            except Exception as exc:
                logger.exception("Failed to initialize agent")
                raise InitializationFailure(str(exc)) from exc

            config = SessionConfig(thread_id=self._thread_id) if self._thread_id else SessionConfig()
            self._session = AgentSession(driver=driver, config=config)
            logger.info("Agent session ready (thread=%s)", config.thread_id)
            return self._session
