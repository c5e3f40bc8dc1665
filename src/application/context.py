"""
application.context - The conversation session object.

Replaces module-level mutable state (engine handle, message history,
thread config). Everything a turn needs is reachable from one AgentSession,
which is built once and passed explicitly to whoever drives a turn.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from domain.models import SessionConfig
from agent.executor import TurnDriver
from agent.memory import Transcript


@dataclass
class AgentSession:
    """One logical conversation with the bound reasoning engine.

    Attributes:
        driver:      Turn driver wrapping the engine bound to its tools.
        config:      Session identity shared with the engine. Read-only.
        transcript:  Append-only message history.
        turn_lock:   Serializes whole turns (read transcript, run loop, append).
    """
    driver: TurnDriver
    config: SessionConfig = field(default_factory=SessionConfig)
    transcript: Transcript = field(default_factory=Transcript)
    turn_lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @property
    def busy(self) -> bool:
        return self.turn_lock.locked()
