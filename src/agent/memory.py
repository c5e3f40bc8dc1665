"""
agent.memory - In-process conversation transcript.

Stores messages as a plain list[Message]. The list only ever grows: there is
no eviction, trimming or windowing, and no persistence beyond the process.
"""

from __future__ import annotations

import logging
from typing import Iterator

from domain.models import Message

logger = logging.getLogger(__name__)


class Transcript:
    """Ordered, append-only log of conversation messages.

    Owned by one AgentSession; only the session controller and the turn
    driver append to it.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []

    def append(self, message: Message) -> None:
        self._messages.append(message)
        logger.debug(
            "Transcript append #%d role=%s", len(self._messages), message.role.value,
        )

    def snapshot(self) -> tuple[Message, ...]:
        """Full ordered history at the time of the call."""
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.snapshot())
