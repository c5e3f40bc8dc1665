"""
Shared FastAPI dependencies.

- get_chat_service(): returns the process-wide ChatSessionService (set at startup).
"""

from __future__ import annotations

from application.services.chat_session import ChatSessionService

# Module-level reference set by app lifespan
_chat_service: ChatSessionService | None = None


def set_chat_service(service: ChatSessionService | None) -> None:
    global _chat_service
    _chat_service = service


def get_chat_service() -> ChatSessionService:
    if _chat_service is None:
        raise RuntimeError("ChatSessionService not initialized.")
    return _chat_service
