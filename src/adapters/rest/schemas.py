"""Pydantic models for REST API request/response validation."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


# --- Chat ---

class ChatBody(BaseModel):
    # Optional so a missing field reaches the service and maps to 400, not 422.
    message: Optional[str] = None


class ChatOut(BaseModel):
    response: str


class ErrorOut(BaseModel):
    error: str


# --- History ---

class MessageOut(BaseModel):
    role: str
    content: str
    tool_name: Optional[str] = None


class HistoryOut(BaseModel):
    session_id: Optional[str]
    messages: list[MessageOut]


# --- Health ---

class HealthOut(BaseModel):
    status: str
