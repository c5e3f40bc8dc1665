"""
domain.exceptions - Custom exception hierarchy for the Solana agent chat service.

All domain-level errors inherit from DomainError so callers can catch
broad or specific exceptions as needed. Adapters map these to transport
errors (HTTP status codes, CLI exit codes).
"""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""


class InvalidRequest(DomainError):
    """Raised when the user submission is missing or empty."""


class InitializationFailure(DomainError):
    """Raised when the reasoning engine cannot be bound to its tools."""


class TurnExecutionFailure(DomainError):
    """Raised when the decide/act/observe loop fails mid-turn.

    Messages appended to the transcript before the failure are kept.
    """


class TurnBudgetExceeded(TurnExecutionFailure):
    """Raised when a turn produces more steps than the configured cap."""

    def __init__(self, max_steps: int):
        super().__init__(f"Turn exceeded the budget of {max_steps} steps")
        self.max_steps = max_steps


class SessionBusy(DomainError):
    """Raised when a turn is submitted while another one is in flight."""


class ToolExecutionError(DomainError):
    """Raised when an action tool fails (bad input, RPC error)."""


class ConfigurationError(DomainError):
    """Raised when required environment configuration is missing or invalid."""

    def __init__(self, message: str, missing: list[str] | None = None):
        super().__init__(message)
        self.missing = missing or []
