"""
domain.ports - Boundaries of the chat core: the reasoning engine and the wallet.

The session controller and turn driver only see these protocols; LangGraph
and Solana RPC live behind them in infrastructure. Structural typing: a
class that has the methods satisfies the port, no inheritance needed.
"""

from __future__ import annotations

from typing import AsyncIterator, Awaitable, Callable, Protocol, Sequence, Union, runtime_checkable

from domain.models import Message, SessionConfig, Step


# ---------------------------------------------------------------------------
# Reasoning engine
# ---------------------------------------------------------------------------

@runtime_checkable
class ReasoningEnginePort(Protocol):
    """Drives one turn: consumes the full transcript, yields discrete steps.

    The iterator ends when the engine has converged on a final answer.
    Errors raised by the engine or by a tool propagate out of the iterator.
    """

    def stream(
        self, messages: Sequence[Message], session: SessionConfig,
    ) -> AsyncIterator[Step]: ...


# Builds an engine bound to its tool set. Called once per session.
EngineFactory = Callable[[], Union[ReasoningEnginePort, Awaitable[ReasoningEnginePort]]]


# ---------------------------------------------------------------------------
# Wallet / chain
# ---------------------------------------------------------------------------

@runtime_checkable
class WalletPort(Protocol):
    """On-chain operations available to the action tools.

    Amounts are in SOL at this boundary; lamport conversion is an
    infrastructure concern.
    """

    @property
    def address(self) -> str: ...

    async def get_balance(self, address: str | None = None) -> float: ...

    async def request_airdrop(self, amount_sol: float) -> str: ...

    async def transfer(self, to_address: str, amount_sol: float) -> str: ...
