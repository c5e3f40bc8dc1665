"""
Shared fixtures and fakes.

Nothing here talks to an LLM or a Solana node: the reasoning engine and the
RPC client are replaced by scripted fakes.
"""

import asyncio
import os
import sys
from types import SimpleNamespace

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

import pytest

from domain.models import AgentStep, Message, ToolStep


def agent_step(text: str, **kwargs) -> AgentStep:
    return AgentStep(Message.agent(text, **kwargs))


def tool_step(text: str, tool_name: str = "get_balance", **kwargs) -> ToolStep:
    return ToolStep(Message.tool(text, tool_name=tool_name, **kwargs))


class ScriptedEngine:
    """Reasoning engine that replays one script of steps per turn.

    scripts:  list of turns, each a list of steps. An Exception instance in a
              script is raised at that point instead of being yielded.
    gate:     optional asyncio.Event awaited before the first step, to hold a
              turn in flight.
    """

    def __init__(self, scripts, gate: asyncio.Event | None = None):
        self._scripts = list(scripts)
        self.gate = gate
        self.calls: list[tuple[tuple[Message, ...], object]] = []

    async def stream(self, messages, session):
        self.calls.append((tuple(messages), session))
        script = self._scripts.pop(0) if self._scripts else []
        if self.gate is not None:
            await self.gate.wait()
        for item in script:
            await asyncio.sleep(0)
            if isinstance(item, Exception):
                raise item
            yield item


class FakeWallet:
    """WalletPort stand-in that records calls."""

    address = "AgentWa11et1111111111111111111111111111111"

    def __init__(self, balance: float = 2.5):
        self.balance = balance
        self.calls: list[tuple] = []

    async def get_balance(self, address=None):
        self.calls.append(("get_balance", address))
        return self.balance

    async def request_airdrop(self, amount_sol):
        self.calls.append(("request_airdrop", amount_sol))
        return "airdrop-sig"

    async def transfer(self, to_address, amount_sol):
        self.calls.append(("transfer", to_address, amount_sol))
        return "transfer-sig"


class FakeRpcClient:
    """Minimal solana AsyncClient replacement returning solana-py shaped responses."""

    def __init__(self, lamports: int = 1_500_000_000, fail: Exception | None = None):
        self.lamports = lamports
        self.fail = fail
        self.sent = []
        self.closed = False

    async def get_balance(self, pubkey):
        if self.fail:
            raise self.fail
        return SimpleNamespace(value=self.lamports)

    async def request_airdrop(self, pubkey, lamports):
        if self.fail:
            raise self.fail
        return SimpleNamespace(value=f"airdrop-{lamports}")

    async def get_latest_blockhash(self):
        from solders.hash import Hash
        return SimpleNamespace(value=SimpleNamespace(blockhash=Hash.default()))

    async def send_transaction(self, tx):
        if self.fail:
            raise self.fail
        self.sent.append(tx)
        return SimpleNamespace(value="transfer-signature")

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_wallet():
    return FakeWallet()
