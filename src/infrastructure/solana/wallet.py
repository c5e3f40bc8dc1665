"""
infrastructure.solana.wallet - Agent wallet backed by a Solana RPC node.

Implements WalletPort (structural typing — no explicit inheritance) with
solana-py's AsyncClient for RPC and solders for keys and transactions.

Usage (wired in factory.py):
    wallet = SolanaWallet.connect(rpc_url=config.rpc_url,
                                  private_key=config.solana_private_key)
    balance = await wallet.get_balance()
    await wallet.aclose()
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from solana.rpc.async_api import AsyncClient
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from domain.exceptions import ConfigurationError, ToolExecutionError

logger = logging.getLogger(__name__)

LAMPORTS_PER_SOL = 1_000_000_000

_BASE58_CHARS = "1-9A-HJ-NP-Za-km-z"
# solders panics (rather than raising) on malformed base58, so shape is checked first.
_KEYPAIR_RE = re.compile(rf"^[{_BASE58_CHARS}]{{80,90}}$")
_ADDRESS_RE = re.compile(rf"^[{_BASE58_CHARS}]{{32,44}}$")


def load_keypair(private_key: str) -> Keypair:
    """Parse a signing key given as base58 or as a JSON byte array.

    The JSON form is what `solana-keygen` writes to id.json.
    """
    raw = private_key.strip()
    try:
        if raw.startswith("["):
            return Keypair.from_bytes(bytes(json.loads(raw)))
        if not _KEYPAIR_RE.match(raw):
            raise ValueError("not a base58 keypair")
        return Keypair.from_base58_string(raw)
    except Exception as exc:
        raise ConfigurationError("SOLANA_PRIVATE_KEY is not a valid Solana keypair") from exc


def parse_address(address: str) -> Pubkey:
    try:
        if not _ADDRESS_RE.match(address.strip()):
            raise ValueError("not a base58 address")
        return Pubkey.from_string(address.strip())
    except Exception as exc:
        raise ToolExecutionError(f"Invalid Solana address: '{address}'") from exc


def sol_to_lamports(amount_sol: float) -> int:
    lamports = int(round(amount_sol * LAMPORTS_PER_SOL))
    if lamports <= 0:
        raise ToolExecutionError(f"Amount must be positive, got {amount_sol} SOL")
    return lamports


class SolanaWallet:
    """The agent's own wallet on the configured cluster."""

    def __init__(self, client: Any, keypair: Keypair):
        self._client = client
        self._keypair = keypair

    @classmethod
    def connect(cls, rpc_url: str, private_key: str) -> SolanaWallet:
        keypair = load_keypair(private_key)
        logger.info("Solana wallet %s on %s", keypair.pubkey(), rpc_url)
        return cls(AsyncClient(rpc_url), keypair)

    @property
    def address(self) -> str:
        return str(self._keypair.pubkey())

    async def get_balance(self, address: Optional[str] = None) -> float:
        pubkey = parse_address(address) if address else self._keypair.pubkey()
        try:
            resp = await self._client.get_balance(pubkey)
        except Exception as exc:
            raise ToolExecutionError(f"Balance lookup failed for {pubkey}: {exc}") from exc
        return resp.value / LAMPORTS_PER_SOL

    async def request_airdrop(self, amount_sol: float) -> str:
        lamports = sol_to_lamports(amount_sol)
        try:
            resp = await self._client.request_airdrop(self._keypair.pubkey(), lamports)
        except Exception as exc:
            raise ToolExecutionError(f"Faucet request failed: {exc}") from exc
        signature = str(resp.value)
        logger.info("Airdrop of %d lamports requested: %s", lamports, signature)
        return signature

    async def transfer(self, to_address: str, amount_sol: float) -> str:
        recipient = parse_address(to_address)
        lamports = sol_to_lamports(amount_sol)
        sender = self._keypair.pubkey()
        instruction = transfer(TransferParams(
            from_pubkey=sender, to_pubkey=recipient, lamports=lamports,
        ))
        try:
            blockhash = (await self._client.get_latest_blockhash()).value.blockhash
            tx = Transaction([self._keypair], Message([instruction], sender), blockhash)
            resp = await self._client.send_transaction(tx)
        except Exception as exc:
            raise ToolExecutionError(f"Transfer to {recipient} failed: {exc}") from exc
        signature = str(resp.value)
        logger.info("Transferred %d lamports to %s: %s", lamports, recipient, signature)
        return signature

    async def aclose(self) -> None:
        await self._client.close()
