"""
agent.tools.wallet - Read-only wallet tools.

get_wallet_address lets the agent tell users where to send funds;
get_balance reads SOL balances for the agent wallet or any address.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from agent.tools.base import BaseTool, ToolResult


class WalletAddressInput(BaseModel):
    """The tool takes no arguments."""


class GetWalletAddressTool(BaseTool):
    """Return the public key of the agent's own wallet."""

    name = "get_wallet_address"
    description = (
        "Get the public address of your own Solana wallet. Use it when the user "
        "asks for your wallet details or needs an address to send funds to."
    )

    def get_schema(self) -> type[BaseModel]:
        return WalletAddressInput

    async def execute(self, **kwargs) -> ToolResult:
        address = self._wallet.address
        return ToolResult(output=f"Wallet address: {address}", data=address)


class GetBalanceInput(BaseModel):
    """Input schema for the get_balance tool."""

    address: Optional[str] = Field(
        default=None,
        description="Base58 wallet address to check. Omit to check your own wallet.",
    )


class GetBalanceTool(BaseTool):
    """Report the SOL balance of an address."""

    name = "get_balance"
    description = (
        "Get the SOL balance of a Solana wallet. Without an address it returns "
        "the balance of your own wallet."
    )

    def get_schema(self) -> type[BaseModel]:
        return GetBalanceInput

    async def execute(self, address: Optional[str] = None, **kwargs) -> ToolResult:
        target = address or self._wallet.address
        balance = await self._wallet.get_balance(address or None)
        return ToolResult(output=f"Balance of {target}: {balance:g} SOL", data=balance)
