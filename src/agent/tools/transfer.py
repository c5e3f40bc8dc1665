"""
agent.tools.transfer - Send SOL from the agent wallet.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from agent.tools.base import BaseTool, ToolResult


class TransferInput(BaseModel):
    """Input schema for the transfer_sol tool."""

    to_address: str = Field(description="Base58 address of the recipient wallet")
    amount: float = Field(gt=0, description="Amount of SOL to send")


class TransferSolTool(BaseTool):
    """Transfer SOL to another wallet and return the transaction signature."""

    name = "transfer_sol"
    description = (
        "Transfer SOL from your wallet to another Solana address. "
        "Only call this when the user explicitly asks for a transfer and has "
        "given both the recipient address and the amount."
    )

    def get_schema(self) -> type[BaseModel]:
        return TransferInput

    async def execute(self, to_address: str, amount: float, **kwargs) -> ToolResult:
        signature = await self._wallet.transfer(to_address, amount)
        return ToolResult(
            output=f"Transferred {amount:g} SOL to {to_address}. Transaction signature: {signature}",
            data=signature,
        )
