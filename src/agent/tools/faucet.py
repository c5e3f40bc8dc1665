"""
agent.tools.faucet - Request test SOL from the cluster faucet.

Only works against devnet/testnet RPC endpoints; mainnet nodes reject
airdrops and the resulting RPC error aborts the turn.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from agent.tools.base import BaseTool, ToolResult


class FaucetInput(BaseModel):
    """Input schema for the request_faucet_funds tool."""

    amount: float = Field(
        default=1.0,
        gt=0,
        le=5,
        description="Amount of SOL to request (devnet allows at most a few SOL per request)",
    )


class RequestFaucetFundsTool(BaseTool):
    """Airdrop test SOL into the agent wallet."""

    name = "request_faucet_funds"
    description = (
        "Request SOL from the faucet into your own wallet. Use this whenever you "
        "need funds to perform an action. Only available on devnet and testnet."
    )

    def get_schema(self) -> type[BaseModel]:
        return FaucetInput

    async def execute(self, amount: float = 1.0, **kwargs) -> ToolResult:
        signature = await self._wallet.request_airdrop(amount)
        return ToolResult(
            output=f"Requested {amount:g} SOL from the faucet. Transaction signature: {signature}",
            data=signature,
        )
