"""
factory - Composition root for the Solana agent chat service.

ALL dependency wiring happens here. No other module constructs its own
dependencies. Adapters (REST, CLI) call this factory to get a fully
configured session controller.

Usage:
    from factory import ServiceFactory
    from infrastructure.config import Settings

    config = Settings.from_env()
    factory = ServiceFactory(config)
    service = factory.create_chat_session_service()

    result = await service.handle_turn("What is my balance?")
    await factory.aclose()
"""

from __future__ import annotations

import logging
from typing import Optional

from infrastructure.config import Settings
from infrastructure.llm.llm_builder import build_llm
from infrastructure.llm.react_engine import ReactAgentEngine
from infrastructure.solana.wallet import SolanaWallet
from application.services.chat_session import ChatSessionService
from agent.tools.registry import ToolRegistry
from agent.tools.wallet import GetBalanceTool, GetWalletAddressTool
from agent.tools.faucet import RequestFaucetFundsTool
from agent.tools.transfer import TransferSolTool
from agent.prompt import build_system_prompt

logger = logging.getLogger(__name__)


class ServiceFactory:
    """Composition root — wires all dependencies together.

    Nothing expensive happens in the constructor: the wallet, LLM and agent
    graph are built by create_engine(), which the session controller calls
    lazily on the first turn.
    """

    def __init__(self, config: Settings):
        self._config = config
        self._wallet: Optional[SolanaWallet] = None

    @property
    def config(self) -> Settings:
        return self._config

    # ------------------------------------------------------------------
    # Service creation
    # ------------------------------------------------------------------

    def create_chat_session_service(self) -> ChatSessionService:
        """Create the process-wide session controller."""
        return ChatSessionService(
            engine_factory=self.create_engine,
            max_steps=self._config.agent_max_steps,
            busy_policy=self._config.agent_busy_policy,
            thread_id=self._config.agent_thread_id or None,
        )

    def create_tool_registry(self, wallet: SolanaWallet) -> ToolRegistry:
        registry = ToolRegistry()
        registry.register(GetWalletAddressTool(wallet))
        registry.register(GetBalanceTool(wallet))
        registry.register(RequestFaucetFundsTool(wallet))
        registry.register(TransferSolTool(wallet))
        return registry

    # ------------------------------------------------------------------
    # Agent creation
    # ------------------------------------------------------------------

    def create_engine(self) -> ReactAgentEngine:
        """Bind the reasoning engine to the on-chain tool set.

        Raises whatever the wallet, LLM or graph construction raises; the
        session controller turns that into InitializationFailure.
        """
        wallet = self.get_wallet()
        registry = self.create_tool_registry(wallet)
        llm = build_llm(
            provider=self._config.llm_provider,
            model=self._config.active_llm_model,
            temperature=self._config.llm_temperature,
            ollama_base_url=self._config.ollama_base_url,
            openai_api_key=self._config.openai_api_key,
            groq_api_key=self._config.groq_api_key,
        )
        return ReactAgentEngine.build(
            llm=llm,
            tools=registry.to_langchain_tools(),
            system_prompt=build_system_prompt(registry),
            max_steps=self._config.agent_max_steps,
        )

    async def aclose(self) -> None:
        """Release the RPC connection, if one was opened."""
        if self._wallet is not None:
            await self._wallet.aclose()
            self._wallet = None

    # ------------------------------------------------------------------
    # Chain access
    # ------------------------------------------------------------------

    def get_wallet(self) -> SolanaWallet:
        """Return the agent wallet, opening the RPC client on first use."""
        if self._wallet is None:
            self._wallet = SolanaWallet.connect(
                rpc_url=self._config.rpc_url,
                private_key=self._config.solana_private_key,
            )
        return self._wallet
