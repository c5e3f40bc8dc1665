"""
infrastructure.config - Typed, injectable configuration.

A frozen dataclass that can be constructed from the environment (and a
local .env file) or passed explicitly in tests.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from domain.exceptions import ConfigurationError

# Environment variable holding the model credential, per provider.
_PROVIDER_KEY_VARS = {
    "openai": "OPENAI_API_KEY",
    "groq": "GROQ_API_KEY",
    "ollama": None,
}


@dataclass(frozen=True)
class Settings:
    """Centralized configuration for the Solana agent chat service.

    No module-level globals — construct via from_env() or pass explicitly
    in tests.
    """

    # ── Chain ───────────────────────────────────────────────────
    rpc_url: str = ""
    solana_private_key: str = ""

    # ── LLM Provider ────────────────────────────────────────────
    # Allowed: "openai", "groq", "ollama"
    llm_provider: str = "openai"

    # Model names; only the one matching llm_provider is used.
    llm_model_openai: str = "gpt-4o-mini"
    llm_model_groq: str = "llama-3.3-70b-versatile"
    llm_model_ollama: str = "llama3.2"
    llm_temperature: float = 0.3

    # Connection details
    openai_api_key: str = ""
    groq_api_key: str = ""
    ollama_base_url: str = "http://localhost:11434/"

    # ── Agent ───────────────────────────────────────────────────
    agent_max_steps: int = 25
    # "wait" queues a turn behind the one in flight, "reject" refuses it.
    agent_busy_policy: str = "wait"
    # Empty → a fresh id per process.
    agent_thread_id: str = ""

    # ── Server ──────────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @property
    def active_llm_model(self) -> str:
        """Return the model name for the currently active LLM provider."""
        if self.llm_provider == "groq":
            return self.llm_model_groq
        elif self.llm_provider == "ollama":
            return self.llm_model_ollama
        return self.llm_model_openai

    def missing_required(self) -> list[str]:
        """Names of the required environment variables that are not set.

        The model credential, the RPC endpoint and the signing key are
        required. Ollama runs locally and needs no credential.
        """
        required: list[tuple[str, str]] = []
        key_var = _PROVIDER_KEY_VARS.get(self.llm_provider)
        if key_var == "OPENAI_API_KEY":
            required.append((key_var, self.openai_api_key))
        elif key_var == "GROQ_API_KEY":
            required.append((key_var, self.groq_api_key))
        required.append(("RPC_URL", self.rpc_url))
        required.append(("SOLANA_PRIVATE_KEY", self.solana_private_key))
        return [name for name, value in required if not value]

    def validate(self) -> None:
        """Raise ConfigurationError if the settings cannot run the service."""
        if self.llm_provider not in _PROVIDER_KEY_VARS:
            raise ConfigurationError(
                f"Unsupported LLM_PROVIDER: '{self.llm_provider}'. "
                "Must be 'openai', 'groq', or 'ollama'."
            )
        if self.agent_busy_policy not in ("wait", "reject"):
            raise ConfigurationError(
                f"Unsupported AGENT_BUSY_POLICY: '{self.agent_busy_policy}'. "
                "Must be 'wait' or 'reject'."
            )
        if self.agent_max_steps < 1:
            raise ConfigurationError("AGENT_MAX_STEPS must be at least 1")
        missing = self.missing_required()
        if missing:
            raise ConfigurationError(
                "Required environment variables are not set: " + ", ".join(missing),
                missing=missing,
            )

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> Settings:
        """Build Settings from the process environment (after loading .env)."""
        from dotenv import load_dotenv
        load_dotenv(env_file)

        try:
            return cls(
                rpc_url=os.getenv("RPC_URL", ""),
                solana_private_key=os.getenv("SOLANA_PRIVATE_KEY", ""),

                llm_provider=os.getenv("LLM_PROVIDER", "openai").lower().strip(),
                llm_model_openai=os.getenv("LLM_MODEL_OPENAI", "gpt-4o-mini"),
                llm_model_groq=os.getenv("LLM_MODEL_GROQ", "llama-3.3-70b-versatile"),
                llm_model_ollama=os.getenv("LLM_MODEL_OLLAMA", "llama3.2"),
                llm_temperature=float(os.getenv("LLM_TEMPERATURE", "0.3")),
                openai_api_key=os.getenv("OPENAI_API_KEY", ""),
                groq_api_key=os.getenv("GROQ_API_KEY", ""),
                ollama_base_url=os.getenv("OLLAMA_BASE_URL", "http://localhost:11434/"),

                agent_max_steps=int(os.getenv("AGENT_MAX_STEPS", "25")),
                agent_busy_policy=os.getenv("AGENT_BUSY_POLICY", "wait").lower().strip(),
                agent_thread_id=os.getenv("AGENT_THREAD_ID", ""),

                host=os.getenv("HOST", "0.0.0.0"),
                port=int(os.getenv("PORT", "3000")),
                log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            )
        except ValueError as exc:
            raise ConfigurationError(f"Invalid numeric setting: {exc}") from exc
