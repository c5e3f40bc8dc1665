"""
Run the Solana Agent Chat REST API.

Usage:
    python run_api.py

Required environment variables (or a .env file):
    OPENAI_API_KEY      Model credential (GROQ_API_KEY when LLM_PROVIDER=groq,
                        none when LLM_PROVIDER=ollama)
    RPC_URL             Solana RPC endpoint, e.g. https://api.devnet.solana.com
    SOLANA_PRIVATE_KEY  Agent wallet key (base58 or solana-keygen JSON array)

Optional:
    LLM_PROVIDER        "openai", "groq", or "ollama" (default: openai)
    LLM_MODEL_OPENAI    Model name when LLM_PROVIDER=openai (default: gpt-4o-mini)
    LLM_TEMPERATURE     Sampling temperature (default: 0.3)
    AGENT_MAX_STEPS     Step budget per turn (default: 25)
    AGENT_BUSY_POLICY   "wait" or "reject" for overlapping turns (default: wait)
    HOST / PORT         Bind address (default: 0.0.0.0:3000)
    LOG_LEVEL           Logging level (default: INFO)
"""

import logging
import sys
from pathlib import Path

# Ensure src/ is importable
sys.path.insert(0, str(Path(__file__).parent / "src"))

import uvicorn

from domain.exceptions import ConfigurationError
from infrastructure.config import Settings


def main() -> None:
    config = Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config.validate()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        for name in exc.missing:
            print(f"{name}=your_{name.lower()}_here", file=sys.stderr)
        sys.exit(1)

    uvicorn.run(
        "adapters.rest.app:app",
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
