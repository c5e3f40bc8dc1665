"""
Run the Solana Agent Chat CLI.

Usage:
    python run_cli.py [COMMAND] [OPTIONS]

Commands:
    check      Verify the required environment variables are set
    wallet     Show the agent wallet address and balance
    ask        One-shot question to the agent
    chat       Interactive chat session

Examples:
    python run_cli.py check
    python run_cli.py ask "request 1 SOL from the faucet"
    python run_cli.py chat

Environment variables: see run_api.py.
"""

import sys
from pathlib import Path

# Ensure src/ is importable
sys.path.insert(0, str(Path(__file__).parent / "src"))

from adapters.cli.main import app

if __name__ == "__main__":
    app()
