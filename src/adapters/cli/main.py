"""
adapters.cli.main - CLI adapter for the Solana agent chat service.

Mirrors src/adapters/rest/ but for terminal use. Uses the same
ServiceFactory and ChatSessionService as the REST API so all behaviour
(lazy agent binding, step budget, error handling) is identical.

Commands
--------
  check      Verify the required environment variables are set
  wallet     Show the agent wallet address and balance
  ask        One-shot question to the agent
  chat       Interactive chat session (one conversation until you exit)

Usage
-----
  python run_cli.py check
  python run_cli.py ask "what is my SOL balance?"
  python run_cli.py chat
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

# ── Ensure src/ is on the path ──
_SRC = Path(__file__).resolve().parent.parent.parent
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from application.services.chat_session import ChatSessionService
from domain.exceptions import (
    ConfigurationError,
    DomainError,
    InitializationFailure,
    TurnBudgetExceeded,
)
from factory import ServiceFactory
from infrastructure.config import Settings

__version__ = "0.1.0"

console = Console()
app = typer.Typer(
    help="Solana Agent Chat CLI",
    add_completion=False,
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _load_settings() -> Settings:
    """Load and validate settings, or exit listing what is missing."""
    try:
        config = Settings.from_env()
        config.validate()
    except ConfigurationError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        for name in exc.missing:
            console.print(f"  {name}=your_{name.lower()}_here")
        raise typer.Exit(code=1)
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    return config


async def _send(service: ChatSessionService, text: str) -> str | None:
    """Run one turn, printing a friendly message on failure."""
    try:
        with console.status("[bold cyan]Thinking…", spinner="dots"):
            result = await service.handle_turn(text)
    except InitializationFailure as exc:
        console.print(f"[bold red]Could not start the agent:[/bold red] {exc}")
        return None
    except TurnBudgetExceeded as exc:
        console.print(f"[bold yellow]Stopped:[/bold yellow] {exc}")
        return None
    except DomainError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        return None
    return result.text


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"solana-agent-chat v{__version__}")
        raise typer.Exit()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command()
def check() -> None:
    """Verify configuration without contacting any service."""
    config = _load_settings()
    table = Table(title="Configuration", show_header=False)
    table.add_row("LLM provider", config.llm_provider)
    table.add_row("Model", config.active_llm_model)
    table.add_row("RPC URL", config.rpc_url)
    table.add_row("Max steps per turn", str(config.agent_max_steps))
    table.add_row("Busy policy", config.agent_busy_policy)
    console.print(table)
    console.print("[green]All required settings are present.[/green]")


@app.command()
def wallet() -> None:
    """Show the agent wallet address and its SOL balance."""
    config = _load_settings()

    async def _run() -> None:
        factory = ServiceFactory(config)
        try:
            agent_wallet = factory.get_wallet()
            with console.status("[bold cyan]Querying RPC…", spinner="dots"):
                balance = await agent_wallet.get_balance()
            console.print(Panel(
                f"Address: [bold]{agent_wallet.address}[/bold]\nBalance: {balance:g} SOL",
                title="Agent wallet",
                border_style="cyan",
            ))
        except DomainError as exc:
            console.print(f"[bold red]Error:[/bold red] {exc}")
            raise typer.Exit(code=1)
        finally:
            await factory.aclose()

    asyncio.run(_run())


@app.command()
def ask(
    query: str = typer.Argument(..., help="Your question or instruction for the agent."),
) -> None:
    """Ask the agent a one-shot question."""
    config = _load_settings()

    async def _run() -> int:
        factory = ServiceFactory(config)
        try:
            response = await _send(factory.create_chat_session_service(), query)
        finally:
            await factory.aclose()
        if response is None:
            return 1
        console.print(Panel(Markdown(response or "_(no reply)_"), title="Agent", border_style="green"))
        return 0

    code = asyncio.run(_run())
    if code:
        raise typer.Exit(code=code)


@app.command()
def chat() -> None:
    """Start an interactive chat session."""
    config = _load_settings()

    async def _run() -> None:
        factory = ServiceFactory(config)
        service = factory.create_chat_session_service()

        console.print(Panel(
            "[bold]Solana Agent Chat[/bold]\n"
            f"Model [bold]{config.active_llm_model}[/bold] on {config.rpc_url}\n"
            "Type your message, or [bold]exit[/bold] / [bold]quit[/bold] to stop.",
            border_style="cyan",
        ))

        try:
            while True:
                try:
                    user_input = Prompt.ask("\n[bold cyan]You[/bold cyan]")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                if user_input.strip().lower() in ("exit", "quit", "q", "bye"):
                    console.print("[dim]Goodbye![/dim]")
                    break

                if not user_input.strip():
                    continue

                response = await _send(service, user_input)
                if response is not None:
                    console.print()
                    console.print(Panel(Markdown(response or "_(no reply)_"), title="Agent", border_style="green"))
        finally:
            await factory.aclose()

    asyncio.run(_run())


# ---------------------------------------------------------------------------
# Global version option
# ---------------------------------------------------------------------------

@app.callback()
def _callback(
    version: bool = typer.Option(
        False, "--version", "-v",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Solana Agent Chat CLI"""


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
