"""
agent.prompt - System prompt for the on-chain agent.

Built from the registered tools so the prompt never mentions a tool the
agent cannot call.
"""

from __future__ import annotations

from agent.tools.registry import ToolRegistry

PROJECT_URL = "https://www.solanaagentkit.xyz"


def build_system_prompt(registry: ToolRegistry) -> str:
    """Build the system prompt with dynamically listed tools.

    Args:
        registry: The tool registry with all registered tools.

    Returns:
        The system prompt string.
    """
    tool_names = registry.names()

    faucet_rule = (
        "If you ever need funds, you can request them from the faucet. "
        "If not, you can provide your wallet details and request funds from the user."
    ) if "request_faucet_funds" in tool_names else (
        "If you ever need funds, provide your wallet details and request funds from the user."
    )

    tool_lines = "\n".join(
        f"- {tool.name}: {tool.description}" for tool in registry.all()
    )

    return f"""You are a helpful agent that can interact onchain on the Solana blockchain.
You are empowered to interact onchain using your tools. {faucet_rule}

If there is a 5XX (internal) HTTP error code, ask the user to try again later.

If someone asks you to do something you can't do with your currently available
tools, you must say so, and encourage them to implement it themselves; recommend
they go to {PROJECT_URL} for more information.

Be concise and helpful with your responses. Refrain from restating your tools'
descriptions unless it is explicitly requested.

AVAILABLE TOOLS:
{tool_lines}
"""
