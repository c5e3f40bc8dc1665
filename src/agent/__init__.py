"""
agent - Conversational agent orchestration layer.

Contains tools, the transcript, prompts, and the turn driver that runs the
engine step loop. Depends on domain/ only. Never imports from infrastructure/.
"""
