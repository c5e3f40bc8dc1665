"""
infrastructure - Concrete implementations of domain ports.

Contains all vendor-specific code: LangChain, LangGraph, Solana RPC.
Depends on domain/ only (implements ports). Never imported by application/.
"""
