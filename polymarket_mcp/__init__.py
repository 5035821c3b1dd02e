"""Polymarket MCP server: market data, account and trading tools for AI agents."""

__version__ = "1.0.0"
