"""Tool registry: the set of tools exposed for a given configuration."""

from typing import List

from loguru import logger

from polymarket_mcp.client import ClobClientWrapper
from polymarket_mcp.tools.account import account_tools, allowance_tools
from polymarket_mcp.tools.base import ToolResult, ToolSpec
from polymarket_mcp.tools.markets import market_tools
from polymarket_mcp.tools.news import news_tools
from polymarket_mcp.tools.orderbook import orderbook_tools
from polymarket_mcp.tools.trading import order_tools, trade_history_tools

__all__ = ["ToolResult", "ToolSpec", "build_tools"]


def build_tools(wrapper: ClobClientWrapper) -> List[ToolSpec]:
    """Read-only tools always; mutating tools only when not in readonly mode.

    In readonly mode the mutating tools are left out of the listing entirely;
    each of them also calls ensure_write_access() on every call.
    """
    readonly = wrapper.is_readonly()

    tools: List[ToolSpec] = []
    tools += market_tools(wrapper)
    tools += orderbook_tools(wrapper)
    tools += account_tools(wrapper)
    tools += trade_history_tools(wrapper)
    tools += news_tools()

    if readonly:
        logger.info("Readonly mode: trading tools (place_order, cancel_order, etc.) disabled")
    else:
        tools += order_tools(wrapper)
        tools += allowance_tools(wrapper)

    logger.info(f"Registered {len(tools)} tools (readonly: {readonly})")
    return tools
