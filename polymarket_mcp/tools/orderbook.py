"""Order book tool."""

from typing import List

from pydantic import BaseModel, Field

from polymarket_mcp.client import ClobClientWrapper
from polymarket_mcp.formatters import format_orderbook
from polymarket_mcp.tools.base import ToolResult, ToolSpec


class GetOrderbookArgs(BaseModel):
    token_id: str = Field(..., min_length=1, description="Outcome token id")


def get_orderbook(wrapper: ClobClientWrapper, args: GetOrderbookArgs) -> ToolResult:
    client = wrapper.get_client()
    book = client.get_order_book(args.token_id)
    return ToolResult.ok(format_orderbook(args.token_id, book))


def orderbook_tools(wrapper: ClobClientWrapper) -> List[ToolSpec]:
    return [
        ToolSpec(
            name="polymarket_get_orderbook",
            description="Get the order book for a specific token showing current bids and asks with prices and sizes.",
            args_model=GetOrderbookArgs,
            handler=lambda args: get_orderbook(wrapper, args),
            error_prefix="Error fetching orderbook",
        ),
    ]
