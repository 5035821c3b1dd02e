"""Account tools: balance, positions, allowance refresh."""

from typing import List, Optional

from pydantic import BaseModel, Field

from polymarket_mcp.client import ClobClientWrapper
from polymarket_mcp.formatters import format_balance, format_open_order, format_position
from polymarket_mcp.tools.base import NoArgs, ToolResult, ToolSpec
from polymarket_mcp.utils.http import get_json


class GetPositionsArgs(BaseModel):
    redeemable: Optional[bool] = Field(None, description="Only redeemable (true) or only non-redeemable (false) positions")
    market: Optional[str] = Field(None, description="Restrict to one market condition id")
    limit: int = Field(100, ge=1, le=500, description="Maximum positions to return (1-500)")
    include_open_orders: bool = Field(True, description="Also list currently open orders")


def _collateral_params():
    from py_clob_client.clob_types import AssetType, BalanceAllowanceParams

    return BalanceAllowanceParams(asset_type=AssetType.COLLATERAL)


def fetch_positions(wrapper: ClobClientWrapper, args: GetPositionsArgs) -> List[dict]:
    params = {"user": wrapper.get_funder(), "limit": str(args.limit)}
    if args.redeemable is not None:
        params["redeemable"] = "true" if args.redeemable else "false"
    if args.market:
        params["market"] = args.market
    data = get_json(f"{wrapper.get_data_api_url()}/positions", params=params, what="positions")
    return data if isinstance(data, list) else []


def get_balance(wrapper: ClobClientWrapper, args: NoArgs) -> ToolResult:
    client = wrapper.get_client()
    raw = client.get_balance_allowance(_collateral_params())
    return ToolResult.ok(format_balance(raw, wrapper.get_funder()))


def get_positions(wrapper: ClobClientWrapper, args: GetPositionsArgs) -> ToolResult:
    positions = [format_position(p) for p in fetch_positions(wrapper, args)[: args.limit]]
    result = {"positions": positions}
    if args.include_open_orders:
        orders = wrapper.get_client().get_orders() or []
        result["open_orders"] = [format_open_order(o) for o in orders]
    return ToolResult.ok(result)


def update_allowance(wrapper: ClobClientWrapper, args: NoArgs) -> ToolResult:
    client = wrapper.get_client()
    client.update_balance_allowance(_collateral_params())
    raw = client.get_balance_allowance(_collateral_params())
    return ToolResult.ok(format_balance(raw, wrapper.get_funder()))


def account_tools(wrapper: ClobClientWrapper) -> List[ToolSpec]:
    return [
        ToolSpec(
            name="polymarket_get_balance",
            description="Get the USDC balance and allowance for the configured wallet on Polymarket.",
            args_model=NoArgs,
            handler=lambda args: get_balance(wrapper, args),
            error_prefix="Error fetching balance",
        ),
        ToolSpec(
            name="polymarket_get_positions",
            description=(
                "Get positions for the configured wallet with size, average and current price, and P&L. "
                "Optionally filter by redeemable status or market, and list open orders."
            ),
            args_model=GetPositionsArgs,
            handler=lambda args: get_positions(wrapper, args),
            error_prefix="Error fetching positions",
        ),
    ]


def allowance_tools(wrapper: ClobClientWrapper) -> List[ToolSpec]:
    return [
        ToolSpec(
            name="polymarket_update_allowance",
            description=(
                "Ask Polymarket to re-check the on-chain USDC allowance for the configured wallet, "
                "then return the refreshed balance and allowance."
            ),
            args_model=NoArgs,
            handler=lambda args: update_allowance(wrapper, args),
            error_prefix="Error updating allowance",
            write_guard=wrapper.ensure_write_access,
        ),
    ]
