"""Trading tools: trade history (read-only) plus order placement and cancellation."""

from typing import List, Literal, Tuple

from loguru import logger
from pydantic import BaseModel, Field, field_validator

from polymarket_mcp.client import ClobClientWrapper
from polymarket_mcp.formatters import format_order_result, format_trade
from polymarket_mcp.tools.base import ToolResult, ToolSpec, parse_decimal

DEFAULT_TICK_SIZE = "0.01"

MARKET_ORDER_DESCRIPTION = """Place a market order on Polymarket for immediate execution.
CAUTION: This executes a REAL trade with REAL funds at market price!

**Parameters:**
- token_id: The token to trade
- side: "BUY" or "SELL"
- amount: For BUY, USD amount to spend. For SELL, number of shares to sell.
- order_type: "FOK" (Fill or Kill, default) or "FAK" (Fill and Kill, allows partial fills)

**Examples:**
- BUY $10 worth of Yes tokens: side="BUY", amount="10"
- SELL 5 shares at market: side="SELL", amount="5"
"""


def _positive(value: str) -> str:
    if parse_decimal(value) <= 0:
        raise ValueError("must be a positive number")
    return value


class GetTradesArgs(BaseModel):
    limit: int = Field(20, ge=1, le=100, description="Number of recent trades to return (1-100)")


class PlaceOrderArgs(BaseModel):
    token_id: str = Field(..., min_length=1)
    side: Literal["BUY", "SELL"]
    size: str = Field(..., description="Number of shares, e.g. \"10\"")
    price: str = Field(..., description="Limit price strictly between 0 and 1, e.g. \"0.45\"")

    @field_validator("size")
    @classmethod
    def _check_size(cls, v: str) -> str:
        try:
            return _positive(v)
        except ValueError as e:
            raise ValueError(f"Size must be a positive number ({e})") from e

    @field_validator("price")
    @classmethod
    def _check_price(cls, v: str) -> str:
        try:
            p = parse_decimal(v)
        except ValueError as e:
            raise ValueError(f"Price must be between 0 and 1 (exclusive) ({e})") from e
        if not 0 < p < 1:
            raise ValueError("Price must be between 0 and 1 (exclusive)")
        return v


class PlaceMarketOrderArgs(BaseModel):
    token_id: str = Field(..., min_length=1)
    side: Literal["BUY", "SELL"]
    amount: str = Field(..., description="USD to spend for BUY, shares to sell for SELL")
    order_type: Literal["FOK", "FAK"] = "FOK"

    @field_validator("amount")
    @classmethod
    def _check_amount(cls, v: str) -> str:
        try:
            return _positive(v)
        except ValueError as e:
            raise ValueError(f"Amount must be a positive number ({e})") from e


class CancelOrderArgs(BaseModel):
    order_id: str = Field(..., min_length=1)


def _side(side: str) -> str:
    from py_clob_client.order_builder.constants import BUY, SELL

    return BUY if side == "BUY" else SELL


def get_market_info_for_token(client, token_id: str) -> Tuple[str, bool]:
    """(tick_size, neg_risk) for a token. Best-effort: each falls back to its default on its own."""
    tick_size, neg_risk = DEFAULT_TICK_SIZE, False
    try:
        tick_size = str(client.get_tick_size(token_id) or DEFAULT_TICK_SIZE)
    except Exception as e:
        logger.debug(f"Tick size lookup failed for {token_id[:20]}: {e}")
    try:
        neg_risk = bool(client.get_neg_risk(token_id))
    except Exception as e:
        logger.debug(f"Neg risk lookup failed for {token_id[:20]}: {e}")
    return tick_size, neg_risk


def get_trades(wrapper: ClobClientWrapper, args: GetTradesArgs) -> ToolResult:
    client = wrapper.get_client()
    trades = client.get_trades() or []
    return ToolResult.ok([format_trade(t) for t in trades[: args.limit]])


def place_order(wrapper: ClobClientWrapper, args: PlaceOrderArgs) -> ToolResult:
    from py_clob_client.clob_types import OrderArgs, OrderType, PartialCreateOrderOptions

    client = wrapper.get_client()
    tick_size, neg_risk = get_market_info_for_token(client, args.token_id)

    order_args = OrderArgs(
        token_id=args.token_id,
        price=float(args.price),
        size=float(args.size),
        side=_side(args.side),
        fee_rate_bps=0,
    )
    signed = client.create_order(order_args, PartialCreateOrderOptions(tick_size=tick_size, neg_risk=neg_risk))
    resp = client.post_order(signed, OrderType.GTC)
    result = format_order_result(resp)
    logger.info(f"Limit order {args.side} {args.size} @ {args.price} on {args.token_id[:20]}: {result.status}")

    return ToolResult.ok(
        {
            "order_id": result.order_id,
            "status": result.status,
            "message": result.message,
            "order_details": {
                "token_id": args.token_id,
                "side": args.side,
                "size": args.size,
                "price": args.price,
                "tick_size": tick_size,
                "neg_risk": neg_risk,
            },
        }
    )


def place_market_order(wrapper: ClobClientWrapper, args: PlaceMarketOrderArgs) -> ToolResult:
    from py_clob_client.clob_types import MarketOrderArgs, OrderType

    client = wrapper.get_client()
    order_type = OrderType.FAK if args.order_type == "FAK" else OrderType.FOK

    # amount is dollars for BUY and shares for SELL; the CLOB client interprets it by side
    mo = MarketOrderArgs(
        token_id=args.token_id,
        amount=float(args.amount),
        side=_side(args.side),
        order_type=order_type,
    )
    signed = client.create_market_order(mo)
    resp = client.post_order(signed, order_type)
    result = format_order_result(resp)
    logger.info(f"Market order {args.side} {args.amount} ({args.order_type}) on {args.token_id[:20]}: {result.status}")

    return ToolResult.ok(
        {
            "order_id": result.order_id,
            "status": result.status,
            "message": result.message,
            "order_details": {
                "token_id": args.token_id,
                "side": args.side,
                "amount": args.amount,
                "order_type": args.order_type,
                "type": "MARKET",
            },
        }
    )


def cancel_order(wrapper: ClobClientWrapper, args: CancelOrderArgs) -> ToolResult:
    """Reports "cancelled" on upstream acknowledgement; open orders are not re-checked."""
    client = wrapper.get_client()
    resp = client.cancel(args.order_id)
    logger.info(f"Cancel requested for order {args.order_id}")
    return ToolResult.ok({"order_id": args.order_id, "status": "cancelled", "response": resp})


def trade_history_tools(wrapper: ClobClientWrapper) -> List[ToolSpec]:
    return [
        ToolSpec(
            name="polymarket_get_trades",
            description="Get recent executed trades for the configured wallet.",
            args_model=GetTradesArgs,
            handler=lambda args: get_trades(wrapper, args),
            error_prefix="Error fetching trades",
        ),
    ]


def order_tools(wrapper: ClobClientWrapper) -> List[ToolSpec]:
    guard = wrapper.ensure_write_access
    return [
        ToolSpec(
            name="polymarket_place_order",
            description=(
                "Place a limit order on Polymarket. CAUTION: This executes a real trade with real funds. "
                "Price must be between 0 and 1, size in shares."
            ),
            args_model=PlaceOrderArgs,
            handler=lambda args: place_order(wrapper, args),
            error_prefix="Error placing order",
            write_guard=guard,
        ),
        ToolSpec(
            name="polymarket_place_market_order",
            description=MARKET_ORDER_DESCRIPTION,
            args_model=PlaceMarketOrderArgs,
            handler=lambda args: place_market_order(wrapper, args),
            error_prefix="Error placing market order",
            write_guard=guard,
        ),
        ToolSpec(
            name="polymarket_cancel_order",
            description="Cancel an existing order on Polymarket.",
            args_model=CancelOrderArgs,
            handler=lambda args: cancel_order(wrapper, args),
            error_prefix="Error cancelling order",
            write_guard=guard,
        ),
    ]
