"""Map raw upstream payloads to the stable response shapes.

All shape tolerance lives here: Gamma sometimes returns array fields as JSON
strings (e.g. clobTokenIds: '["abc","def"]'), fields go missing, and the CLOB
client returns either dicts or small objects. Everything downstream can
assume the dataclasses in polymarket_mcp.types.
"""

import json
import re
from typing import Any, List, Optional

from polymarket_mcp.types import (
    BalanceInfo,
    MarketInfo,
    OpenOrder,
    OrderbookEntry,
    OrderbookInfo,
    OrderResult,
    Position,
    TokenInfo,
    TradeInfo,
)

MARKET_URL = "https://polymarket.com/event/{slug}"
DESCRIPTION_MAX_CHARS = 500
DEFAULT_OUTCOMES = ["Yes", "No"]

_EVENT_URL_RE = re.compile(r"polymarket\.com/event/([^/?#]+)")


def ensure_array(value: Any) -> list:
    """Return value as a list; JSON-string arrays are decoded, anything else is []."""
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except (json.JSONDecodeError, ValueError):
            return []
        if isinstance(parsed, list):
            return parsed
    return []


def _field(raw: Any, name: str, default: Any = None) -> Any:
    """Read a field from a dict or an attribute-style object."""
    if raw is None:
        return default
    if isinstance(raw, dict):
        value = raw.get(name, default)
    else:
        value = getattr(raw, name, default)
    return default if value is None else value


def _decimal_str(value: Any, default: str = "0") -> str:
    if value is None or value == "":
        return default
    return str(value)


def _price(value: Any) -> float:
    try:
        return float(value) if value not in (None, "") else 0.0
    except (TypeError, ValueError):
        return 0.0


def extract_slug_from_url(url: str) -> str:
    """Event slug from a polymarket.com/event/<slug> URL, or the input itself minus leading slashes."""
    match = _EVENT_URL_RE.search(url)
    if match:
        return match.group(1)
    return url.lstrip("/")


def format_market(raw: dict) -> MarketInfo:
    outcomes = ensure_array(raw.get("outcomes"))
    prices = ensure_array(raw.get("outcomePrices"))
    token_ids = ensure_array(raw.get("clobTokenIds"))

    outcome_names = outcomes if outcomes else DEFAULT_OUTCOMES
    tokens = [
        TokenInfo(
            token_id=str(token_ids[i]) if i < len(token_ids) and token_ids[i] else "",
            outcome=str(name),
            price=_price(prices[i]) if i < len(prices) else 0.0,
        )
        for i, name in enumerate(outcome_names)
    ]

    slug = raw.get("slug") or None
    description = raw.get("description")
    return MarketInfo(
        condition_id=raw.get("conditionId") or "",
        question=raw.get("question") or "",
        slug=slug,
        url=MARKET_URL.format(slug=slug) if slug else None,
        description=description[:DESCRIPTION_MAX_CHARS] if description else None,
        tokens=tokens,
        volume=_decimal_str(raw.get("volume")),
        liquidity=raw.get("liquidityNum"),
        end_date=raw.get("endDateIso") or raw.get("endDate") or "",
        active=bool(raw.get("active")),
        closed=bool(raw.get("closed")),
        accepting_orders=raw.get("acceptingOrders"),
    )


def format_orderbook(token_id: str, raw: Any) -> OrderbookInfo:
    """Bids and asks 1:1 in upstream order. Missing sides become empty lists."""

    def entries(side: Optional[list]) -> List[OrderbookEntry]:
        return [
            OrderbookEntry(price=_decimal_str(_field(e, "price")), size=_decimal_str(_field(e, "size")))
            for e in side or []
        ]

    return OrderbookInfo(
        token_id=token_id,
        bids=entries(_field(raw, "bids")),
        asks=entries(_field(raw, "asks")),
    )


def format_position(raw: dict) -> Position:
    """Data API /positions record -> Position."""
    return Position(
        token_id=_decimal_str(raw.get("asset"), ""),
        condition_id=raw.get("conditionId") or "",
        market=raw.get("title") or "Unknown",
        outcome=raw.get("outcome") or "Unknown",
        size=_decimal_str(raw.get("size")),
        avg_price=_decimal_str(raw.get("avgPrice")),
        current_price=_decimal_str(raw.get("curPrice")),
        pnl=_decimal_str(raw.get("cashPnl")),
        pnl_percent=_decimal_str(raw.get("percentPnl")),
        redeemable=bool(raw.get("redeemable")),
        mergeable=bool(raw.get("mergeable")),
        slug=raw.get("slug") or "",
        end_date=raw.get("endDate") or "",
    )


def format_open_order(raw: dict) -> OpenOrder:
    return OpenOrder(
        id=raw.get("id") or "",
        token_id=raw.get("asset_id") or "",
        side=raw.get("side") or "",
        price=_decimal_str(raw.get("price")),
        size=_decimal_str(raw.get("original_size")),
        filled=_decimal_str(raw.get("size_matched")),
        outcome=raw.get("outcome") or "Unknown",
        market=raw.get("market") or "Unknown",
    )


def format_trade(raw: dict) -> TradeInfo:
    return TradeInfo(
        id=raw.get("id") or "",
        token_id=raw.get("asset_id") or "",
        side=raw.get("side") or "",
        price=_decimal_str(raw.get("price")),
        size=_decimal_str(raw.get("size")),
        timestamp=_decimal_str(raw.get("timestamp") or raw.get("match_time"), ""),
        status=raw.get("status") or "",
    )


def format_balance(raw: Any, address: str) -> BalanceInfo:
    """Collateral balance/allowance. Newer CLOB responses carry per-spender "allowances"."""
    raw = raw or {}
    allowance = raw.get("allowance")
    if allowance is None and isinstance(raw.get("allowances"), dict) and raw["allowances"]:
        allowance = max(raw["allowances"].values(), key=lambda v: _price(v))
    return BalanceInfo(
        address=address,
        balance=_decimal_str(raw.get("balance")),
        allowance=_decimal_str(allowance),
    )


def format_order_result(raw: Any) -> OrderResult:
    raw = raw if isinstance(raw, dict) else {}
    return OrderResult(
        order_id=raw.get("orderID") or "",
        status=raw.get("status") or "unknown",
        message=raw.get("errorMsg") or None,
    )
