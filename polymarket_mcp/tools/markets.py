"""Market discovery tools backed by the Gamma API."""

from typing import List, Optional

from loguru import logger
from pydantic import BaseModel, Field

from polymarket_mcp.client import ClobClientWrapper
from polymarket_mcp.errors import UpstreamError
from polymarket_mcp.formatters import extract_slug_from_url, format_market
from polymarket_mcp.tools.base import ToolResult, ToolSpec
from polymarket_mcp.utils.http import get_json


class GetMarketsArgs(BaseModel):
    limit: int = Field(10, ge=1, le=100, description="Number of markets to return (1-100)")
    offset: int = Field(0, ge=0, description="Pagination offset")
    search: Optional[str] = Field(None, description="Case-insensitive substring to match against market slugs")


class GetMarketArgs(BaseModel):
    condition_id: Optional[str] = Field(None, description="Market condition id")
    slug: Optional[str] = Field(None, description="Market slug")
    url: Optional[str] = Field(
        None, description="Full Polymarket URL, e.g. https://polymarket.com/event/btc-updown-15m-1770647400"
    )


def fetch_gamma_markets(wrapper: ClobClientWrapper, limit: int, offset: int, search: Optional[str] = None) -> List[dict]:
    params = {
        "limit": str(limit),
        "offset": str(offset),
        "active": "true",
        "order": "volume24hr",
        "ascending": "false",
    }
    if search:
        params["slug_contains"] = search.lower()
    data = get_json(f"{wrapper.get_gamma_api_url()}/markets", params=params, what="markets")
    return data if isinstance(data, list) else []


def fetch_gamma_market(wrapper: ClobClientWrapper, condition_id: str) -> Optional[dict]:
    """Single market by id; None on 404."""
    try:
        return get_json(f"{wrapper.get_gamma_api_url()}/markets/{condition_id}", what="market")
    except UpstreamError as e:
        if e.status_code == 404:
            return None
        raise


def fetch_gamma_market_by_slug(wrapper: ClobClientWrapper, slug: str) -> Optional[dict]:
    data = get_json(
        f"{wrapper.get_gamma_api_url()}/markets",
        params={"slug": slug, "limit": "1"},
        what="market by slug",
    )
    if not isinstance(data, list) or not data:
        return None
    return data[0]


def get_markets(wrapper: ClobClientWrapper, args: GetMarketsArgs) -> ToolResult:
    markets = fetch_gamma_markets(wrapper, args.limit, args.offset, args.search)
    logger.debug(f"Fetched {len(markets)} markets (limit={args.limit}, offset={args.offset})")
    return ToolResult.ok([format_market(m) for m in markets])


def get_market(wrapper: ClobClientWrapper, args: GetMarketArgs) -> ToolResult:
    condition_id = args.condition_id or None
    slug = args.slug or None
    if args.url:
        slug = extract_slug_from_url(args.url)

    if not condition_id and not slug:
        return ToolResult.error("Provide one of: condition_id, slug, or url")

    if condition_id:
        market = fetch_gamma_market(wrapper, condition_id)
    else:
        market = fetch_gamma_market_by_slug(wrapper, slug)

    if not market:
        return ToolResult.not_found(f"Market not found: {condition_id or slug}")
    return ToolResult.ok(format_market(market))


def market_tools(wrapper: ClobClientWrapper) -> List[ToolSpec]:
    return [
        ToolSpec(
            name="polymarket_get_markets",
            description=(
                "List available prediction markets on Polymarket, sorted by volume. Returns market question, "
                "current prices for Yes/No outcomes, token IDs, volume, liquidity, and Polymarket URL."
            ),
            args_model=GetMarketsArgs,
            handler=lambda args: get_markets(wrapper, args),
            error_prefix="Error fetching markets",
        ),
        ToolSpec(
            name="polymarket_get_market",
            description=(
                "Get detailed information about a specific prediction market including token IDs, current prices, "
                "description, liquidity, and market status.\n"
                "Provide one of: condition_id, slug, or a full Polymarket URL "
                "(e.g. https://polymarket.com/event/btc-updown-15m-1770647400)."
            ),
            args_model=GetMarketArgs,
            handler=lambda args: get_market(wrapper, args),
            error_prefix="Error fetching market",
        ),
    ]
