"""Response shapes returned by the tools. Serialized with dataclasses.asdict."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class TokenInfo:
    token_id: str
    outcome: str
    price: float


@dataclass
class MarketInfo:
    """Gamma market normalized to a stable shape."""

    condition_id: str
    question: str
    slug: Optional[str]
    url: Optional[str]
    description: Optional[str]
    tokens: List[TokenInfo]
    volume: str
    liquidity: Optional[float]
    end_date: str
    active: bool
    closed: bool
    accepting_orders: Optional[bool] = None


@dataclass
class OrderbookEntry:
    price: str
    size: str


@dataclass
class OrderbookInfo:
    token_id: str
    bids: List[OrderbookEntry] = field(default_factory=list)
    asks: List[OrderbookEntry] = field(default_factory=list)


@dataclass
class Position:
    """Sizes and prices are decimal strings to avoid float rounding."""

    token_id: str
    condition_id: str
    market: str
    outcome: str
    size: str
    avg_price: str
    current_price: str
    pnl: str
    pnl_percent: str
    redeemable: bool
    mergeable: bool
    slug: str
    end_date: str


@dataclass
class OpenOrder:
    id: str
    token_id: str
    side: str
    price: str
    size: str
    filled: str
    outcome: str
    market: str


@dataclass
class TradeInfo:
    id: str
    token_id: str
    side: str
    price: str
    size: str
    timestamp: str
    status: str


@dataclass
class BalanceInfo:
    address: str
    balance: str
    allowance: str


@dataclass
class OrderResult:
    order_id: str  # empty when the order was rejected
    status: str
    message: Optional[str] = None


@dataclass
class NewsHeadline:
    title: str
    source: str
    pub_date: str
    link: str
