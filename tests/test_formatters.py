"""Tests for upstream payload normalization."""

from types import SimpleNamespace

import pytest

from polymarket_mcp.formatters import (
    ensure_array,
    extract_slug_from_url,
    format_balance,
    format_market,
    format_open_order,
    format_order_result,
    format_orderbook,
    format_position,
    format_trade,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ('["a","b"]', ["a", "b"]),
        (["a", "b"], ["a", "b"]),
        (None, []),
        ("not json", []),
        ('{"a": 1}', []),
        (42, []),
    ],
)
def test_ensure_array(value, expected):
    assert ensure_array(value) == expected


def _gamma_market(**overrides):
    raw = {
        "conditionId": "0xcond",
        "question": "Will BTC close above $100k?",
        "slug": "btc-above-100k",
        "volume": "12345.6",
        "liquidityNum": 987.5,
        "endDate": "2026-12-31",
        "endDateIso": "2026-12-31T00:00:00Z",
        "description": "Resolves YES if ...",
        "active": True,
        "closed": False,
        "acceptingOrders": True,
        "outcomes": '["Yes","No"]',
        "outcomePrices": '["0.62","0.38"]',
        "clobTokenIds": '["111","222"]',
    }
    raw.update(overrides)
    return raw


def test_format_market_string_encoded_arrays():
    m = format_market(_gamma_market())
    assert m.condition_id == "0xcond"
    assert [(t.token_id, t.outcome, t.price) for t in m.tokens] == [("111", "Yes", 0.62), ("222", "No", 0.38)]
    assert m.url == "https://polymarket.com/event/btc-above-100k"
    assert m.end_date == "2026-12-31T00:00:00Z"
    assert m.liquidity == 987.5
    assert m.accepting_orders is True


def test_format_market_same_result_for_plain_arrays():
    encoded = format_market(_gamma_market())
    plain = format_market(
        _gamma_market(outcomes=["Yes", "No"], outcomePrices=["0.62", "0.38"], clobTokenIds=["111", "222"])
    )
    assert encoded == plain


def test_format_market_defaults_outcomes_to_yes_no():
    raw = _gamma_market()
    del raw["outcomes"]
    del raw["outcomePrices"]
    del raw["clobTokenIds"]
    m = format_market(raw)
    assert [t.outcome for t in m.tokens] == ["Yes", "No"]
    assert len(m.tokens) == 2
    assert all(t.token_id == "" and t.price == 0 for t in m.tokens)


def test_format_market_pads_missing_token_ids():
    m = format_market(_gamma_market(outcomes='["A","B","C"]', clobTokenIds='["1"]', outcomePrices="garbage"))
    assert [t.token_id for t in m.tokens] == ["1", "", ""]
    assert [t.price for t in m.tokens] == [0, 0, 0]


def test_format_market_truncates_description_and_handles_missing_slug():
    m = format_market(_gamma_market(description="x" * 2000, slug=None, endDateIso=None, volume=None))
    assert len(m.description) == 500
    assert m.url is None
    assert m.end_date == "2026-12-31"
    assert m.volume == "0"


def test_format_orderbook_preserves_order_and_fills_missing_side():
    raw = {"bids": [{"price": "0.40", "size": "100"}, {"price": "0.39", "size": "5"}]}
    book = format_orderbook("tok", raw)
    assert [(e.price, e.size) for e in book.bids] == [("0.40", "100"), ("0.39", "5")]
    assert book.asks == []
    assert book.token_id == "tok"


def test_format_orderbook_accepts_summary_objects():
    raw = SimpleNamespace(
        bids=[SimpleNamespace(price="0.5", size="10")],
        asks=None,
    )
    book = format_orderbook("tok", raw)
    assert [(e.price, e.size) for e in book.bids] == [("0.5", "10")]
    assert book.asks == []


def test_format_position_defaults():
    p = format_position({"asset": "123", "size": 10.5, "avgPrice": 0.4, "curPrice": 0.55, "cashPnl": 1.575})
    assert p.token_id == "123"
    assert p.market == "Unknown"
    assert p.outcome == "Unknown"
    assert p.slug == ""
    assert p.end_date == ""
    assert (p.size, p.avg_price, p.current_price, p.pnl, p.pnl_percent) == ("10.5", "0.4", "0.55", "1.575", "0")
    assert p.redeemable is False


def test_format_trade_timestamp_fallback():
    t = format_trade({"id": "t1", "asset_id": "tok", "side": "BUY", "price": "0.5", "size": "2", "match_time": "1700000000", "status": "MATCHED"})
    assert t.timestamp == "1700000000"
    t2 = format_trade({"id": "t2", "timestamp": "1800000000", "match_time": "1700000000"})
    assert t2.timestamp == "1800000000"


def test_format_open_order():
    o = format_open_order({"id": "o1", "asset_id": "tok", "side": "SELL", "price": "0.7", "original_size": "20", "size_matched": "5"})
    assert (o.id, o.token_id, o.size, o.filled, o.outcome) == ("o1", "tok", "20", "5", "Unknown")


def test_format_balance_allowances_map():
    b = format_balance({"balance": "250", "allowances": {"0xa": "0", "0xb": "1000"}}, "0xme")
    assert (b.address, b.balance, b.allowance) == ("0xme", "250", "1000")
    empty = format_balance(None, "0xme")
    assert (empty.balance, empty.allowance) == ("0", "0")


def test_format_order_result_rejected():
    r = format_order_result({"errorMsg": "not enough balance"})
    assert r.order_id == ""
    assert r.status == "unknown"
    assert r.message == "not enough balance"


@pytest.mark.parametrize(
    "url, slug",
    [
        ("https://polymarket.com/event/btc-updown-15m-1770647400?x=1", "btc-updown-15m-1770647400"),
        ("polymarket.com/event/some-slug#frag", "some-slug"),
        ("https://polymarket.com/event/election/sub-market", "election"),
        ("btc-updown-15m-1770647400", "btc-updown-15m-1770647400"),
        ("//bare-slug", "bare-slug"),
    ],
)
def test_extract_slug_from_url(url, slug):
    assert extract_slug_from_url(url) == slug
