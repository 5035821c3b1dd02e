"""Tests for the order book tool."""

import json

from polymarket_mcp.tools.orderbook import orderbook_tools


def test_orderbook_keeps_bids_and_empty_asks(wrapper, clob):
    clob.order_book = {"bids": [{"price": "0.40", "size": "100"}], "asks": []}
    tool = orderbook_tools(wrapper)[0]

    result = tool.call({"token_id": "12345"})

    assert not result.is_error
    assert json.loads(result.text) == {
        "token_id": "12345",
        "bids": [{"price": "0.40", "size": "100"}],
        "asks": [],
    }
    assert clob.calls == [("get_order_book", ("12345",))]


def test_orderbook_requires_token_id(wrapper, clob):
    tool = orderbook_tools(wrapper)[0]
    for args in ({}, {"token_id": ""}):
        result = tool.call(args)
        assert result.is_error
    assert clob.calls == []


def test_orderbook_upstream_error(wrapper, clob):
    def boom(token_id):
        raise RuntimeError("No orderbook exists for the requested token id")

    clob.get_order_book = boom
    result = orderbook_tools(wrapper)[0].call({"token_id": "1"})
    assert result.is_error
    assert result.text == "Error fetching orderbook: No orderbook exists for the requested token id"
