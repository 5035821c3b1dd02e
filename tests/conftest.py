"""Shared fixtures: fake CLOB client and stubbed HTTP for the upstream APIs."""

import sys
import os

import pytest

# Ensure the package is importable when running tests from repo root
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from polymarket_mcp.client import ClobClientWrapper
from polymarket_mcp.config import Config
from polymarket_mcp.utils import http

# Well-known Hardhat test account #0, never funded on mainnet
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


class FakeClob:
    """Records every call; return values are set per test."""

    def __init__(self):
        self.calls = []
        self.order_book = {"bids": [], "asks": []}
        self.balance = {"balance": "1000000", "allowance": "5000000"}
        self.orders = []
        self.trades = []
        self.tick_size = "0.001"
        self.neg_risk = True
        self.tick_size_error = None
        self.neg_risk_error = None
        self.post_response = {"orderID": "0xorder", "status": "live"}
        self.cancel_response = {"canceled": ["0xorder"], "not_canceled": {}}

    def _record(self, name, *args):
        self.calls.append((name, args))

    def call_names(self):
        return [c[0] for c in self.calls]

    def get_order_book(self, token_id):
        self._record("get_order_book", token_id)
        return self.order_book

    def get_balance_allowance(self, params=None):
        self._record("get_balance_allowance", params)
        return self.balance

    def update_balance_allowance(self, params=None):
        self._record("update_balance_allowance", params)

    def get_orders(self, params=None):
        self._record("get_orders", params)
        return self.orders

    def get_trades(self, params=None):
        self._record("get_trades", params)
        return self.trades

    def get_tick_size(self, token_id):
        self._record("get_tick_size", token_id)
        if self.tick_size_error:
            raise self.tick_size_error
        return self.tick_size

    def get_neg_risk(self, token_id):
        self._record("get_neg_risk", token_id)
        if self.neg_risk_error:
            raise self.neg_risk_error
        return self.neg_risk

    def create_order(self, order_args, options=None):
        self._record("create_order", order_args, options)
        return {"signed": order_args}

    def create_market_order(self, order_args, options=None):
        self._record("create_market_order", order_args, options)
        return {"signed": order_args}

    def post_order(self, order, order_type=None):
        self._record("post_order", order, order_type)
        return self.post_response

    def cancel(self, order_id):
        self._record("cancel", order_id)
        return self.cancel_response


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, text="", reason="OK"):
        self.status_code = status_code
        self._json = json_data
        self.text = text
        self.reason = reason

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        return self._json


class FakeHTTP:
    """Stand-in for requests.get; queue responses, inspect requests."""

    def __init__(self):
        self.requests = []
        self.responses = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def __call__(self, url, params=None, timeout=None, headers=None):
        self.requests.append({"url": url, "params": params or {}, "timeout": timeout})
        if not self.responses:
            raise AssertionError(f"unexpected request to {url}")
        return self.responses.pop(0)


@pytest.fixture
def config():
    return Config(private_key=TEST_PRIVATE_KEY, funder=TEST_ADDRESS)


@pytest.fixture
def readonly_config():
    return Config(private_key=TEST_PRIVATE_KEY, funder=TEST_ADDRESS, readonly=True)


@pytest.fixture
def clob():
    return FakeClob()


@pytest.fixture
def wrapper(config, clob):
    return ClobClientWrapper(config, client=clob)


@pytest.fixture
def readonly_wrapper(readonly_config, clob):
    return ClobClientWrapper(readonly_config, client=clob)


@pytest.fixture
def fake_http(monkeypatch):
    fake = FakeHTTP()
    monkeypatch.setattr(http.requests, "get", fake)
    return fake
