"""Pytest configuration and fixtures."""

import pytest

from bitbankcc.api.headers import Credentials, NonceGenerator

from helpers import GOLDEN_NONCE


@pytest.fixture
def api_key():
    """Test API key."""
    return "test_api_key_123456"


@pytest.fixture
def api_secret():
    """Test API secret."""
    return "abc"


@pytest.fixture
def credentials(api_key, api_secret):
    return Credentials(api_key, api_secret)


@pytest.fixture
def fixed_nonce():
    """Nonce generator whose first value is the golden nonce."""
    return NonceGenerator(clock=lambda: GOLDEN_NONCE)


@pytest.fixture
def ticker_data():
    return {
        "sell": "4500100",
        "buy": "4500000",
        "open": "4400000",
        "high": "4600000",
        "low": "4300000",
        "last": "4500050.5",
        "vol": "123.4567",
        "timestamp": 1680000000000,
    }


@pytest.fixture
def depth_data():
    return {
        "asks": [["4500100", "0.5"], ["4500200", "1.25"]],
        "bids": [["4500000", "0.1"], ["4499900", "2.0001"]],
        "asks_over": "100.1",
        "bids_under": "80.2",
        "timestamp": 1680000000123,
        "sequenceId": "8832142",
    }


@pytest.fixture
def candlestick_data():
    return {
        "candlestick": [
            {
                "type": "1hour",
                "ohlcv": [
                    ["4500000", "4510000", "4490000", "4505000", "12.3456", 1680000000000],
                    ["4505000", "4520000", "4500000", "4515000", "3.21", 1680003600000],
                ],
            }
        ],
        "timestamp": 1680007200000,
    }


@pytest.fixture
def transactions_data():
    return {
        "transactions": [
            {
                "transaction_id": 100001,
                "side": "buy",
                "price": "4500000",
                "amount": "0.0123",
                "executed_at": 1680000000500,
            },
            {
                "transaction_id": 100002,
                "side": "sell",
                "price": "4499990",
                "amount": "0.5",
                "executed_at": 1680000000900,
            },
        ]
    }


@pytest.fixture
def assets_data():
    return {
        "assets": [
            {
                "asset": "jpy",
                "free_amount": "100000.0000",
                "amount_precision": 4,
                "onhand_amount": "150000.0000",
                "locked_amount": "50000.0000",
                "withdrawal_fee": {"threshold": "30000.0000", "under": "550.0000", "over": "770.0000"},
                "stop_deposit": False,
                "stop_withdrawal": False,
            },
            {
                "asset": "btc",
                "free_amount": "0.12345678",
                "amount_precision": 8,
                "onhand_amount": "0.22345678",
                "locked_amount": "0.10000000",
                "withdrawal_fee": "0.0006",
                "stop_deposit": False,
                "stop_withdrawal": True,
                "collateral_ratio": "0.85",
            },
        ]
    }


@pytest.fixture
def order_data():
    return {
        "order_id": 42,
        "pair": "btc_jpy",
        "side": "buy",
        "type": "limit",
        "start_amount": "0.01",
        "remaining_amount": "0.004",
        "executed_amount": "0.006",
        "price": "4500000",
        "average_price": "4499000",
        "ordered_at": 1680000000000,
        "status": "PARTIALLY_FILLED",
    }
