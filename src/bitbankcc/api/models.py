"""Domain models returned by the client.

Prices and amounts are ``Decimal``; timestamps are integer milliseconds since
the epoch. Every model validates directly from the ``data`` member of the
exchange's response envelope.
"""

from __future__ import annotations

from decimal import Decimal
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, model_validator

_MODEL_CONFIG = {"frozen": True, "extra": "ignore", "populate_by_name": True}


class CurrencyPair(StrEnum):
    """Listed spot pairs. Operations also accept any ``base_quote`` string."""

    BTC_JPY = "btc_jpy"
    XRP_JPY = "xrp_jpy"
    XRP_BTC = "xrp_btc"
    LTC_JPY = "ltc_jpy"
    LTC_BTC = "ltc_btc"
    ETH_JPY = "eth_jpy"
    ETH_BTC = "eth_btc"
    MONA_JPY = "mona_jpy"
    MONA_BTC = "mona_btc"
    BCC_JPY = "bcc_jpy"
    BCC_BTC = "bcc_btc"
    XLM_JPY = "xlm_jpy"
    XLM_BTC = "xlm_btc"
    QTUM_JPY = "qtum_jpy"
    BAT_JPY = "bat_jpy"
    DOT_JPY = "dot_jpy"
    DOGE_JPY = "doge_jpy"
    SOL_JPY = "sol_jpy"


class CandleType(StrEnum):
    """Candlestick bar intervals."""

    MIN_1 = "1min"
    MIN_5 = "5min"
    MIN_15 = "15min"
    MIN_30 = "30min"
    HOUR_1 = "1hour"
    HOUR_4 = "4hour"
    HOUR_8 = "8hour"
    HOUR_12 = "12hour"
    DAY_1 = "1day"
    WEEK_1 = "1week"
    MONTH_1 = "1month"

    @property
    def yearly(self) -> bool:
        """Whether the exchange indexes this interval by year (``YYYY``)."""
        return self in _YEARLY_CANDLE_TYPES


_YEARLY_CANDLE_TYPES = frozenset(
    {
        CandleType.HOUR_4,
        CandleType.HOUR_8,
        CandleType.HOUR_12,
        CandleType.DAY_1,
        CandleType.WEEK_1,
        CandleType.MONTH_1,
    }
)


def _unpack_row(value: Any, fields: tuple[str, ...]) -> Any:
    if isinstance(value, (list, tuple)):
        if len(value) != len(fields):
            raise ValueError(f"expected {len(fields)} elements, got {len(value)}")
        return dict(zip(fields, value))
    return value


class Ticker(BaseModel):
    model_config = _MODEL_CONFIG

    sell: Decimal | None = None
    buy: Decimal | None = None
    open: Decimal | None = None
    high: Decimal
    low: Decimal
    last: Decimal
    vol: Decimal
    timestamp: int


class DepthEntry(BaseModel):
    """One order-book level, sent on the wire as ``[price, amount]``."""

    model_config = _MODEL_CONFIG

    price: Decimal
    amount: Decimal

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, value: Any) -> Any:
        return _unpack_row(value, ("price", "amount"))


class Depth(BaseModel):
    model_config = _MODEL_CONFIG

    asks: list[DepthEntry]
    bids: list[DepthEntry]
    timestamp: int
    sequence_id: int | None = Field(default=None, alias="sequenceId")


class Ohlcv(BaseModel):
    """One bar, sent on the wire as ``[open, high, low, close, volume, timestamp]``."""

    model_config = _MODEL_CONFIG

    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal
    timestamp: int

    @model_validator(mode="before")
    @classmethod
    def _from_row(cls, value: Any) -> Any:
        return _unpack_row(value, ("open", "high", "low", "close", "volume", "timestamp"))


class CandlestickSeries(BaseModel):
    model_config = _MODEL_CONFIG

    type: CandleType
    ohlcv: list[Ohlcv]


class Candlestick(BaseModel):
    model_config = _MODEL_CONFIG

    candlestick: list[CandlestickSeries]
    timestamp: int | None = None


class Transaction(BaseModel):
    model_config = _MODEL_CONFIG

    transaction_id: int
    side: str
    price: Decimal
    amount: Decimal
    executed_at: int


class Transactions(BaseModel):
    model_config = _MODEL_CONFIG

    transactions: list[Transaction]


class WithdrawalFee(BaseModel):
    """Tiered withdrawal fee used for fiat assets."""

    model_config = _MODEL_CONFIG

    threshold: Decimal
    under: Decimal
    over: Decimal


class Asset(BaseModel):
    model_config = _MODEL_CONFIG

    asset: str
    free_amount: Decimal
    amount_precision: int
    onhand_amount: Decimal
    locked_amount: Decimal
    withdrawal_fee: Decimal | WithdrawalFee | None = None
    stop_deposit: bool = False
    stop_withdrawal: bool = False


class Assets(BaseModel):
    model_config = _MODEL_CONFIG

    assets: list[Asset]

    def get(self, asset: str) -> Asset | None:
        """Return the balance for ``asset`` (case-insensitive) if listed."""
        wanted = asset.lower()
        for item in self.assets:
            if item.asset.lower() == wanted:
                return item
        return None


class Order(BaseModel):
    model_config = _MODEL_CONFIG

    order_id: int
    pair: str
    side: str
    type: str
    start_amount: Decimal | None = None
    remaining_amount: Decimal | None = None
    executed_amount: Decimal
    price: Decimal | None = None
    average_price: Decimal
    ordered_at: int
    status: str


class Orders(BaseModel):
    model_config = _MODEL_CONFIG

    orders: list[Order]
