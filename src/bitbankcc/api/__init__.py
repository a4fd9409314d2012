"""Request pipeline and client for the bitbank.cc REST API."""

from .client import BitbankClient
from .endpoints import PRIVATE_AUTHORITY, PUBLIC_AUTHORITY, Endpoint, EndpointResolver
from .factory import create_client
from .headers import Credentials, NonceGenerator, RequestHeaderBuilder
from .mapper import decode_json, map_response
from .models import (
    Asset,
    Assets,
    Candlestick,
    CandlestickSeries,
    CandleType,
    CurrencyPair,
    Depth,
    DepthEntry,
    Ohlcv,
    Order,
    Orders,
    Ticker,
    Transaction,
    Transactions,
    WithdrawalFee,
)
from .signer import sign
from .transport import AiohttpTransport, ProxyConfig, RawResponse, Transport

__all__ = [
    "BitbankClient",
    "Endpoint",
    "EndpointResolver",
    "PUBLIC_AUTHORITY",
    "PRIVATE_AUTHORITY",
    "create_client",
    "Credentials",
    "NonceGenerator",
    "RequestHeaderBuilder",
    "decode_json",
    "map_response",
    "Asset",
    "Assets",
    "Candlestick",
    "CandlestickSeries",
    "CandleType",
    "CurrencyPair",
    "Depth",
    "DepthEntry",
    "Ohlcv",
    "Order",
    "Orders",
    "Ticker",
    "Transaction",
    "Transactions",
    "WithdrawalFee",
    "sign",
    "AiohttpTransport",
    "ProxyConfig",
    "RawResponse",
    "Transport",
]
