"""bitbankcc: async client for the bitbank.cc exchange API."""

from .settings import Settings
from .errors import (
    AuthenticationError,
    BitbankError,
    ConfigurationError,
    DecodeError,
    ExchangeError,
    InvalidPathError,
    TransportError,
)
from .api import BitbankClient, CandleType, Credentials, CurrencyPair, create_client

__all__ = [
    "Settings",
    "BitbankClient",
    "CandleType",
    "Credentials",
    "CurrencyPair",
    "create_client",
    "BitbankError",
    "ConfigurationError",
    "AuthenticationError",
    "InvalidPathError",
    "TransportError",
    "ExchangeError",
    "DecodeError",
]
