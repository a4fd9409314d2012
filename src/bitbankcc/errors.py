"""Exception hierarchy for the bitbank client."""

from __future__ import annotations


class BitbankError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(BitbankError):
    """Missing or invalid configuration, e.g. an empty signing secret."""


class AuthenticationError(BitbankError):
    """A private call needs a signature but no usable credentials are set."""


class InvalidPathError(BitbankError):
    """An endpoint could not be built from the given path or parameters."""


class TransportError(BitbankError):
    """The HTTP exchange could not be completed."""


class ExchangeError(BitbankError):
    """The exchange answered with a failure envelope."""

    def __init__(self, code: int, message: str):
        super().__init__(f"bitbank error {code}: {message}")
        self.code = code
        self.message = message


class DecodeError(BitbankError):
    """The response body does not have the expected shape."""

    def __init__(self, expected: str, observed: str):
        super().__init__(f"expected {expected}, got {observed}")
        self.expected = expected
        self.observed = observed
