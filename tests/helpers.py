"""Shared test helpers."""

import json
from unittest.mock import AsyncMock, MagicMock

from bitbankcc.api.transport import RawResponse

GOLDEN_NONCE = 1680000000000

# HMAC-SHA256 with secret "abc"
GOLDEN_ASSETS_SIGNATURE = "0a324baf4132f736368d9d3c289d0d7c5b828bf8c92c2081c475c4b6211831d6"
GOLDEN_ORDER_SIGNATURE = "7f7ef9e946cdac1f6661be1df5b9a49f4469aca7ff8ab9e983bb8c53153dc2bb"
GOLDEN_ORDERS_INFO_SIGNATURE = "45ae192414923117a557fcc677792b83e98cab3b213be9227936c1aa0458069e"


def make_transport(payload=None, status=200, body=None):
    """Create a mock transport answering every request with one response."""
    if body is None:
        body = json.dumps(payload).encode()
    transport = MagicMock()
    transport.request = AsyncMock(return_value=RawResponse(status, body))
    transport.close = AsyncMock()
    return transport


def envelope(data, success=1):
    return {"success": success, "data": data}
