"""Mapping of the exchange's response envelope into typed results."""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import DecodeError, ExchangeError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# Documented bitbank error codes, used when the envelope carries no message.
ERROR_MESSAGES: dict[int, str] = {
    10000: "URL does not exist",
    10001: "system error",
    10002: "invalid JSON format",
    10003: "system error",
    10005: "timeout error",
    20001: "API authentication failed",
    20002: "invalid API key",
    20003: "API key does not exist",
    20004: "API nonce does not exist",
    20005: "API signature does not exist",
    20011: "two-step verification failed",
    20014: "SMS authentication failed",
    30001: "order quantity not specified",
    30006: "order ID not specified",
    30007: "order ID array not specified",
    30009: "stock not specified",
    40001: "invalid order quantity",
    40020: "invalid currency pair",
    50003: "account is restricted",
    50009: "order does not exist",
    60001: "insufficient amount",
    70001: "system error",
    70002: "system error",
    70009: "orders are temporarily restricted",
}


def decode_json(body: bytes | str) -> Any:
    """Parse a JSON body with numbers kept exact as ``Decimal``."""
    return json.loads(body, parse_float=Decimal)


def describe_shape(value: Any) -> str:
    """Short human description of a decoded JSON value's shape."""
    if isinstance(value, dict):
        keys = ", ".join(sorted(str(k) for k in value))
        return f"object with keys [{keys}]"
    if isinstance(value, list):
        return f"array of {len(value)} items"
    if value is None:
        return "null"
    return type(value).__name__


def map_response(payload: Any, shape: type[T]) -> T:
    """Validate an envelope and return its ``data`` as ``shape``.

    Args:
        payload: Decoded JSON response
        shape: Model class the ``data`` member must validate against

    Returns:
        Instance of ``shape``

    Raises:
        ExchangeError: If the envelope reports failure
        DecodeError: If the envelope or its data has an unexpected shape
    """
    if not isinstance(payload, dict) or "success" not in payload or "data" not in payload:
        raise DecodeError("response envelope with success and data", describe_shape(payload))

    data = payload["data"]
    if not _is_success(payload["success"]):
        raise _exchange_error(data)

    try:
        return shape.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "data"
        logger.debug("Failed to decode %s: %s", shape.__name__, exc)
        raise DecodeError(
            shape.__name__,
            f"{describe_shape(data)} ({location}: {first['msg']})",
        ) from exc


def _is_success(flag: Any) -> bool:
    if isinstance(flag, bool):
        return flag
    if isinstance(flag, int):
        return flag == 1
    raise DecodeError("success flag of 0/1 or boolean", describe_shape(flag))


def _exchange_error(data: Any) -> ExchangeError | DecodeError:
    code = data.get("code") if isinstance(data, dict) else None
    if isinstance(code, bool) or not isinstance(code, int):
        return DecodeError("error payload with integer code", describe_shape(data))
    message = data.get("message") or ERROR_MESSAGES.get(code, "unknown error")
    return ExchangeError(code, str(message))
