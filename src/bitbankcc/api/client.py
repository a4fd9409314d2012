"""bitbank.cc API client."""

from __future__ import annotations

import datetime as dt
import json
import logging
import re
from typing import Any, Iterable, TypeVar

from pydantic import BaseModel

from ..errors import DecodeError, InvalidPathError, TransportError
from .endpoints import Endpoint, EndpointResolver, render_query, validate_pair
from .headers import Credentials, NonceGenerator, RequestHeaderBuilder
from .mapper import decode_json, map_response
from .models import (
    Assets,
    Candlestick,
    CandleType,
    CurrencyPair,
    Depth,
    Order,
    Orders,
    Ticker,
    Transactions,
)
from .transport import AiohttpTransport, Transport

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

ASSETS_PATH = "/v1/user/assets"
ORDER_PATH = "/v1/user/spot/order"
ORDERS_INFO_PATH = "/v1/user/spot/orders_info"

_DAY_PATTERN = re.compile(r"[0-9]{8}")
_YEAR_PATTERN = re.compile(r"[0-9]{4}")


class BitbankClient:
    """Async client for the bitbank.cc public and private REST APIs.

    Credentials are optional; without them only public operations work and
    private ones raise :class:`~bitbankcc.errors.AuthenticationError`.

    Example::

        async with BitbankClient(Credentials(key, secret)) as client:
            ticker = await client.get_ticker(CurrencyPair.BTC_JPY)
    """

    def __init__(
        self,
        credentials: Credentials | None = None,
        *,
        transport: Transport | None = None,
        resolver: EndpointResolver | None = None,
        nonce: NonceGenerator | None = None,
    ):
        self.credentials = credentials
        self.transport = transport or AiohttpTransport()
        self.resolver = resolver or EndpointResolver()
        self.headers = RequestHeaderBuilder(credentials, nonce=nonce)

    async def __aenter__(self) -> BitbankClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying transport."""
        await self.transport.close()

    # ------------------------------------------------------------------
    # Public API

    async def get_ticker(self, pair: CurrencyPair | str) -> Ticker:
        path = f"/{validate_pair(pair)}/ticker"
        return await self._public_get(path, Ticker)

    async def get_depth(self, pair: CurrencyPair | str) -> Depth:
        path = f"/{validate_pair(pair)}/depth"
        return await self._public_get(path, Depth)

    async def get_candlestick(
        self,
        pair: CurrencyPair | str,
        candle_type: CandleType | str,
        date: dt.date | str,
    ) -> Candlestick:
        """Fetch OHLCV bars for one day, or one year for 4hour and longer bars.

        Args:
            pair: Currency pair, e.g. ``btc_jpy``
            candle_type: Bar interval
            date: ``YYYYMMDD`` string or ``datetime.date``; yearly intervals
                also accept ``YYYY``

        Raises:
            InvalidPathError: If the pair, interval or date is malformed
        """
        try:
            candle_type = CandleType(candle_type)
        except ValueError:
            raise InvalidPathError(f"invalid candle type: {candle_type!r}") from None
        segment = _candlestick_date(candle_type, date)
        path = f"/{validate_pair(pair)}/candlestick/{candle_type}/{segment}"
        return await self._public_get(path, Candlestick)

    async def get_transactions(
        self,
        pair: CurrencyPair | str,
        date: dt.date | str | None = None,
    ) -> Transactions:
        """Fetch recent trades, or all trades of ``date`` when given."""
        path = f"/{validate_pair(pair)}/transactions"
        if date is not None:
            path = f"{path}/{_day_segment(date)}"
        return await self._public_get(path, Transactions)

    # ------------------------------------------------------------------
    # Private API

    async def get_assets(self) -> Assets:
        return await self._private_get(ASSETS_PATH, None, Assets)

    async def get_order(self, pair: CurrencyPair | str, order_id: int) -> Order:
        params = {"pair": validate_pair(pair), "order_id": _order_id(order_id)}
        return await self._private_get(ORDER_PATH, params, Order)

    async def get_orders_info(self, pair: CurrencyPair | str, order_ids: Iterable[int]) -> Orders:
        """Look up several orders at once. Read-only, but sent as a signed POST."""
        payload = {"pair": validate_pair(pair), "order_ids": [_order_id(i) for i in order_ids]}
        return await self._private_post(ORDERS_INFO_PATH, payload, Orders)

    # ------------------------------------------------------------------
    # Pipeline

    async def _public_get(self, path: str, shape: type[T]) -> T:
        endpoint = self.resolver.public_endpoint(path)
        headers = self.headers.public_headers()
        return await self._execute("GET", endpoint, headers, None, shape)

    async def _private_get(self, path: str, params: dict[str, Any] | None, shape: type[T]) -> T:
        endpoint = self.resolver.private_endpoint(path, render_query(params or {}))
        headers = self.headers.private_get_headers(endpoint.path, endpoint.query_suffix)
        return await self._execute("GET", endpoint, headers, None, shape)

    async def _private_post(self, path: str, payload: dict[str, Any], shape: type[T]) -> T:
        endpoint = self.resolver.private_endpoint(path)
        # Serialized once: the signature covers exactly these bytes.
        body = json.dumps(payload, separators=(",", ":"))
        headers = self.headers.private_post_headers(body)
        return await self._execute("POST", endpoint, headers, body.encode("utf-8"), shape)

    async def _execute(
        self,
        method: str,
        endpoint: Endpoint,
        headers: dict[str, str],
        body: bytes | None,
        shape: type[T],
    ) -> T:
        logger.debug("%s %s", method, endpoint)
        raw = await self.transport.request(method, str(endpoint), headers, body)
        try:
            payload = decode_json(raw.body)
        except ValueError:
            if raw.status >= 400:
                raise TransportError(f"{method} {endpoint} returned HTTP {raw.status}") from None
            raise DecodeError("JSON body", f"{len(raw.body)} bytes of non-JSON content") from None
        return map_response(payload, shape)


def _order_id(value: int | str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidPathError(f"order id must be an integer: {value!r}") from None


def _day_segment(date: dt.date | str) -> str:
    if isinstance(date, dt.date):
        return date.strftime("%Y%m%d")
    if not isinstance(date, str) or not _DAY_PATTERN.fullmatch(date):
        raise InvalidPathError(f"date must be YYYYMMDD: {date!r}")
    return date


def _candlestick_date(candle_type: CandleType, date: dt.date | str) -> str:
    if candle_type.yearly:
        if isinstance(date, dt.date):
            return date.strftime("%Y")
        if isinstance(date, str) and _YEAR_PATTERN.fullmatch(date):
            return date
    return _day_segment(date)
