"""HTTP transport used by the client."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

import aiohttp
from yarl import URL

from ..errors import ConfigurationError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "bitbankcc-python/0.1"


@dataclass(frozen=True, slots=True)
class RawResponse:
    status: int
    body: bytes


class Transport(Protocol):
    """Performs one HTTP exchange.

    Implementations must send ``url`` and ``body`` byte-for-byte, because the
    signature covers them, and raise :class:`TransportError` when the
    exchange cannot be completed.
    """

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> RawResponse:
        ...

    async def close(self) -> None:
        ...


@dataclass(frozen=True)
class ProxyConfig:
    """HTTP proxy configuration.

    Credentials travel as a ``Proxy-Authorization`` header rather than in the
    proxy URL, so passwords may contain any character.
    """

    url: str | None = None
    username: str | None = None
    password: str | None = field(default=None, repr=False)

    def __post_init__(self):
        if self.username and ":" in self.username:
            raise ConfigurationError("proxy username must not contain ':'")

    @property
    def target(self) -> str | None:
        if not self.url:
            return None
        return self.url if "://" in self.url else f"http://{self.url}"

    @property
    def auth(self) -> aiohttp.BasicAuth | None:
        if not self.url or not self.username:
            return None
        return aiohttp.BasicAuth(self.username, self.password or "")


class AiohttpTransport:
    """aiohttp-backed transport with a lazily created session."""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        proxy: ProxyConfig | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.timeout = timeout
        self.proxy = proxy or ProxyConfig()
        self.user_agent = user_agent
        self.session: aiohttp.ClientSession | None = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={"User-Agent": self.user_agent},
            )
        return self.session

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None = None,
    ) -> RawResponse:
        session = await self._ensure_session()
        # encoded=True keeps yarl from re-quoting the signed request target
        target = URL(url, encoded=True)
        try:
            async with session.request(
                method,
                target,
                headers=headers,
                data=body,
                proxy=self.proxy.target,
                proxy_auth=self.proxy.auth,
            ) as resp:
                payload = await resp.read()
                logger.debug("%s %s -> %s", method, url, resp.status)
                return RawResponse(resp.status, payload)
        except asyncio.TimeoutError as exc:
            raise TransportError(f"{method} {url} timed out after {self.timeout}s") from exc
        except aiohttp.ClientError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

    async def close(self) -> None:
        if self.session:
            await self.session.close()
            self.session = None
