"""Client construction from settings."""

from __future__ import annotations

import logging

from ..settings import Settings
from .client import BitbankClient
from .headers import Credentials
from .transport import AiohttpTransport, ProxyConfig

logger = logging.getLogger(__name__)


def create_client(settings: Settings) -> BitbankClient:
    """Create a client from settings.

    A client without configured credentials is returned as public-only.
    """
    credentials = None
    if settings.credentials is not None:
        credentials = Credentials(
            key=settings.credentials.api_key.get_secret_value(),
            secret=settings.credentials.api_secret.get_secret_value(),
        )
    else:
        logger.warning("No API credentials configured, private endpoints are unavailable")

    proxy = None
    if settings.proxy.enabled:
        proxy = ProxyConfig(
            url=settings.proxy.url,
            username=settings.proxy.username,
            password=settings.proxy.password.get_secret_value() if settings.proxy.password else None,
        )

    transport = AiohttpTransport(
        timeout=settings.http.timeout,
        proxy=proxy,
        user_agent=settings.http.user_agent,
    )
    logger.info("Initialized bitbank client (env=%s, private=%s)", settings.env, credentials is not None)
    return BitbankClient(credentials, transport=transport)
