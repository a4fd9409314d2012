"""HMAC request signing."""

from __future__ import annotations

import hashlib
import hmac

from ..errors import ConfigurationError


def _as_bytes(value: bytes | str) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return value


def sign(secret: bytes | str, message: bytes | str) -> str:
    """Return the lowercase hex HMAC-SHA256 of ``message`` keyed by ``secret``.

    Args:
        secret: API secret
        message: Message to sign

    Returns:
        64-character hex digest

    Raises:
        ConfigurationError: If the secret is empty
    """
    key = _as_bytes(secret)
    if not key:
        raise ConfigurationError("cannot sign with an empty secret")
    return hmac.new(key, _as_bytes(message), hashlib.sha256).hexdigest()
