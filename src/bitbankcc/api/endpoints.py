"""Endpoint construction for the public and private API hosts."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..errors import InvalidPathError

PUBLIC_AUTHORITY = "public.bitbank.cc"
PRIVATE_AUTHORITY = "api.bitbank.cc"

# Paths and queries are printable ASCII only; the signature covers them verbatim.
_FORBIDDEN_IN_PATH = re.compile(r"[^\x21-\x7e]|[?#]")
_FORBIDDEN_IN_QUERY = re.compile(r"[^\x21-\x7e]|#")
_PAIR_PATTERN = re.compile(r"[a-z0-9]+_[a-z0-9]+")


@dataclass(frozen=True, slots=True)
class Endpoint:
    authority: str
    path: str
    query: str = ""
    scheme: str = "https"

    @property
    def query_suffix(self) -> str:
        """Query part as it appears in the URI, ``?`` included."""
        return f"?{self.query}" if self.query else ""

    @property
    def path_and_query(self) -> str:
        return f"{self.path}{self.query_suffix}"

    def __str__(self) -> str:
        return f"{self.scheme}://{self.authority}{self.path_and_query}"


class EndpointResolver:
    """Pure builder for :class:`Endpoint` values on the two fixed hosts."""

    def __init__(
        self,
        public_authority: str = PUBLIC_AUTHORITY,
        private_authority: str = PRIVATE_AUTHORITY,
    ):
        self.public_authority = public_authority
        self.private_authority = private_authority

    def public_endpoint(self, path: str, query: str = "") -> Endpoint:
        return self._build(self.public_authority, path, query)

    def private_endpoint(self, path: str, query: str = "") -> Endpoint:
        return self._build(self.private_authority, path, query)

    @staticmethod
    def _build(authority: str, path: str, query: str) -> Endpoint:
        if not path or not path.startswith("/"):
            raise InvalidPathError(f"path must start with '/': {path!r}")
        if _FORBIDDEN_IN_PATH.search(path):
            raise InvalidPathError(f"path contains non-ASCII, reserved or control characters: {path!r}")
        if query.startswith("?"):
            query = query[1:]
        if _FORBIDDEN_IN_QUERY.search(query):
            raise InvalidPathError(f"query contains non-ASCII, reserved or control characters: {query!r}")
        return Endpoint(authority=authority, path=path, query=query)


def validate_pair(pair: str) -> str:
    """Return ``pair`` as a path segment or raise :class:`InvalidPathError`."""
    value = str(pair)
    if not _PAIR_PATTERN.fullmatch(value):
        raise InvalidPathError(f"invalid currency pair: {value!r}")
    return value


def render_query(params: dict[str, object]) -> str:
    """Join parameters as ``k=v&...`` without percent-encoding.

    The exchange signs the query exactly as it appears in the URI, so the
    rendered string is used both for the request target and the signature.
    """
    return "&".join(f"{key}={value}" for key, value in params.items() if value is not None)
