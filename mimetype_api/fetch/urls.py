from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

import httpx

from mimetype_api.fetch.errors import InvalidURLError, UnsupportedProtocolError

ALLOWED_SCHEMES = frozenset({"http", "https"})


@dataclass(frozen=True)
class ValidatedURL:
    url: str
    scheme: str
    hostname: str


def validate_url(url: str) -> ValidatedURL:
    candidate = (url or "").strip()
    if not candidate:
        raise InvalidURLError(candidate, "Empty URL")

    try:
        parsed = urlsplit(candidate)
        port = parsed.port
    except ValueError as exc:
        raise InvalidURLError(candidate) from exc

    scheme = parsed.scheme.lower()
    if not scheme:
        raise InvalidURLError(candidate)
    if scheme not in ALLOWED_SCHEMES:
        raise UnsupportedProtocolError(scheme)
    if not parsed.netloc:
        raise InvalidURLError(candidate, "Missing host")
    if parsed.username or parsed.password:
        raise InvalidURLError(candidate, "Credentials in URL are not allowed")

    hostname = (parsed.hostname or "").rstrip(".")
    if not hostname:
        raise InvalidURLError(candidate, "Missing hostname")
    if port == 0:
        raise InvalidURLError(candidate, "Invalid port")

    try:
        normalized = httpx.URL(candidate)
    except httpx.InvalidURL as exc:
        raise InvalidURLError(candidate) from exc

    # blocklist and DNS run on the ASCII name httpx dials, never the Unicode form
    connect_host = normalized.raw_host.decode("ascii").rstrip(".").lower()
    if not connect_host:
        raise InvalidURLError(candidate, "Missing hostname")
    if hostname.isascii() and connect_host != hostname:
        raise InvalidURLError(candidate, "Ambiguous host")

    return ValidatedURL(url=str(normalized), scheme=scheme, hostname=connect_host)
