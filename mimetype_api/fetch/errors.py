"""Failure taxonomy for guarded URL fetches.

Every failure raised by :mod:`mimetype_api.fetch` is a :class:`FetchError`
carrying a :class:`FetchErrorKind` tag and a ``context`` mapping with the
offending hostname, address, status or size. Callers branch on ``exc.kind``;
the message text is for humans only.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class FetchErrorKind(StrEnum):
    INVALID_URL = "InvalidURL"
    UNSUPPORTED_PROTOCOL = "UnsupportedProtocol"
    BLOCKED_HOSTNAME = "BlockedHostname"
    BLOCKED_IP = "BlockedIP"
    DNS_RESOLUTION_FAILED = "DNSResolutionFailed"
    REDIRECT_REJECTED = "RedirectRejected"
    HTTP_ERROR = "HTTPError"
    PAYLOAD_TOO_LARGE = "PayloadTooLarge"
    TIMEOUT = "Timeout"
    NETWORK_ERROR = "NetworkError"


class FetchError(Exception):
    kind: FetchErrorKind

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context


class InvalidURLError(FetchError):
    kind = FetchErrorKind.INVALID_URL

    def __init__(self, url: str, reason: str = "Invalid URL format") -> None:
        super().__init__(reason, url=url)
        self.url = url


class UnsupportedProtocolError(FetchError):
    kind = FetchErrorKind.UNSUPPORTED_PROTOCOL

    def __init__(self, scheme: str) -> None:
        super().__init__(f"Protocol not allowed: {scheme}:", scheme=scheme)
        self.scheme = scheme


class BlockedHostnameError(FetchError):
    kind = FetchErrorKind.BLOCKED_HOSTNAME

    def __init__(self, hostname: str) -> None:
        super().__init__(f"Blocked hostname: {hostname}", hostname=hostname)
        self.hostname = hostname


class BlockedIPError(FetchError):
    kind = FetchErrorKind.BLOCKED_IP

    def __init__(self, address: str, hostname: str | None = None) -> None:
        super().__init__(f"Blocked IP address: {address}", address=address, hostname=hostname)
        self.address = address
        self.hostname = hostname


class DNSResolutionFailedError(FetchError):
    kind = FetchErrorKind.DNS_RESOLUTION_FAILED

    def __init__(self, hostname: str) -> None:
        super().__init__(f"DNS resolution failed for: {hostname}", hostname=hostname)
        self.hostname = hostname


class RedirectRejectedError(FetchError):
    kind = FetchErrorKind.REDIRECT_REJECTED

    def __init__(self, status_code: int, location: str | None) -> None:
        if location:
            message = f"Redirects not followed for security (status {status_code}, location: {location})"
        else:
            message = f"Redirects not followed for security (status {status_code}, no location header)"
        super().__init__(message, status_code=status_code, location=location)
        self.status_code = status_code
        self.location = location


class UpstreamHTTPError(FetchError):
    kind = FetchErrorKind.HTTP_ERROR

    def __init__(self, status_code: int, reason: str = "") -> None:
        message = f"HTTP error: {status_code} {reason}".rstrip()
        super().__init__(message, status_code=status_code, reason=reason)
        self.status_code = status_code
        self.reason = reason


class PayloadTooLargeError(FetchError):
    kind = FetchErrorKind.PAYLOAD_TOO_LARGE

    def __init__(self, size: int, max_bytes: int, *, declared: bool) -> None:
        if declared:
            message = f"File too large: {size} bytes (max: {max_bytes})"
        else:
            message = f"File too large: more than {max_bytes} bytes streamed (max: {max_bytes})"
        super().__init__(message, size=size, max_bytes=max_bytes, declared=declared)
        self.size = size
        self.max_bytes = max_bytes
        self.declared = declared


class FetchTimeoutError(FetchError):
    kind = FetchErrorKind.TIMEOUT

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(f"Fetch timed out after {timeout_seconds:g}s", timeout_seconds=timeout_seconds)
        self.timeout_seconds = timeout_seconds


class NetworkError(FetchError):
    kind = FetchErrorKind.NETWORK_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(f"Network error: {detail}", detail=detail)
        self.detail = detail
