"""SSRF-guarded fetching of user-supplied URLs."""

from mimetype_api.fetch.blocklist import DEFAULT_BLOCKLIST, Blocklist, is_blocked_hostname, is_blocked_ip
from mimetype_api.fetch.errors import (
    BlockedHostnameError,
    BlockedIPError,
    DNSResolutionFailedError,
    FetchError,
    FetchErrorKind,
    FetchTimeoutError,
    InvalidURLError,
    NetworkError,
    PayloadTooLargeError,
    RedirectRejectedError,
    UnsupportedProtocolError,
    UpstreamHTTPError,
)
from mimetype_api.fetch.fetcher import FetchPolicy, SecureFetcher, get_fetcher, secure_fetch
from mimetype_api.fetch.resolver import ResolutionGuard
from mimetype_api.fetch.urls import ValidatedURL, validate_url

__all__ = [
    "DEFAULT_BLOCKLIST",
    "BlockedHostnameError",
    "BlockedIPError",
    "Blocklist",
    "DNSResolutionFailedError",
    "FetchError",
    "FetchErrorKind",
    "FetchPolicy",
    "FetchTimeoutError",
    "InvalidURLError",
    "NetworkError",
    "PayloadTooLargeError",
    "RedirectRejectedError",
    "ResolutionGuard",
    "SecureFetcher",
    "UnsupportedProtocolError",
    "UpstreamHTTPError",
    "ValidatedURL",
    "get_fetcher",
    "is_blocked_hostname",
    "is_blocked_ip",
    "secure_fetch",
    "validate_url",
]
