from __future__ import annotations

import asyncio
from dataclasses import dataclass
from functools import lru_cache
from time import perf_counter

import httpx

from mimetype_api.core.logging import get_logger
from mimetype_api.core.settings import Settings, get_settings
from mimetype_api.fetch.blocklist import DEFAULT_BLOCKLIST, Blocklist
from mimetype_api.fetch.errors import (
    FetchError,
    FetchErrorKind,
    FetchTimeoutError,
    NetworkError,
    RedirectRejectedError,
    UpstreamHTTPError,
)
from mimetype_api.fetch.resolver import Lookup, ResolutionGuard
from mimetype_api.fetch.stream import ByteBudget, read_bounded
from mimetype_api.fetch.urls import validate_url

logger = get_logger("fetch")

REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})
_BLOCKED_KINDS = {
    FetchErrorKind.BLOCKED_HOSTNAME,
    FetchErrorKind.BLOCKED_IP,
    FetchErrorKind.INVALID_URL,
    FetchErrorKind.UNSUPPORTED_PROTOCOL,
}


@dataclass(frozen=True)
class FetchPolicy:
    timeout_seconds: float = 10.0
    max_bytes: int = 10 * 1024 * 1024
    user_agent: str = "MimetypeAPI/1.0"

    @classmethod
    def from_settings(cls, settings: Settings) -> "FetchPolicy":
        return cls(
            timeout_seconds=settings.fetch_timeout_seconds,
            max_bytes=settings.MAX_FILE_SIZE,
            user_agent=settings.FETCH_USER_AGENT.strip(),
        )


class SecureFetcher:
    """Fetch untrusted URLs without reaching internal networks.

    Each call validates the URL, checks the hostname and every resolved
    address against the blocklist, then streams the body with redirects
    disabled and a byte cap. The whole sequence shares one deadline.
    """

    def __init__(
        self,
        policy: FetchPolicy | None = None,
        *,
        blocklist: Blocklist = DEFAULT_BLOCKLIST,
        lookup: Lookup | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.policy = policy or FetchPolicy()
        self.guard = ResolutionGuard(blocklist, lookup)
        self.transport = transport

    async def fetch(self, url: str) -> bytes:
        started = perf_counter()
        try:
            data = await asyncio.wait_for(self._fetch(url), timeout=self.policy.timeout_seconds)
        except TimeoutError as exc:
            error = FetchTimeoutError(self.policy.timeout_seconds)
            self._log_failure(url, error, started)
            raise error from exc
        except FetchError as exc:
            self._log_failure(url, exc, started)
            raise

        logger.info(
            "fetch.complete",
            extra={
                "component": "fetch",
                "url": url,
                "bytes": len(data),
                "duration_ms": int((perf_counter() - started) * 1000),
            },
        )
        return data

    async def _fetch(self, url: str) -> bytes:
        target = validate_url(url)
        await self.guard.resolve(target.hostname)

        timeout = httpx.Timeout(self.policy.timeout_seconds)
        headers = {"User-Agent": self.policy.user_agent}
        try:
            async with httpx.AsyncClient(
                timeout=timeout,
                follow_redirects=False,
                transport=self.transport,
            ) as client:
                async with client.stream("GET", target.url, headers=headers) as response:
                    return await self._read_response(response)
        except httpx.TimeoutException as exc:
            raise FetchTimeoutError(self.policy.timeout_seconds) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(str(exc) or type(exc).__name__) from exc

    async def _read_response(self, response: httpx.Response) -> bytes:
        status = response.status_code
        if status in REDIRECT_STATUSES:
            raise RedirectRejectedError(status, response.headers.get("location"))
        if not response.is_success:
            raise UpstreamHTTPError(status, response.reason_phrase)

        ByteBudget(self.policy.max_bytes).check_declared(response.headers.get("content-length"))
        return await read_bounded(response.aiter_bytes(), self.policy.max_bytes)

    def _log_failure(self, url: str, error: FetchError, started: float) -> None:
        event = "fetch.blocked" if error.kind in _BLOCKED_KINDS else "fetch.rejected"
        logger.warning(
            event,
            extra={
                "component": "fetch",
                "url": url,
                "kind": error.kind.value,
                "detail": error.message,
                "duration_ms": int((perf_counter() - started) * 1000),
            },
        )


@lru_cache
def get_fetcher() -> SecureFetcher:
    return SecureFetcher(FetchPolicy.from_settings(get_settings()))


async def secure_fetch(url: str, *, fetcher: SecureFetcher | None = None) -> bytes:
    return await (fetcher or get_fetcher()).fetch(url)
