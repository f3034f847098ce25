from __future__ import annotations

import asyncio
import socket
from collections.abc import Awaitable, Callable

from mimetype_api.core.logging import get_logger
from mimetype_api.fetch.blocklist import DEFAULT_BLOCKLIST, Blocklist, parse_ip
from mimetype_api.fetch.errors import BlockedHostnameError, BlockedIPError, DNSResolutionFailedError

logger = get_logger("fetch.resolver")

# (hostname, family) -> textual addresses
Lookup = Callable[[str, int], Awaitable[list[str]]]

ADDRESS_FAMILIES: tuple[int, ...] = (socket.AF_INET, socket.AF_INET6)


async def getaddrinfo_lookup(hostname: str, family: int) -> list[str]:
    loop = asyncio.get_running_loop()
    infos = await loop.getaddrinfo(hostname, None, family=family, proto=socket.IPPROTO_TCP)
    addresses: list[str] = []
    for info in infos:
        sockaddr = info[4]
        if not sockaddr:
            continue
        address = str(sockaddr[0])
        if address not in addresses:
            addresses.append(address)
    return addresses


class ResolutionGuard:
    def __init__(self, blocklist: Blocklist = DEFAULT_BLOCKLIST, lookup: Lookup | None = None) -> None:
        self.blocklist = blocklist
        self.lookup = lookup or getaddrinfo_lookup

    async def resolve(self, hostname: str) -> list[str]:
        """Return the addresses ``hostname`` resolves to, all of them allowed.

        Raises ``BlockedHostnameError`` before any lookup, ``BlockedIPError``
        for the first forbidden address and ``DNSResolutionFailedError`` when
        neither IPv4 nor IPv6 yields an address.
        """
        if self.blocklist.is_blocked_hostname(hostname):
            raise BlockedHostnameError(hostname)

        literal = parse_ip(hostname)
        if literal is not None:
            self._check(str(literal), hostname)
            return [str(literal)]

        addresses = await self._lookup_any_family(hostname)
        for address in addresses:
            self._check(address, hostname)
        return addresses

    async def _lookup_any_family(self, hostname: str) -> list[str]:
        # IPv6 is queried only when IPv4 yields nothing. These addresses are not
        # pinned: httpx resolves the name again on connect and may pick an AAAA
        # record never checked here, so a rebinding resolver can still answer
        # differently between this check and the connection.
        for family in ADDRESS_FAMILIES:
            try:
                addresses = await self.lookup(hostname, family)
            except (OSError, UnicodeError) as exc:
                logger.debug(
                    "fetch.dns_family_failed",
                    extra={
                        "component": "fetch",
                        "hostname": hostname,
                        "family": socket.AddressFamily(family).name,
                        "error": str(exc),
                    },
                )
                continue
            if addresses:
                return addresses
        raise DNSResolutionFailedError(hostname)

    def _check(self, address: str, hostname: str) -> None:
        if self.blocklist.is_blocked_ip(address):
            raise BlockedIPError(address, hostname)
