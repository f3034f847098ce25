from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field

IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network
IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address

BLOCKED_NETWORKS: tuple[str, ...] = (
    "0.0.0.0/8",  # current network
    "10.0.0.0/8",  # private class A
    "100.64.0.0/10",  # carrier-grade NAT
    "127.0.0.0/8",  # loopback
    "169.254.0.0/16",  # link-local, cloud metadata
    "172.16.0.0/12",  # private class B
    "192.0.0.0/24",  # IETF protocol assignments
    "192.0.2.0/24",  # TEST-NET-1
    "192.168.0.0/16",  # private class C
    "198.18.0.0/15",  # benchmarking
    "198.51.100.0/24",  # TEST-NET-2
    "203.0.113.0/24",  # TEST-NET-3
    "224.0.0.0/4",  # multicast
    "240.0.0.0/4",  # reserved, includes broadcast
    "::/128",  # unspecified
    "::1/128",  # loopback
    "fc00::/7",  # unique local
    "fe80::/10",  # link-local
    "ff00::/8",  # multicast
)

BLOCKED_HOSTNAMES: frozenset[str] = frozenset(
    {
        "localhost",
        "metadata.google.internal",
        "metadata.goog",
    }
)


def parse_ip(address: str) -> IPAddress | None:
    """Parse an address as printed by DNS or written in a URL host.

    Accepts bracketed IPv6 and strips any ``%zone`` suffix. Returns ``None``
    for anything that is not an IP literal.
    """
    text = address.strip()
    if text.startswith("[") and text.endswith("]"):
        text = text[1:-1]
    text = text.split("%", 1)[0]
    try:
        return ipaddress.ip_address(text)
    except ValueError:
        return None


@dataclass(frozen=True)
class Blocklist:
    networks: tuple[IPNetwork, ...] = field(
        default_factory=lambda: tuple(ipaddress.ip_network(n) for n in BLOCKED_NETWORKS)
    )
    hostnames: frozenset[str] = BLOCKED_HOSTNAMES

    def is_blocked_hostname(self, name: str) -> bool:
        lower = name.strip().lower().rstrip(".")
        return any(lower == blocked or lower.endswith(f".{blocked}") for blocked in self.hostnames)

    def is_blocked_ip(self, address: str | IPAddress) -> bool:
        ip = address if isinstance(address, ipaddress.IPv4Address | ipaddress.IPv6Address) else parse_ip(address)
        if ip is None:
            return False
        if isinstance(ip, ipaddress.IPv6Address):
            # ::ffff:a.b.c.d and ::a.b.c.d reach the IPv4 host
            embedded = ip.ipv4_mapped or _ipv4_compatible(ip)
            if embedded is not None and self._matches(embedded):
                return True
        return self._matches(ip)

    def _matches(self, ip: IPAddress) -> bool:
        return any(ip.version == network.version and ip in network for network in self.networks)


def _ipv4_compatible(ip: ipaddress.IPv6Address) -> ipaddress.IPv4Address | None:
    packed = int(ip)
    if packed >> 32 == 0 and packed > 1:
        return ipaddress.IPv4Address(packed & 0xFFFFFFFF)
    return None


DEFAULT_BLOCKLIST = Blocklist()


def is_blocked_hostname(name: str) -> bool:
    return DEFAULT_BLOCKLIST.is_blocked_hostname(name)


def is_blocked_ip(address: str | IPAddress) -> bool:
    return DEFAULT_BLOCKLIST.is_blocked_ip(address)
