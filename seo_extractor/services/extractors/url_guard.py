"""SSRF-safe validation of user-supplied URLs.

Every hostname is resolved before anything is fetched, and the URL is
rejected when *any* resolved address is non-public: a host resolving to one
public and one private address is refused.
"""

from __future__ import annotations

import asyncio
import ipaddress
import logging
import socket
from urllib.parse import urlsplit, urlunsplit

from seo_extractor.services.extractors.base import ExtractionConfig
from seo_extractor.services.extractors.exceptions import InvalidUrlError

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = frozenset({"http", "https"})

LOOPBACK_HOSTNAMES = frozenset({
    "localhost",
    "localhost.localdomain",
    "ip6-localhost",
    "ip6-loopback",
})

BLOCKED_NETWORKS: tuple[ipaddress.IPv4Network | ipaddress.IPv6Network, ...] = (
    ipaddress.ip_network("0.0.0.0/8"),
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("127.0.0.0/8"),
    ipaddress.ip_network("169.254.0.0/16"),  # includes 169.254.169.254 metadata
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("::1/128"),
    ipaddress.ip_network("fc00::/7"),
    ipaddress.ip_network("fe80::/10"),
)


def is_blocked_address(address: str) -> bool:
    """Return True when an IP address must never be fetched.

    Unparseable addresses are treated as blocked.
    """
    try:
        ip = ipaddress.ip_address(address.split("%", 1)[0])
    except ValueError:
        return True

    # ::ffff:10.0.0.1 and friends are checked as their IPv4 form
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped

    if any(ip.version == net.version and ip in net for net in BLOCKED_NETWORKS):
        return True

    return (
        ip.is_private
        or ip.is_loopback
        or ip.is_link_local
        or ip.is_reserved
        or ip.is_multicast
        or ip.is_unspecified
    )


def is_loopback_hostname(hostname: str) -> bool:
    """Return True for localhost aliases and mDNS ``.local`` names."""
    hostname = hostname.rstrip(".")
    return (
        hostname in LOOPBACK_HOSTNAMES
        or hostname.endswith(".localhost")
        or hostname.endswith(".local")
    )


class UrlGuard:
    """Validate and normalize URLs into safe, public HTTP(S) targets.

    Usage:
        guard = UrlGuard(config)
        url = await guard.validate("https://example.com/article")
    """

    def __init__(self, config: ExtractionConfig | None = None) -> None:
        self.config = config or ExtractionConfig()

    async def validate(self, raw: str) -> str:
        """Validate a raw URL string and return its normalized form.

        Args:
            raw: User-supplied URL.

        Returns:
            The normalized URL (lowercased scheme and host, ``/`` path when
            empty, fragment dropped).

        Raises:
            InvalidUrlError: If the URL is malformed, too long, not http(s),
                names a loopback host, fails DNS resolution, or resolves to
                any non-public address.
        """
        if not isinstance(raw, str) or not raw.strip():
            raise InvalidUrlError("A URL is required.")

        raw = raw.strip()
        if len(raw) > self.config.max_url_length:
            raise InvalidUrlError(
                f"URL exceeds maximum length of {self.config.max_url_length} characters."
            )

        try:
            parts = urlsplit(raw)
            hostname = parts.hostname
            port = parts.port
        except ValueError as e:
            raise InvalidUrlError(f"Invalid URL: {e}") from e

        scheme = parts.scheme.lower()
        if not scheme or not parts.netloc:
            raise InvalidUrlError("Invalid URL: an absolute URL is required.")
        if scheme not in ALLOWED_SCHEMES:
            raise InvalidUrlError("Only http/https URLs are allowed.")
        if not hostname:
            raise InvalidUrlError("Invalid URL: missing hostname.")

        if is_loopback_hostname(hostname):
            logger.warning("Rejected loopback hostname: %s", hostname)
            raise InvalidUrlError("Localhost and .local domains are not allowed.")

        addresses = await self._resolve(hostname)
        if not addresses:
            raise InvalidUrlError("DNS resolution failed.")

        blocked = [addr for addr in addresses if is_blocked_address(addr)]
        if blocked:
            logger.warning(
                "Rejected %s: resolves to non-public address(es) %s",
                hostname,
                ", ".join(blocked),
            )
            raise InvalidUrlError("Private or local network targets are not allowed.")

        return self._normalize(scheme, hostname, port, parts)

    async def _resolve(self, hostname: str) -> list[str]:
        """Resolve a hostname to every IPv4/IPv6 address it maps to.

        Raises:
            InvalidUrlError: If resolution fails.
        """
        loop = asyncio.get_running_loop()
        try:
            infos = await loop.getaddrinfo(hostname, None, type=socket.SOCK_STREAM)
        except (socket.gaierror, UnicodeError) as e:
            raise InvalidUrlError(f"DNS resolution failed for {hostname}.") from e

        addresses: list[str] = []
        for _family, _type, _proto, _canonname, sockaddr in infos:
            address = str(sockaddr[0])
            if address not in addresses:
                addresses.append(address)
        return addresses

    def _normalize(self, scheme, hostname, port, parts) -> str:
        host = f"[{hostname}]" if ":" in hostname else hostname
        netloc = f"{host}:{port}" if port is not None else host
        if "@" in parts.netloc:
            netloc = f"{parts.netloc.rsplit('@', 1)[0]}@{netloc}"
        return urlunsplit((scheme, netloc, parts.path or "/", parts.query, ""))
