"""Tests for SSRF-safe URL validation."""

from __future__ import annotations

import socket
from unittest.mock import AsyncMock, patch

import pytest

from seo_extractor.services.extractors.base import ExtractionConfig
from seo_extractor.services.extractors.exceptions import InvalidUrlError
from seo_extractor.services.extractors.url_guard import (
    UrlGuard,
    is_blocked_address,
    is_loopback_hostname,
)

PUBLIC_V4 = "93.184.216.34"
PUBLIC_V6 = "2606:2800:220:1:248:1893:25c8:1946"


def resolving_to(*addresses: str):
    """Patch UrlGuard._resolve to return the given addresses."""
    return patch.object(UrlGuard, "_resolve", AsyncMock(return_value=list(addresses)))


class TestIsBlockedAddress:
    @pytest.mark.parametrize(
        "address",
        [
            "127.0.0.1",
            "127.10.0.3",
            "10.0.0.5",
            "172.16.4.1",
            "172.31.255.255",
            "192.168.1.1",
            "169.254.169.254",
            "0.0.0.0",
            "::1",
            "fd00::1",
            "fc00::abcd",
            "fe80::1",
            "fe80::1%eth0",
            "::ffff:127.0.0.1",
            "::ffff:10.0.0.1",
            "224.0.0.1",
            "not-an-ip",
        ],
    )
    def test_non_public_addresses_are_blocked(self, address: str) -> None:
        assert is_blocked_address(address) is True

    @pytest.mark.parametrize("address", [PUBLIC_V4, "8.8.8.8", "1.1.1.1", PUBLIC_V6])
    def test_public_addresses_are_allowed(self, address: str) -> None:
        assert is_blocked_address(address) is False

    def test_172_outside_private_range_is_allowed(self) -> None:
        assert is_blocked_address("172.32.0.1") is False


class TestIsLoopbackHostname:
    @pytest.mark.parametrize(
        "hostname",
        ["localhost", "localhost.", "ip6-localhost", "app.localhost", "printer.local"],
    )
    def test_loopback_names(self, hostname: str) -> None:
        assert is_loopback_hostname(hostname) is True

    @pytest.mark.parametrize("hostname", ["example.com", "localhost.example.com", "local"])
    def test_regular_names(self, hostname: str) -> None:
        assert is_loopback_hostname(hostname) is False


class TestUrlGuardValidate:
    @pytest.mark.asyncio
    async def test_public_https_url_is_accepted(self) -> None:
        guard = UrlGuard()
        with resolving_to(PUBLIC_V4):
            url = await guard.validate("https://example.com/article?id=1")
        assert url == "https://example.com/article?id=1"

    @pytest.mark.asyncio
    async def test_url_is_normalized(self) -> None:
        guard = UrlGuard()
        with resolving_to(PUBLIC_V4):
            url = await guard.validate("  HTTPS://Example.COM#section  ")
        assert url == "https://example.com/"

    @pytest.mark.asyncio
    async def test_port_is_preserved(self) -> None:
        guard = UrlGuard()
        with resolving_to(PUBLIC_V4):
            url = await guard.validate("http://example.com:8080/page")
        assert url == "http://example.com:8080/page"

    @pytest.mark.asyncio
    async def test_public_ipv6_literal_is_accepted(self) -> None:
        guard = UrlGuard()
        with resolving_to(PUBLIC_V6):
            url = await guard.validate(f"http://[{PUBLIC_V6}]/")
        assert url == f"http://[{PUBLIC_V6}]/"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw",
        ["ftp://example.com/file", "file:///etc/passwd", "javascript:alert(1)"],
    )
    async def test_non_http_schemes_are_rejected_without_resolving(self, raw: str) -> None:
        guard = UrlGuard()
        with patch.object(UrlGuard, "_resolve", AsyncMock()) as resolve:
            with pytest.raises(InvalidUrlError):
                await guard.validate(raw)
        resolve.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_ftp_message(self) -> None:
        with pytest.raises(InvalidUrlError, match="Only http/https URLs are allowed."):
            await UrlGuard().validate("ftp://example.com/file")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["", "   ", "example.com/path", "https://"])
    async def test_malformed_urls_are_rejected(self, raw: str) -> None:
        with patch.object(UrlGuard, "_resolve", AsyncMock(return_value=[PUBLIC_V4])):
            with pytest.raises(InvalidUrlError):
                await UrlGuard().validate(raw)

    @pytest.mark.asyncio
    async def test_invalid_port_is_rejected(self) -> None:
        with pytest.raises(InvalidUrlError, match="Invalid URL"):
            await UrlGuard().validate("http://example.com:99999/")

    @pytest.mark.asyncio
    async def test_overlong_url_is_rejected(self) -> None:
        guard = UrlGuard(ExtractionConfig(max_url_length=30))
        with pytest.raises(InvalidUrlError, match="maximum length of 30"):
            await guard.validate("https://example.com/" + "a" * 40)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw",
        ["http://localhost:8080/", "http://LOCALHOST/", "http://nas.local/admin"],
    )
    async def test_loopback_hostnames_are_rejected(self, raw: str) -> None:
        with patch.object(UrlGuard, "_resolve", AsyncMock()) as resolve:
            with pytest.raises(
                InvalidUrlError, match="Localhost and .local domains are not allowed."
            ):
                await UrlGuard().validate(raw)
        resolve.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "address", ["127.0.0.1", "10.0.0.5", "169.254.169.254", "::1", "fd00::1"]
    )
    async def test_private_resolution_is_rejected(self, address: str) -> None:
        with resolving_to(address):
            with pytest.raises(
                InvalidUrlError, match="Private or local network targets are not allowed."
            ):
                await UrlGuard().validate("https://internal.example.com/")

    @pytest.mark.asyncio
    async def test_any_private_address_rejects_the_host(self) -> None:
        with resolving_to(PUBLIC_V4, "10.1.2.3"):
            with pytest.raises(InvalidUrlError, match="Private or local"):
                await UrlGuard().validate("https://rebind.example.com/")

    @pytest.mark.asyncio
    async def test_empty_resolution_is_rejected(self) -> None:
        with resolving_to():
            with pytest.raises(InvalidUrlError, match="DNS resolution failed."):
                await UrlGuard().validate("https://example.com/")

    @pytest.mark.asyncio
    async def test_private_ip_literal_is_rejected(self) -> None:
        # Real resolution of an IP literal does not touch the network
        with pytest.raises(InvalidUrlError, match="Private or local"):
            await UrlGuard().validate("http://192.168.0.10/")


class TestUrlGuardResolve:
    @pytest.mark.asyncio
    async def test_dns_failure_is_invalid_url(self) -> None:
        with patch(
            "socket.getaddrinfo", side_effect=socket.gaierror(-2, "Name or service not known")
        ):
            with pytest.raises(InvalidUrlError, match="DNS resolution failed"):
                await UrlGuard().validate("https://does-not-exist.example/")

    @pytest.mark.asyncio
    async def test_all_addresses_are_returned_once(self) -> None:
        infos = [
            (socket.AF_INET, socket.SOCK_STREAM, 6, "", (PUBLIC_V4, 0)),
            (socket.AF_INET, socket.SOCK_STREAM, 6, "", (PUBLIC_V4, 0)),
            (socket.AF_INET6, socket.SOCK_STREAM, 6, "", (PUBLIC_V6, 0, 0, 0)),
        ]
        with patch("socket.getaddrinfo", return_value=infos):
            addresses = await UrlGuard()._resolve("example.com")
        assert addresses == [PUBLIC_V4, PUBLIC_V6]
