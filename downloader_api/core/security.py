import asyncio
import ipaddress
import socket
from enum import Enum, auto
from urllib.parse import urlparse

from downloader_api.config.settings import config


class UrlValidationResult(Enum):
    """URL validation result without throwing exceptions"""
    OK = auto()
    BLOCKED = auto()
    INVALID = auto()


class SecurityValidator:
    """
    Validate outbound fetch targets without throwing exceptions.
    Returns result enum for separation of concerns.
    """

    @staticmethod
    def is_blocked_ip(ip_str: str) -> bool:
        ip = ipaddress.ip_address(ip_str)

        if ip.is_loopback:
            return not config.security.allow_localhost

        if not config.security.allow_private_ips and ip.is_private:
            return True

        return ip.is_link_local or ip.is_multicast or ip.is_unspecified

    @staticmethod
    async def validate_url(url: str) -> UrlValidationResult:
        """
        Validate URL against SSRF attacks.
        Uses async DNS resolution.
        """
        if not config.security.enable_ssrf_protection:
            return UrlValidationResult.OK

        try:
            hostname = urlparse(url).hostname
        except ValueError:
            return UrlValidationResult.INVALID

        if not hostname:
            return UrlValidationResult.INVALID

        try:
            addr_info = await asyncio.to_thread(socket.getaddrinfo, hostname, None)
        except socket.gaierror:
            # DNS failed; the fetch itself will report it
            return UrlValidationResult.OK

        for info in addr_info:
            try:
                if SecurityValidator.is_blocked_ip(info[4][0]):
                    return UrlValidationResult.BLOCKED
            except ValueError:
                return UrlValidationResult.INVALID

        return UrlValidationResult.OK
