import pytest

from downloader_api.config.settings import config
from downloader_api.core.security import SecurityValidator, UrlValidationResult


@pytest.mark.asyncio
async def test_loopback_blocked():
    assert await SecurityValidator.validate_url("http://127.0.0.1/video.mp4") == UrlValidationResult.BLOCKED


@pytest.mark.asyncio
async def test_private_range_blocked():
    assert await SecurityValidator.validate_url("http://10.0.0.5/video.mp4") == UrlValidationResult.BLOCKED


@pytest.mark.asyncio
async def test_loopback_allowed_when_configured(monkeypatch):
    monkeypatch.setattr(config.security, "allow_localhost", True)
    assert await SecurityValidator.validate_url("http://127.0.0.1/video.mp4") == UrlValidationResult.OK


@pytest.mark.asyncio
async def test_public_address_ok():
    assert await SecurityValidator.validate_url("http://93.184.216.34/video.mp4") == UrlValidationResult.OK


@pytest.mark.asyncio
async def test_missing_host_invalid():
    assert await SecurityValidator.validate_url("http:///video.mp4") == UrlValidationResult.INVALID


@pytest.mark.asyncio
async def test_guard_disabled(monkeypatch):
    monkeypatch.setattr(config.security, "enable_ssrf_protection", False)
    assert await SecurityValidator.validate_url("http://127.0.0.1/") == UrlValidationResult.OK
