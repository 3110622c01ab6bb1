import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from downloader_api.config.settings import config
from downloader_api.main import app
from downloader_api.services import relay

VIDEO_BYTES = b"\x00\x00\x00\x18ftypmp42" + b"\x01" * 4096


def youtube_info(**overrides) -> dict:
    info = {
        "id": "dQw4w9WgXcQ",
        "title": "Never Gonna: Give You Up! (Official)",
        "uploader": "Rick Astley",
        "duration": 212.0,
        "thumbnail": "https://i.ytimg.com/vi/dQw4w9WgXcQ/maxresdefault.jpg",
        "formats": [
            {"format_id": "18", "format_note": "360p", "height": 360, "ext": "mp4",
             "vcodec": "avc1.42001E", "acodec": "mp4a.40.2", "filesize": 10485760,
             "url": "https://rr1.googlevideo.com/videoplayback?itag=18",
             "http_headers": {"User-Agent": "yt-dlp-test"}},
            {"format_id": "140", "format_note": "medium", "ext": "m4a",
             "vcodec": "none", "acodec": "mp4a.40.2",
             "url": "https://rr1.googlevideo.com/videoplayback?itag=140"},
            {"format_id": "137", "format_note": "1080p", "height": 1080, "ext": "mp4",
             "vcodec": "avc1.640028", "acodec": "none",
             "url": "https://rr1.googlevideo.com/videoplayback?itag=137"},
            {"format_id": "22", "format_note": "720p", "height": 720, "ext": "mp4",
             "vcodec": "avc1.64001F", "acodec": "mp4a.40.2",
             "url": "https://rr1.googlevideo.com/videoplayback?itag=22"},
        ],
    }
    info.update(overrides)
    return info


def instagram_info(**overrides) -> dict:
    info = {
        "id": "C0abcdef",
        "thumbnail": "https://scontent.cdninstagram.com/thumb.jpg",
        "formats": [
            {"format_id": "dash-480", "height": 480, "ext": "mp4", "vcodec": "avc1", "acodec": "none",
             "url": "https://scontent.cdninstagram.com/v480.mp4"},
            {"format_id": "dash-1080", "height": 1080, "ext": "mp4", "vcodec": "avc1", "acodec": "none",
             "url": "https://scontent.cdninstagram.com/v1080.mp4", "filesize": 2097152},
            {"format_id": "audio", "ext": "m4a", "vcodec": "none", "acodec": "mp4a",
             "url": "https://scontent.cdninstagram.com/a.m4a"},
        ],
    }
    info.update(overrides)
    return info


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def no_ssrf_guard(monkeypatch):
    monkeypatch.setattr(config.security, "enable_ssrf_protection", False)


@pytest.fixture
def upstream(monkeypatch):
    """Replace the relay's HTTP client with a MockTransport; returns the seen requests"""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if "missing" in request.url.path:
            return httpx.Response(403, content=b"forbidden")
        return httpx.Response(
            200,
            content=VIDEO_BYTES,
            headers={"Content-Type": "application/octet-stream"},
        )

    monkeypatch.setattr(relay, "client", httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    return seen
