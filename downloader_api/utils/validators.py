import re
from typing import Optional
from urllib.parse import parse_qs, urlparse

YOUTUBE_HOSTS = {
    "youtube.com",
    "www.youtube.com",
    "m.youtube.com",
    "music.youtube.com",
    "gaming.youtube.com",
    "youtube-nocookie.com",
    "www.youtube-nocookie.com",
}
YOUTUBE_SHORT_HOST = "youtu.be"
YOUTUBE_PATH_PREFIXES = ("shorts", "embed", "v", "live")

VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")


def _parse_http(url) -> Optional[tuple]:
    if not isinstance(url, str) or not url.strip():
        return None
    try:
        parsed = urlparse(url.strip())
        hostname = parsed.hostname
    except ValueError:
        return None
    if parsed.scheme not in ("http", "https") or not hostname:
        return None
    return parsed, hostname.lower()


def is_http_url(url) -> bool:
    return _parse_http(url) is not None


def extract_youtube_id(url) -> Optional[str]:
    """Return the 11-character video id of a YouTube URL, or None"""
    result = _parse_http(url)
    if result is None:
        return None
    parsed, hostname = result

    segments = [s for s in parsed.path.split("/") if s]
    candidate = None

    if hostname == YOUTUBE_SHORT_HOST:
        candidate = segments[0] if segments else None
    elif hostname in YOUTUBE_HOSTS:
        query_id = parse_qs(parsed.query).get("v")
        if query_id:
            candidate = query_id[0]
        elif len(segments) >= 2 and segments[0] in YOUTUBE_PATH_PREFIXES:
            candidate = segments[1]

    if candidate and VIDEO_ID_RE.match(candidate):
        return candidate
    return None


def is_youtube_url(url) -> bool:
    return extract_youtube_id(url) is not None


def is_instagram_url(url) -> bool:
    result = _parse_http(url)
    if result is None:
        return False
    _, hostname = result
    return hostname == "instagram.com" or hostname.endswith(".instagram.com")
