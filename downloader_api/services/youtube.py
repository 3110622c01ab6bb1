from typing import List, Optional

from downloader_api.core.errors import NoStreamError
from downloader_api.models.internal import ResolvedStream, VideoMetadata
from downloader_api.models.response import QualityOption
from downloader_api.services import quality
from downloader_api.services.ytdlp import fetch_info


def _has(codec) -> bool:
    return codec not in (None, "none")


def is_progressive(f: dict) -> bool:
    """Format with both audio and video in one stream"""
    return _has(f.get("vcodec")) and _has(f.get("acodec")) and bool(f.get("url"))


def quality_label(f: dict) -> str:
    note = f.get("format_note") or ""
    if quality.parse_resolution(note) is not None:
        return note
    if f.get("height"):
        return f"{f['height']}p"
    return note or str(f.get("format_id"))


def map_qualities(info: dict) -> List[QualityOption]:
    return [
        QualityOption(
            itag=str(f.get("format_id")),
            quality=quality_label(f),
            format=f.get("ext") or "mp4",
            size=quality.format_size(f.get("filesize") or f.get("filesize_approx")),
            has_audio=True,
            has_video=True,
        )
        for f in info.get("formats") or []
        if is_progressive(f)
    ]


def best_thumbnail(info: dict) -> Optional[str]:
    if info.get("thumbnail"):
        return info["thumbnail"]
    thumbnails = info.get("thumbnails") or []
    return thumbnails[-1].get("url") if thumbnails else None


def map_metadata(info: dict) -> VideoMetadata:
    duration = info.get("duration")
    return VideoMetadata(
        title=info.get("title") or "Unknown",
        thumbnail=best_thumbnail(info),
        duration=int(duration) if duration is not None else None,
        author=info.get("uploader") or info.get("channel"),
        qualities=quality.normalize(map_qualities(info)),
    )


def select_format(info: dict, itag: Optional[str] = None) -> ResolvedStream:
    """Pick the progressive format to relay: the requested itag or the best one"""
    candidates = [f for f in info.get("formats") or [] if is_progressive(f)]

    if itag is not None:
        candidates = [f for f in candidates if str(f.get("format_id")) == str(itag)]

    if not candidates:
        raise NoStreamError(f"No progressive stream for itag {itag}" if itag else "No progressive stream")

    chosen = max(candidates, key=lambda f: (f.get("height") or 0, f.get("tbr") or 0))
    return ResolvedStream(url=chosen["url"], http_headers=chosen.get("http_headers") or {})


async def get_info(url: str) -> dict:
    return await fetch_info(url)
