from typing import List

from downloader_api.core.errors import NoStreamError
from downloader_api.models.internal import InstagramMedia
from downloader_api.models.response import QualityOption
from downloader_api.services import quality
from downloader_api.services.ytdlp import fetch_info

# Used when no stream has a height, by position in the best-first list
POSITION_LABELS = ["1080p (Full HD)", "720p (HD)", "480p"]


def height_label(height: int) -> str:
    if height >= 1080:
        return f"{height}p (Full HD)"
    if height >= 720:
        return f"{height}p (HD)"
    return f"{height}p"


def _is_video(f: dict) -> bool:
    return f.get("vcodec") != "none" and bool(f.get("url"))


def pick_entry(info: dict) -> dict:
    """Carousel posts come back as playlists; use the first video entry"""
    entries = info.get("entries")
    if not entries:
        return info
    for entry in entries:
        if not entry:
            continue
        if any(_is_video(f) for f in entry.get("formats") or []) or entry.get("url"):
            return entry
    return {}


def candidate_formats(entry: dict) -> List[dict]:
    formats = [f for f in entry.get("formats") or [] if _is_video(f)]
    if formats:
        return sorted(formats, key=lambda f: (f.get("height") or 0, f.get("tbr") or 0), reverse=True)
    if entry.get("url"):
        return [entry]
    return []


def map_media(info: dict) -> InstagramMedia:
    entry = pick_entry(info)
    formats = candidate_formats(entry)
    if not formats:
        raise NoStreamError("No downloadable video in post")

    # Positional labels only make sense when no stream reports a height
    any_height = any(f.get("height") for f in formats)

    options = []
    for index, f in enumerate(formats):
        if f.get("height"):
            label = height_label(int(f["height"]))
        elif any_height:
            label = "Unknown"
        else:
            label = POSITION_LABELS[min(index, len(POSITION_LABELS) - 1)]
        options.append(QualityOption(
            quality=label,
            format=f.get("ext") or "mp4",
            size=quality.format_size(f.get("filesize") or f.get("filesize_approx")),
            url=f["url"],
        ))

    return InstagramMedia(
        thumbnail=entry.get("thumbnail") or info.get("thumbnail") or formats[0]["url"],
        qualities=quality.normalize(options),
    )


async def get_info(url: str) -> dict:
    return await fetch_info(url, single_json=True)
