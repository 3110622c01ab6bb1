"""Deduplicate and order quality options by the resolution in their label."""
import re
from typing import List, Optional

from downloader_api.models.response import QualityOption

RESOLUTION_RE = re.compile(r"(\d+)p")


def parse_resolution(label: Optional[str]) -> Optional[int]:
    """Return the integer before the first 'p' in a label ("1080p60" -> 1080)"""
    if not label:
        return None
    match = RESOLUTION_RE.search(label)
    return int(match.group(1)) if match else None


def dedupe_by_label(options: List[QualityOption]) -> List[QualityOption]:
    """Keep the first option per label, preserving order"""
    seen = set()
    unique = []
    for option in options:
        if option.quality in seen:
            continue
        seen.add(option.quality)
        unique.append(option)
    return unique


def sort_by_resolution(options: List[QualityOption]) -> List[QualityOption]:
    """
    Highest resolution first. The sort is stable: equal resolutions keep
    their input order, and labels without a resolution go last in input order.
    """
    def key(option: QualityOption):
        resolution = parse_resolution(option.quality)
        if resolution is None:
            return (1, 0)
        return (0, -resolution)

    return sorted(options, key=key)


def normalize(options: List[QualityOption]) -> List[QualityOption]:
    return sort_by_resolution(dedupe_by_label(options))


def format_size(num_bytes) -> str:
    """Render a byte count as 'X.XX MB', or 'Unknown'"""
    try:
        value = float(num_bytes)
    except (TypeError, ValueError):
        return "Unknown"
    if value <= 0:
        return "Unknown"
    return f"{value / (1024 * 1024):.2f} MB"
