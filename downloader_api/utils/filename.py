import re

DEFAULT_STEM = "video"


def sanitize_title(title: str, max_length: int = 200) -> str:
    """Strip everything except ASCII word characters and whitespace from a title"""
    stem = re.sub(r"[^\w\s]", "", title or "", flags=re.ASCII)
    stem = re.sub(r"\s+", " ", stem, flags=re.ASCII).strip()[:max_length].strip()
    return stem or DEFAULT_STEM


def attachment_disposition(filename: str) -> str:
    return f'attachment; filename="{filename}"'
