from .filename import sanitize_title
from .validators import is_http_url, is_instagram_url, is_youtube_url

__all__ = ["is_http_url", "is_instagram_url", "is_youtube_url", "sanitize_title"]
