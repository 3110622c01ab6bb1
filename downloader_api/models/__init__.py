from .internal import InstagramMedia, ResolvedStream, VideoMetadata
from .request import InfoRequest, InstagramDownloadRequest, YouTubeDownloadRequest
from .response import (
    ErrorResponse,
    HealthResponse,
    InstagramInfoResponse,
    QualityOption,
    YouTubeInfoResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "InfoRequest",
    "InstagramDownloadRequest",
    "InstagramInfoResponse",
    "InstagramMedia",
    "QualityOption",
    "ResolvedStream",
    "VideoMetadata",
    "YouTubeDownloadRequest",
    "YouTubeInfoResponse",
]
