from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class QualityOption(BaseModel):
    """One candidate stream variant"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    itag: Optional[str] = None
    quality: str
    format: str
    size: str = "Unknown"
    has_audio: Optional[bool] = None
    has_video: Optional[bool] = None
    url: Optional[str] = None


class YouTubeInfoResponse(BaseModel):
    success: bool = True
    title: str
    thumbnail: Optional[str] = None
    duration: Optional[int] = None
    author: Optional[str] = None
    qualities: List[QualityOption] = []


class InstagramInfoResponse(BaseModel):
    success: bool = True
    thumbnail: Optional[str] = None
    qualities: List[QualityOption] = []


class HealthResponse(BaseModel):
    status: str
    message: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
