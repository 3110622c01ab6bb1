from pydantic import BaseModel, Field, field_validator
from typing import Optional

class InfoRequest(BaseModel):
    """URL syntax is checked per platform at the endpoint"""
    url: Optional[str] = Field(None, description="Video page URL")

class YouTubeDownloadRequest(InfoRequest):
    itag: Optional[str] = Field(None, description="yt-dlp format id of the wanted quality")

    @field_validator("itag", mode="before")
    @classmethod
    def coerce_itag(cls, v):
        """Accept numeric itags as sent by JS clients"""
        if v is None or v == "":
            return None
        if isinstance(v, bool):
            raise ValueError("itag must be a string or integer")
        if isinstance(v, int):
            return str(v)
        return v

class InstagramDownloadRequest(InfoRequest):
    quality_url: Optional[str] = Field(None, alias="qualityUrl", description="Direct media URL from /api/instagram/info")
