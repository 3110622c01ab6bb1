from pydantic import BaseModel
from typing import Dict, List, Optional
from downloader_api.models.response import QualityOption

class VideoMetadata(BaseModel):
    """Provider-independent view of an extracted video"""
    title: str
    thumbnail: Optional[str] = None
    duration: Optional[int] = None
    author: Optional[str] = None
    qualities: List[QualityOption] = []

class InstagramMedia(BaseModel):
    thumbnail: Optional[str] = None
    qualities: List[QualityOption] = []

class ResolvedStream(BaseModel):
    """Direct media URL picked for relaying"""
    url: str
    http_headers: Dict[str, str] = {}
