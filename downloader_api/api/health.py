import functools
from fastapi import APIRouter, Request

from downloader_api.config.settings import config
from downloader_api.core.state import state
from downloader_api.i18n import i18n
from downloader_api.models.response import HealthResponse
from downloader_api.utils.locale import get_locale

router = APIRouter()


@router.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": config.api.title,
        "version": config.api.version,
        "ytdlp_version": state.ytdlp_version,
    }


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """Liveness check; does not touch yt-dlp or upstreams"""
    locale = get_locale(request.headers.get("accept-language"))
    _ = functools.partial(i18n.get, locale=locale)
    return HealthResponse(status="OK", message=_("health.message"))
