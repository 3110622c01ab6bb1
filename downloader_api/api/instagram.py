import functools
from fastapi import APIRouter, Request
from downloader_api.core.errors import ExtractionError, NoStreamError, RelayError, api_error
from downloader_api.core.logging import log_info, log_error, log_warning
from downloader_api.core.security import SecurityValidator, UrlValidationResult
from downloader_api.models.request import InfoRequest, InstagramDownloadRequest
from downloader_api.models.response import InstagramInfoResponse
from downloader_api.services import instagram, relay
from downloader_api.utils.locale import get_locale, safe_url_for_log
from downloader_api.utils.validators import is_http_url, is_instagram_url
from downloader_api.i18n import i18n

INSTAGRAM_FILENAME = "instagram_video.mp4"

router = APIRouter()

@router.post("/info", response_model=InstagramInfoResponse, response_model_exclude_none=True)
async def get_post_info(request: Request, video_request: InfoRequest):
    """List the direct video URLs of an Instagram post"""

    locale = get_locale(request.headers.get("accept-language"))
    _ = functools.partial(i18n.get, locale=locale)

    if not is_instagram_url(video_request.url):
        raise api_error(400, _("error.invalid_instagram_url"))

    log_info(request, _("log.fetching_info", url=safe_url_for_log(video_request.url)))

    try:
        info = await instagram.get_info(video_request.url)
        media = instagram.map_media(info)
    except NoStreamError as e:
        log_warning(request, str(e))
        raise api_error(404, _("error.instagram_not_found"))
    except ExtractionError as e:
        log_error(request, f"Instagram info error: {e}")
        raise api_error(500, _("error.instagram_fetch_failed"), str(e))

    return InstagramInfoResponse(thumbnail=media.thumbnail, qualities=media.qualities)

@router.post("/download")
async def download_post_video(request: Request, video_request: InstagramDownloadRequest):
    """Relay a direct Instagram media URL as an mp4 attachment"""

    locale = get_locale(request.headers.get("accept-language"))
    _ = functools.partial(i18n.get, locale=locale)

    if not video_request.quality_url:
        raise api_error(400, _("error.quality_url_required"))

    if not is_http_url(video_request.quality_url):
        raise api_error(400, _("error.invalid_quality_url"))

    # qualityUrl comes from the caller, so guard it like any outbound fetch
    validation_result = await SecurityValidator.validate_url(video_request.quality_url)
    if validation_result == UrlValidationResult.BLOCKED:
        raise api_error(403, _("error.blocked_url"))
    if validation_result == UrlValidationResult.INVALID:
        raise api_error(400, _("error.invalid_quality_url"))

    try:
        return await relay.relay(request, video_request.quality_url, INSTAGRAM_FILENAME)
    except RelayError as e:
        log_error(request, f"Instagram download error: {e}")
        raise api_error(500, _("error.download_failed"), str(e))
