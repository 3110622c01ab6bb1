import functools
from fastapi import APIRouter, Request
from downloader_api.core.errors import ExtractionError, NoStreamError, RelayError, api_error
from downloader_api.core.logging import log_info, log_error, log_warning
from downloader_api.models.request import InfoRequest, YouTubeDownloadRequest
from downloader_api.models.response import YouTubeInfoResponse
from downloader_api.services import relay, youtube
from downloader_api.utils.filename import sanitize_title
from downloader_api.utils.locale import get_locale, safe_url_for_log
from downloader_api.utils.validators import is_youtube_url
from downloader_api.i18n import i18n

router = APIRouter()

@router.post("/info", response_model=YouTubeInfoResponse, response_model_exclude_none=True)
async def get_video_info(request: Request, video_request: InfoRequest):
    """Get title, author, thumbnail and progressive qualities of a YouTube video"""
    
    locale = get_locale(request.headers.get("accept-language"))
    _ = functools.partial(i18n.get, locale=locale)

    if not is_youtube_url(video_request.url):
        raise api_error(400, _("error.invalid_youtube_url"))

    log_info(request, _("log.fetching_info", url=safe_url_for_log(video_request.url)))

    try:
        info = await youtube.get_info(video_request.url)
        metadata = youtube.map_metadata(info)
    except ExtractionError as e:
        log_error(request, f"YouTube info error: {e}")
        raise api_error(500, _("error.fetch_info_failed"), str(e))

    log_info(request, _("log.info_retrieved", title=metadata.title, count=len(metadata.qualities)))

    return YouTubeInfoResponse(
        title=metadata.title,
        thumbnail=metadata.thumbnail,
        duration=metadata.duration,
        author=metadata.author,
        qualities=metadata.qualities,
    )

@router.post("/download")
async def download_video(request: Request, video_request: YouTubeDownloadRequest):
    """Relay one progressive stream of a YouTube video as an mp4 attachment"""

    locale = get_locale(request.headers.get("accept-language"))
    _ = functools.partial(i18n.get, locale=locale)

    if not is_youtube_url(video_request.url):
        raise api_error(400, _("error.invalid_youtube_url"))

    try:
        info = await youtube.get_info(video_request.url)
        stream = youtube.select_format(info, video_request.itag)
    except ExtractionError as e:
        log_error(request, f"YouTube download error: {e}")
        raise api_error(500, _("error.download_failed"), str(e))
    except NoStreamError as e:
        log_warning(request, str(e))
        raise api_error(404, _("error.quality_not_found"), str(e))

    filename = f"{sanitize_title(info.get('title'))}.mp4"

    try:
        return await relay.relay(request, stream.url, filename, stream.http_headers or None)
    except RelayError as e:
        log_error(request, f"Stream error: {e}")
        raise api_error(500, _("error.stream_failed"), str(e))
