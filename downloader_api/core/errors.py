from typing import Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from downloader_api.i18n import i18n
from downloader_api.models.response import ErrorResponse
from downloader_api.utils.locale import get_locale


class ExtractionError(Exception):
    """yt-dlp failed or produced unusable output"""


class NoStreamError(Exception):
    """Extraction succeeded but no usable stream was found"""


class RelayError(Exception):
    """Upstream media fetch failed"""


def api_error(status_code: int, error: str, details: Optional[str] = None) -> HTTPException:
    """Build an HTTPException carrying the {error, details?} envelope"""
    detail = {"error": error}
    if details:
        detail["details"] = details
    return HTTPException(status_code=status_code, detail=detail)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc.detail, dict):
        body = ErrorResponse(**exc.detail)
    else:
        body = ErrorResponse(error=str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    locale = get_locale(request.headers.get("accept-language"))
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    body = ErrorResponse(error=i18n.get("error.invalid_request", locale=locale), details=details)
    return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))
