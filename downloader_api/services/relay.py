from typing import AsyncIterator, Dict, Optional
from urllib.parse import urlparse

import httpx
from fastapi import Request
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from downloader_api.config.settings import config
from downloader_api.core.errors import RelayError
from downloader_api.core.logging import log_error, log_info
from downloader_api.utils.filename import attachment_disposition
from downloader_api.utils.locale import safe_url_for_log

MEDIA_TYPE = "video/mp4"

UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)

# Reuse client for keep-alive
client = httpx.AsyncClient(
    follow_redirects=True,
    timeout=httpx.Timeout(config.relay.read_timeout, connect=config.relay.connect_timeout),
)


async def close_client() -> None:
    await client.aclose()


def default_headers(target_url: str) -> Dict[str, str]:
    parsed = urlparse(target_url)
    return {
        "User-Agent": UA,
        "Accept": "*/*",
        "Accept-Language": "en-US,en;q=0.9",
        "Accept-Encoding": "identity",
        "Referer": f"{parsed.scheme}://{parsed.netloc}/",
    }


async def open_stream(url: str, headers: Optional[Dict[str, str]] = None) -> httpx.Response:
    """Send the upstream request and return the response with its body unread"""
    req = client.build_request("GET", url, headers=headers or default_headers(url))
    try:
        r = await client.send(req, stream=True)
    except httpx.HTTPError as e:
        raise RelayError(f"Upstream request failed: {e}")

    if r.status_code >= 400:
        await r.aclose()
        raise RelayError(f"Upstream responded with HTTP {r.status_code}")
    return r


async def relay(
    request: Request,
    url: str,
    filename: str,
    headers: Optional[Dict[str, str]] = None,
) -> StreamingResponse:
    """
    Relay a media URL to the caller as an attachment.

    The upstream is opened before the response starts, so its failures
    surface as RelayError while a JSON error can still be sent. Failures
    after that only end the body.
    """
    response_headers = {
        "Content-Disposition": attachment_disposition(filename),
        "X-Content-Type-Options": "nosniff",
        "Cache-Control": "no-cache",
    }

    r = await open_stream(url, headers)
    log_info(request, f"Relaying {filename} from {safe_url_for_log(url)}")

    async def generate() -> AsyncIterator[bytes]:
        try:
            async for chunk in r.aiter_bytes(config.relay.chunk_size):
                yield chunk
        except httpx.HTTPError as e:
            # Headers are already sent; nothing left but to cut the body short
            log_error(request, f"Stream error after headers were sent: {e}")
        finally:
            await r.aclose()

    content_length = r.headers.get("content-length")
    # aiter_bytes decodes, so an encoded body has a different length
    if content_length and content_length.isdigit() and "content-encoding" not in r.headers:
        response_headers["Content-Length"] = content_length

    try:
        return StreamingResponse(
            generate(),
            media_type=MEDIA_TYPE,
            headers=response_headers,
            background=BackgroundTask(r.aclose),
        )
    except Exception:
        await r.aclose()
        raise
