import logging
import uuid

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from downloader_api.api import health, instagram, youtube
from downloader_api.config.settings import config
from downloader_api.core.errors import http_exception_handler, validation_exception_handler
from downloader_api.core.logging import setup_logging
from downloader_api.core.state import state
from downloader_api.services.relay import close_client
from downloader_api.services.ytdlp import detect_version

setup_logging()
logger = logging.getLogger("downloader_api")

app = FastAPI(
    title=config.api.title,
    version=config.api.version,
    docs_url="/docs" if config.api.debug else None,
    redoc_url=None
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.api.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Request-ID"],
)

@app.middleware("http")
async def assign_request_id(request: Request, call_next):
    request.state.request_id = uuid.uuid4().hex[:12]
    response = await call_next(request)
    response.headers["X-Request-ID"] = request.state.request_id
    return response

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# Routes
app.include_router(health.router, tags=["Health"])
app.include_router(youtube.router, prefix="/api/youtube", tags=["YouTube"])
app.include_router(instagram.router, prefix="/api/instagram", tags=["Instagram"])

@app.on_event("startup")
async def startup_event():
    state.ytdlp_version = await detect_version()
    logger.info(f"yt-dlp version: {state.ytdlp_version}")
    logger.info("YouTube endpoints: /api/youtube/info, /api/youtube/download")
    logger.info("Instagram endpoints: /api/instagram/info, /api/instagram/download")

@app.on_event("shutdown")
async def shutdown_event():
    await close_client()

def run():
    logger.info(f"Server starting on port {config.port}")
    uvicorn.run(app, host=config.server.host, port=config.port, log_level=config.logging.level.lower())

if __name__ == "__main__":
    run()
