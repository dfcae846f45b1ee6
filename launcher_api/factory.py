"""App factory and process entrypoint for the launcher backend.

- Wraps the API in the CORS + access-log middleware
- Mounts the news images directory under `/images`
- Registers routers for news, version and download endpoints
- Renders HTTP errors as plain text

Importing this module builds nothing; `run()` reads the environment itself so
a bad configuration is reported before any app exists.
"""

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import PlainTextResponse
from starlette.staticfiles import StaticFiles

from .core.access_log import AccessLog
from .core.config import Settings
from .core.log_setup import configure_logging
from .middleware import cors_and_access_log
from .routers import download, news, version

logger = logging.getLogger(__name__)

# Idle keep-alive connections are closed after this many seconds
KEEP_ALIVE_TIMEOUT = 15


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    if settings is None:
        settings = Settings.from_env()

    app = FastAPI(
        title="Launcher Backend",
        version="1.0.0",
        description="News, versions and client downloads for the game launcher",
    )
    app.state.settings = settings
    app.state.access_log = AccessLog(settings.logs_dir)

    app.add_middleware(BaseHTTPMiddleware, dispatch=cors_and_access_log(app.state.access_log))

    # Errors go out as plain text with the message, no JSON body
    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request, exc: StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code,
                                 headers=getattr(exc, "headers", None))

    # Static news images; the directory is checked on first request
    app.mount("/images", StaticFiles(directory=settings.images_dir, check_dir=False), name="images")

    # Register routers
    app.include_router(news.router)
    app.include_router(version.router)
    app.include_router(download.router)

    @app.on_event("startup")
    def _startup_prepare():
        settings.images_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Launcher backend on http://%s:%d", settings.host, settings.server_port)
        logger.info("Versions: launcher=%s game=%s", settings.launcher_version, settings.game_version)
        logger.info("Clients directory: %s", settings.clients_dir)

    return app


def run() -> None:
    """Console entrypoint: read settings from the environment and serve."""
    try:
        settings = Settings.from_env()
    except ValidationError as e:
        configure_logging()
        logger.critical("Invalid configuration: %s", e)
        sys.exit(1)

    configure_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.server_port,
        timeout_keep_alive=KEEP_ALIVE_TIMEOUT,
    )


if __name__ == "__main__":
    run()
