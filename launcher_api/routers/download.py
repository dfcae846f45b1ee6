"""Client download endpoints.

Exposes:
- GET /api/download/launcher: launcher binary
- GET /api/download/game: game binary
- GET /api/download/{launcher,game}/info: name, size and hash without the body
"""

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException
from starlette.responses import StreamingResponse

from ..content.clients import describe_client_file, open_client_download, stream_file
from ..core.config import Settings, get_settings
from ..core.errors import ClientFileIOError, ClientFileNotFoundError
from ..core.models_io import ClientKind, FileDownloadDescriptor, FileInfoResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/download", tags=["download"])


def content_disposition(filename: str) -> str:
    """
    Build the attachment header for a client file name.

    ASCII names go out as a quoted `filename`. Other names get an ASCII
    fallback (non-ASCII characters replaced by `?`) plus the RFC 5987
    `filename*` form.
    """
    fallback = filename.replace("\\", "\\\\").replace('"', '\\"')
    if filename.isascii():
        return f'attachment; filename="{fallback}"'
    fallback = fallback.encode("ascii", "replace").decode("ascii")
    return f"attachment; filename=\"{fallback}\"; filename*=utf-8''{quote(filename)}"


def download_headers(descriptor: FileDownloadDescriptor) -> dict:
    headers = {
        "Content-Disposition": content_disposition(descriptor.filename),
        "Content-Length": str(descriptor.size),
    }
    if descriptor.hash:
        headers["X-File-Hash"] = descriptor.hash
    return headers


def serve_download(kind: ClientKind, settings: Settings) -> StreamingResponse:
    """Open the client file and stream it with its descriptive headers."""
    try:
        descriptor, f = open_client_download(settings, kind)
    except ClientFileNotFoundError as e:
        logger.error("Download %s: %s", kind.value, e)
        raise HTTPException(status_code=404, detail="File not found")
    except ClientFileIOError as e:
        logger.error("Download %s: %s", kind.value, e)
        raise HTTPException(status_code=500, detail=f"Failed to open file: {e}")

    # Headers are complete here, before the first chunk is read
    return StreamingResponse(
        stream_file(f, descriptor),
        media_type="application/octet-stream",
        headers=download_headers(descriptor),
    )


def file_info(kind: ClientKind, settings: Settings) -> FileInfoResponse:
    try:
        descriptor = describe_client_file(settings, kind)
    except ClientFileNotFoundError as e:
        logger.error("File info %s: %s", kind.value, e)
        raise HTTPException(status_code=404, detail="File not found")
    except ClientFileIOError as e:
        logger.error("File info %s: %s", kind.value, e)
        raise HTTPException(status_code=500, detail=f"Failed to read file info: {e}")
    return FileInfoResponse(filename=descriptor.filename, size=descriptor.size, hash=descriptor.hash)


@router.get("/launcher")
def download_launcher(settings: Settings = Depends(get_settings)):
    return serve_download(ClientKind.LAUNCHER, settings)


@router.get("/game")
def download_game(settings: Settings = Depends(get_settings)):
    return serve_download(ClientKind.GAME, settings)


@router.get("/launcher/info", response_model=FileInfoResponse)
def launcher_info(settings: Settings = Depends(get_settings)):
    return file_info(ClientKind.LAUNCHER, settings)


@router.get("/game/info", response_model=FileInfoResponse)
def game_info(settings: Settings = Depends(get_settings)):
    return file_info(ClientKind.GAME, settings)
