"""Pydantic response schemas used by the API.

These match the JSON the launcher client already consumes, so field names
stay exactly as the client expects them.
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel


class ClientKind(str, Enum):
    """Downloadable client binaries."""
    LAUNCHER = "launcher"
    GAME = "game"


class NewsItem(BaseModel):
    """
    One entry of the news feed.

    Missing fields fall back to empty values; unknown fields are ignored.
    """
    id: int = 0
    title: str = ""
    content: str = ""
    image: str = ""  # file name under the images directory
    date: str = ""


class NewsResponse(BaseModel):
    news: List[NewsItem]


class VersionResponse(BaseModel):
    launcher_version: str
    game_version: str


class FileInfoResponse(BaseModel):
    """Metadata of a downloadable client file."""
    filename: str
    size: int               # bytes
    hash: Optional[str]     # hex digest, null if it could not be computed


class FileDownloadDescriptor(BaseModel):
    """Per-request description of a resolved client file."""
    path: Path
    filename: str
    size: int
    hash: Optional[str] = None
