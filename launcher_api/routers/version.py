"""Version endpoint.

Exposes:
- GET /api/version: configured launcher and game versions
"""

from fastapi import APIRouter, Depends

from ..core.config import Settings, get_settings
from ..core.models_io import VersionResponse

router = APIRouter(prefix="/api", tags=["version"])


@router.get("/version", response_model=VersionResponse)
def version(settings: Settings = Depends(get_settings)):
    """Versions are opaque strings, returned exactly as configured."""
    return VersionResponse(
        launcher_version=settings.launcher_version,
        game_version=settings.game_version,
    )
