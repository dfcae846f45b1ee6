"""Service-wide configuration.

Settings are read once from the environment at process start and handed to
the app factory. Handlers receive them through `get_settings`, never from a
module-level global.
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from fastapi import Request
from pydantic import BaseModel, ConfigDict, Field

# Environment variable -> Settings field
ENV_KEYS = {
    "SERVER_HOST": "host",
    "SERVER_PORT": "server_port",
    "LAUNCHER_CLIENT_FILE": "launcher_client_file",
    "GAME_CLIENT_FILE": "game_client_file",
    "LAUNCHER_VERSION": "launcher_version",
    "GAME_VERSION": "game_version",
    "CLIENTS_DIR": "clients_dir",
    "NEWS_FILE": "news_file",
    "IMAGES_DIR": "images_dir",
    "LOGS_DIR": "logs_dir",
    "LOG_LEVEL": "log_level",
}


class Settings(BaseModel):
    """
    Launcher backend configuration.

    Versions are opaque strings; file names are resolved under `clients_dir`
    at request time, so a missing client file only surfaces as a 404.
    """
    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    server_port: int = Field(8080, ge=1, le=65535)

    launcher_client_file: str = "launcher.exe"
    game_client_file: str = "Loil.exe"
    launcher_version: str = "0.0.0"
    game_version: str = "0.0.0"

    clients_dir: Path = Path("clients")
    news_file: Path = Path("news/news.json")
    images_dir: Path = Path("images")
    logs_dir: Path = Path("logs")

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: mapping to read from, defaults to `os.environ`

        Returns:
            Settings with defaults for every unset or empty variable

        Raises:
            pydantic.ValidationError: if a value cannot be converted
        """
        if environ is None:
            environ = os.environ
        values = {}
        for key, field in ENV_KEYS.items():
            value = environ.get(key, "")
            if value != "":
                values[field] = value
        return cls(**values)


def get_settings(request: Request) -> Settings:
    """FastAPI dependency returning the settings the app was built with."""
    return request.app.state.settings
