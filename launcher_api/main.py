"""ASGI entrypoint for the launcher backend.

Builds the app from the environment at import time, for
`uvicorn launcher_api.main:app`. Use the `launcher-api` script
(`launcher_api.factory:run`) to get a clean exit on bad configuration.
"""

from .factory import create_app

app = create_app()
