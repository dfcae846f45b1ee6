"""CORS and access logging around the API handlers.

`cors_and_access_log` composes the two concerns into a single dispatch
function wrapped around the rest of the application, so individual handlers
contain neither CORS headers nor logging calls.
"""

import logging

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import Response

from .core.access_log import AccessLog, category_for, client_ip

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
API_PREFIX = "/api/"


def is_api_path(path: str) -> bool:
    return path.startswith(API_PREFIX)


def cors_and_access_log(access_log: AccessLog):
    """
    Build a middleware dispatch function.

    - sets the CORS headers on every response
    - answers OPTIONS preflight on API paths with an empty 200
    - appends an access-log line after each other API request
    """
    async def dispatch(request: Request, call_next) -> Response:
        path = request.url.path

        # Preflight never reaches a handler and is not logged
        if request.method == "OPTIONS" and is_api_path(path):
            return Response(status_code=200, headers=CORS_HEADERS)

        response = await call_next(request)
        response.headers.update(CORS_HEADERS)

        if is_api_path(path):
            ip = client_ip(request)
            category = category_for(path)
            logger.info("%s request %s from %s -> %d", category, path, ip, response.status_code)
            await run_in_threadpool(access_log.record, ip, path, category)
        return response

    return dispatch
