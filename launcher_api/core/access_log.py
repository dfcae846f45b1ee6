"""Daily access log and client IP resolution.

Every handled API request appends one line to `access_<YYYY-MM-DD>.log`
under the configured logs directory. The log is best-effort: write failures
are reported on the console logger and never reach the client.
"""

import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional

from starlette.requests import Request

logger = logging.getLogger(__name__)

# Path prefix -> category marker written to the access log
CATEGORIES = (
    ("/api/news", "news"),
    ("/api/version", "version"),
    ("/api/download", "download"),
)
DEFAULT_CATEGORY = "api"


def category_for(path: str) -> str:
    """Return the access-log category marker for a request path."""
    for prefix, category in CATEGORIES:
        if path == prefix or path.startswith(prefix + "/"):
            return category
    return DEFAULT_CATEGORY


def client_ip(request: Request) -> str:
    """
    Resolve the caller's IP address.

    Precedence: `X-Real-IP`, then the first entry of `X-Forwarded-For`,
    then the transport peer. Proxy headers are trusted as sent.
    """
    ip = request.headers.get("x-real-ip", "").strip()
    if ip:
        return ip
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        ip = forwarded.split(",")[0].strip()
        if ip:
            return ip
    if request.client is not None and request.client.host:
        return request.client.host
    return "unknown"


class AccessLog:
    """Appends one line per request to a per-day log file."""

    def __init__(self, logs_dir: Path):
        self.logs_dir = Path(logs_dir)
        self._lock = threading.Lock()

    def path_for(self, when: datetime) -> Path:
        return self.logs_dir / f"access_{when:%Y-%m-%d}.log"

    def record(self, ip: str, endpoint: str, category: str,
               when: Optional[datetime] = None) -> bool:
        """
        Append an access line.

        Args:
            ip: resolved client address
            endpoint: request path
            category: marker from `category_for`
            when: timestamp, defaults to now

        Returns:
            True if the line was written, False if logging failed
        """
        when = when or datetime.now()
        line = f"[{when:%Y-%m-%d %H:%M:%S}] {ip} {endpoint} - {category}\n"
        try:
            with self._lock:
                self.logs_dir.mkdir(parents=True, exist_ok=True)
                with open(self.path_for(when), "a", encoding="utf-8") as f:
                    f.write(line)
        except OSError as e:
            logger.error("Failed to write access log in %s: %s", self.logs_dir, e)
            return False
        return True
