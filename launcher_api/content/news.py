"""News feed accessor.

The feed is a JSON array authored outside the service. It is re-read on
every call so edits show up without a restart.
"""

from pathlib import Path
from typing import List

from pydantic import TypeAdapter, ValidationError

from ..core.errors import NewsParseError, NewsReadError
from ..core.models_io import NewsItem


_news_adapter = TypeAdapter(List[NewsItem])


def load_news(path: Path) -> List[NewsItem]:
    """
    Read and parse the news file.

    Args:
        path: location of the JSON news file

    Returns:
        News items in file order

    Raises:
        NewsReadError: the file is missing or unreadable
        NewsParseError: the content is not a JSON array of news objects
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise NewsReadError(f"cannot read news file {path}: {e}") from e

    try:
        return _news_adapter.validate_json(data)
    except ValidationError as e:
        raise NewsParseError(f"invalid news file {path}: {e.error_count()} error(s), "
                             f"first: {e.errors()[0]['msg']}") from e
