"""News feed endpoint.

Exposes:
- GET /api/news: news items read fresh from the news file
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..content.news import load_news
from ..core.config import Settings, get_settings
from ..core.errors import NewsParseError, NewsReadError
from ..core.models_io import NewsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["news"])


@router.get("/news", response_model=NewsResponse)
def news(settings: Settings = Depends(get_settings)):
    try:
        items = load_news(settings.news_file)
    except (NewsReadError, NewsParseError) as e:
        logger.error("Failed to load news: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to load news: {e}")

    logger.info("Sent %d news items", len(items))
    return NewsResponse(news=items)
