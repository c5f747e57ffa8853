"""Client for the NewsData 'latest' search API."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from pydantic import ValidationError

from .config import NEWS_CREDENTIALS, Settings, require_credentials
from .errors import NewsFetchError
from .models import NewsArticle
from .upstream import request_json

logger = logging.getLogger(__name__)

MAX_ARTICLES = 10


def build_news_params(settings: Settings, topic: Optional[str]) -> dict[str, str]:
    """Query parameters for a search; a blank topic means general regional news."""
    params = {
        "apikey": settings.newsdata_api_key or "",
        "country": settings.news_country,
        "language": settings.news_language,
        "size": str(MAX_ARTICLES),
    }
    if topic and topic.strip():
        params["q"] = topic
    return params


def _normalize_results(results: List[Any]) -> List[NewsArticle]:
    articles: List[NewsArticle] = []
    for item in results[:MAX_ARTICLES]:
        if not isinstance(item, dict):
            logger.debug("Skipping non-object news result: %r", item)
            continue
        try:
            articles.append(NewsArticle.model_validate(item))
        except ValidationError as exc:
            logger.debug("Skipping malformed news result: %s", exc)
    return articles


def fetch_news(
    settings: Settings,
    topic: Optional[str] = "",
    *,
    session: Optional[Any] = None,
) -> List[NewsArticle]:
    """
    Fetch up to ten recent articles for the configured country and language.

    A payload without a usable `results` list yields an empty list, the same
    as a search with no hits.
    """
    require_credentials(settings, NEWS_CREDENTIALS)
    data = request_json(
        "GET",
        settings.newsdata_url,
        params=build_news_params(settings, topic),
        error_cls=NewsFetchError,
        failure="Failed to fetch news",
        api_name="NewsData API",
        timeout=settings.http_timeout,
        session=session,
    )
    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list):
        logger.warning("NewsData API returned unexpected format")
        return []
    articles = _normalize_results(results)
    logger.info("Fetched %d news article(s) for topic %r", len(articles), topic or "")
    return articles
