"""Order-preserving deduplication of articles."""

import logging
from typing import Callable, TypeVar

from news_monitor.core.entities import Article

logger = logging.getLogger(__name__)

ArticleT = TypeVar("ArticleT", bound=Article)


def _keep_first_seen(articles: list[ArticleT], key: Callable[[ArticleT], str]) -> list[ArticleT]:
    seen: set[str] = set()
    unique: list[ArticleT] = []
    for article in articles:
        value = key(article)
        if not value or value in seen:
            continue
        seen.add(value)
        unique.append(article)
    return unique


def dedup_by_id(articles: list[ArticleT]) -> list[ArticleT]:
    """Drop repeated fingerprints; empty ids never survive."""
    return _keep_first_seen(articles, lambda article: article.id)


def dedup_by_title(articles: list[ArticleT]) -> list[ArticleT]:
    """Drop articles whose trimmed title was already seen."""
    return _keep_first_seen(articles, lambda article: article.title.strip())


def dedup_by_link(articles: list[ArticleT]) -> list[ArticleT]:
    # Full link, since ids are truncated and drop the host
    return _keep_first_seen(articles, lambda article: article.link.strip())


def dedup_articles(articles: list[ArticleT]) -> list[ArticleT]:
    """
    Run the identity, title and link passes in that order.

    Args:
        articles: Articles in priority order; the first occurrence wins

    Returns:
        New list without duplicates, in input order
    """
    if not articles:
        return []
    unique = dedup_by_link(dedup_by_title(dedup_by_id(articles)))
    logger.info("dedup: kept=%d from=%d", len(unique), len(articles))
    return unique
