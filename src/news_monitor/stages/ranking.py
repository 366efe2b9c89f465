"""Score and recency ordering of articles."""

import functools
from typing import Optional, TypeVar

from news_monitor.core.dates import parse_pub_date
from news_monitor.core.entities import Article, ScoredArticle

ArticleT = TypeVar("ArticleT", bound=Article)

SortKey = tuple[float, Optional[float]]


def _timestamp(value: str) -> Optional[float]:
    parsed = parse_pub_date(value)
    return parsed.timestamp() if parsed else None


def _compare(key_a: SortKey, key_b: SortKey) -> int:
    score_a, timestamp_a = key_a
    score_b, timestamp_b = key_b
    if score_a != score_b:
        return -1 if score_a > score_b else 1
    # Unparseable dates tie with everything. This is not a total order, so
    # an undated article between two dated ones can keep them unsorted.
    if timestamp_a is None or timestamp_b is None or timestamp_a == timestamp_b:
        return 0
    return -1 if timestamp_a > timestamp_b else 1


def _sorted(keyed: list[tuple[SortKey, ArticleT]]) -> list[ArticleT]:
    keyed.sort(key=functools.cmp_to_key(lambda left, right: _compare(left[0], right[0])))
    return [article for _, article in keyed]


def rank_articles(articles: list[ScoredArticle]) -> list[ScoredArticle]:
    """
    Stable order: combined score desc, then publication date desc.

    Missing scores count as 0. Dates that cannot be parsed compare equal to
    any other date and never raise.
    """
    return _sorted([((article.combined_score, _timestamp(article.pub_date)), article) for article in articles])


def sort_by_pub_date(articles: list[ArticleT]) -> list[ArticleT]:
    """Newest first; articles with unparseable dates keep their relative place."""
    return _sorted([((0.0, _timestamp(article.pub_date)), article) for article in articles])
