"""Conversion of raw feed entries into canonical articles."""

import logging
import re
from datetime import datetime, timezone
from typing import Iterable, Optional
from urllib.parse import urlsplit

from bs4 import BeautifulSoup

from news_monitor.core.entities import Article, RawFeedItem

logger = logging.getLogger(__name__)

FINGERPRINT_LENGTH = 100

# Checked in order; the first non-empty value wins
PUB_DATE_FIELDS = ("pub_date", "pub_date_iso", "pub_date_tz", "published", "updated")


def fingerprint(link: str) -> str:
    """Stable identity derived from the article URL.

    Path plus query, truncated to 100 characters. Strings that do not parse
    as absolute URLs fall back to the raw value, truncated the same way.
    """
    try:
        parts = urlsplit(link)
    except ValueError:
        return link[:FINGERPRINT_LENGTH]

    if not parts.scheme or not parts.netloc:
        return link[:FINGERPRINT_LENGTH]

    path = parts.path or "/"
    query = f"?{parts.query}" if parts.query else ""
    return (path + query)[:FINGERPRINT_LENGTH]


def clean_markup(text: Optional[str]) -> str:
    """Strip tags, decode entities and collapse whitespace."""
    if not text:
        return ""
    if "<" in text or "&" in text:
        text = BeautifulSoup(text, "html.parser").get_text(" ")
    return re.sub(r"\s+", " ", text).strip()


def normalize(
    item: RawFeedItem,
    category: str,
    fallback_source_name: str = "",
    fetched_at: Optional[datetime] = None,
) -> Optional[Article]:
    """Build an Article from a feed entry.

    Returns None when the entry has no usable title or link.
    """
    title = clean_markup(item.title)
    link = (item.link or item.guid or "").strip()

    if not title or not link:
        return None

    fetched = (fetched_at or datetime.now(timezone.utc)).isoformat()
    description = clean_markup(item.description or item.content) or title
    pub_date = _resolve_pub_date(item) or fetched
    source = (item.source or fallback_source_name or "").strip()

    return Article(
        id=fingerprint(link),
        title=title,
        link=link,
        description=description,
        pub_date=pub_date,
        source=source,
        category=category,
        fetched_at=fetched,
    )


def _resolve_pub_date(item: RawFeedItem) -> str:
    for name in PUB_DATE_FIELDS:
        value = (getattr(item, name) or "").strip()
        if value:
            return value
    return ""


def normalize_items(
    items: Iterable[RawFeedItem],
    category: str,
    fallback_source_name: str = "",
) -> list[Article]:
    """Normalize a batch, dropping entries that cannot become articles."""
    fetched_at = datetime.now(timezone.utc)
    articles: list[Article] = []
    skipped = 0

    for item in items:
        article = normalize(item, category, fallback_source_name, fetched_at=fetched_at)
        if article is None:
            skipped += 1
            continue
        articles.append(article)

    if skipped:
        logger.debug("normalize: skipped %d entries without title or link (category=%s)", skipped, category)

    return articles
