"""Keyword and category filtering."""

import logging
from typing import Iterable

from news_monitor.core.entities import Article
from news_monitor.core.vocabulary import Vocabulary

logger = logging.getLogger(__name__)


def contains_any(text: str, terms: Iterable[str]) -> bool:
    """
    Check if any term occurs in text.

    Args:
        text: Text to search, already case-folded
        terms: Terms to look for (case-insensitive)

    Returns:
        True if any non-empty term is a substring of text
    """
    return any(term and term.casefold() in text for term in terms)


def resolve_terms(keyword: str, vocabulary: Vocabulary) -> tuple[str, ...]:
    """Expansion terms for keyword, or the keyword alone when none are known."""
    try:
        return vocabulary.expansions_for(keyword)
    except KeyError:
        return (keyword,)


def is_relevant(article: Article, keyword: str, vocabulary: Vocabulary) -> bool:
    """Apply block, category and keyword rules to a single article."""
    text = _article_text(article)

    if contains_any(text, vocabulary.block_terms):
        return False

    # Generic nouns like "salon" match too much; beauty categories need trade vocabulary
    if vocabulary.is_beauty_category(keyword):
        return contains_any(text, vocabulary.beauty_terms)

    return contains_any(text, resolve_terms(keyword, vocabulary)) or contains_any(text, (keyword,))


def filter_articles(articles: list[Article], keyword: str, vocabulary: Vocabulary) -> list[Article]:
    """Keep articles relevant to keyword, preserving order."""
    kept = [article for article in articles if is_relevant(article, keyword, vocabulary)]
    logger.debug("filter: keyword=%s kept=%d from=%d", keyword, len(kept), len(articles))
    return kept


def _article_text(article: Article) -> str:
    return f"{article.title} {article.description}".casefold()
