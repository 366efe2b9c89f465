"""Deterministic local summarization used when no API key is configured."""

import re

from news_monitor.core import Article, ArticleScorer, ScoredArticle

SUMMARY_LIMIT = 60


def shorten_summary(text: str, limit: int = SUMMARY_LIMIT) -> str:
    """Cap text at limit characters, marking truncation with an ellipsis."""
    text = text.strip()
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def fallback_summary(description: str) -> str:
    """First sentence of the description, else its first 60 characters."""
    first_sentence = re.split(r"[。.]", description, maxsplit=1)[0]
    return shorten_summary(first_sentence or description[:SUMMARY_LIMIT])


class FallbackScorer(ArticleScorer):
    """Keeps every article and summarizes it locally, without scores."""

    async def evaluate(self, articles: list[Article], keyword: str) -> list[ScoredArticle]:
        return [
            ScoredArticle.from_article(article, keep=True, summary=fallback_summary(article.description))
            for article in articles
        ]
