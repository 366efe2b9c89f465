"""Source-level failover for keyword searches."""

import logging
from functools import partial

from news_monitor.core import Article, ArticleSource, ExhaustedSourcesFailure, Vocabulary
from news_monitor.core.fallback import run_fallback

logger = logging.getLogger(__name__)


class NewsFetcher:
    """Query sources in priority order until one returns articles."""

    def __init__(self, sources: list[ArticleSource], vocabulary: Vocabulary) -> None:
        if not sources:
            raise ValueError("At least one source is required")
        self.sources = list(sources)
        self.vocabulary = vocabulary

    async def fetch(self, keywords: list[str], category: str) -> list[Article]:
        """Fetch articles for keywords, tagged with category.

        Raises:
            ExhaustedSourcesFailure: When every source failed or came back empty
        """
        attempts = [
            (source.name, partial(source.fetch_articles, keywords, category))
            for source in self.sources
        ]
        return await run_fallback(attempts, f"fetch[{category}]")

    async def fetch_keyword(self, keyword: str) -> list[Article]:
        """Fetch a single keyword, retrying once with its first synonym.

        Articles found through the synonym keep the original keyword as category.
        """
        try:
            return await self.fetch([keyword], keyword)
        except ExhaustedSourcesFailure:
            synonym = self.vocabulary.first_synonym(keyword)
            if not synonym or synonym == keyword:
                raise

        logger.info("fetch[%s]: no articles, retrying with synonym %r", keyword, synonym)
        return await self.fetch([synonym], keyword)
