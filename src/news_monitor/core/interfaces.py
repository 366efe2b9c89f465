"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from news_monitor.core.entities import Article, ScoredArticle


class ArticleSource(ABC):
    """Interface for fetching articles from a news search feed."""

    name: str = "source"

    @abstractmethod
    async def fetch_articles(self, keywords: list[str], category: str) -> list[Article]:
        """Fetch articles matching any of the keywords.

        Raises:
            NewsMonitorError: When the source cannot produce articles
        """
        pass


class ArticleScorer(ABC):
    """Interface for the summarization/scoring service."""

    @abstractmethod
    async def evaluate(self, articles: list[Article], keyword: str) -> list[ScoredArticle]:
        """Return one ScoredArticle per input article, in input order.

        Raises:
            ScorerFailure: When the call fails or the reply is malformed
        """
        pass


class CacheStore(ABC):
    """Key-value store with time-to-live."""

    @abstractmethod
    def get(self, key: str) -> Optional[list[dict[str, Any]]]:
        """Return cached records or None on miss."""
        pass

    @abstractmethod
    def put(self, key: str, records: list[dict[str, Any]], ttl: int) -> None:
        """Store records for ttl seconds."""
        pass


class DigestGenerator(ABC):
    """Interface for rendering pipeline results."""

    @abstractmethod
    def generate(self, articles: list[ScoredArticle], title: str) -> str:
        """Render articles into a document."""
        pass
