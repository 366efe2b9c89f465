"""Business logic use cases."""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from news_monitor.adapters.sources.news_fetcher import NewsFetcher
from news_monitor.core import (
    ArticleScorer,
    CacheStore,
    DigestGenerator,
    ExhaustedSourcesFailure,
    KeywordFailure,
    PipelineResult,
    ScoredArticle,
    ScorerFailure,
    Vocabulary,
)
from news_monitor.core.dates import CACHE_TIMEZONE, cache_key
from news_monitor.core.filters import filter_articles
from news_monitor.stages import cluster_articles, dedup_articles, rank_articles
from news_monitor.stages.clustering import DEFAULT_THRESHOLD

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL = 86400
MAX_SCORED_PER_KEYWORD = 20


@dataclass(frozen=True)
class KeywordOutcome:
    """Result of processing one keyword in isolation."""

    keyword: str
    articles: tuple[ScoredArticle, ...] = ()
    failure: Optional[KeywordFailure] = None
    from_cache: bool = False


class NewsPipeline:
    """Fetch, filter, score and condense news for a list of keywords."""

    def __init__(
        self,
        fetcher: NewsFetcher,
        scorer: ArticleScorer,
        vocabulary: Vocabulary,
        cache: Optional[CacheStore] = None,
        max_scored_per_keyword: int = MAX_SCORED_PER_KEYWORD,
        similarity_threshold: float = DEFAULT_THRESHOLD,
        max_concurrency: int = 1,
        keyword_delay: float = 1.0,
        cache_ttl: int = DEFAULT_CACHE_TTL,
        cache_timezone: str = CACHE_TIMEZONE,
        debug_clusters: bool = False,
    ) -> None:
        if not 0.0 < similarity_threshold <= 1.0:
            raise ValueError(f"similarity_threshold must be in (0, 1], got {similarity_threshold}")
        self.fetcher = fetcher
        self.scorer = scorer
        self.vocabulary = vocabulary
        self.cache = cache
        self.max_scored_per_keyword = max_scored_per_keyword
        self.similarity_threshold = similarity_threshold
        self.max_concurrency = max(1, max_concurrency)
        self.keyword_delay = keyword_delay
        self.cache_ttl = cache_ttl
        self.cache_timezone = cache_timezone
        self.debug_clusters = debug_clusters

    async def run(self, keywords: list[str], limit_per_keyword: int = 10) -> PipelineResult:
        """Process every keyword, then dedup, rank and cluster across keywords.

        Per-keyword failures are reported in the result and never raised.

        Raises:
            ValueError: When no non-blank keyword is given, or the limit is below 1
        """
        cleaned = [kw.strip() for kw in keywords if kw and kw.strip()]
        if not cleaned:
            raise ValueError("At least one keyword is required")
        if limit_per_keyword < 1:
            raise ValueError(f"limit_per_keyword must be at least 1, got {limit_per_keyword}")

        semaphore = asyncio.Semaphore(self.max_concurrency)
        outcomes = await asyncio.gather(*(
            self._run_keyword(keyword, index, limit_per_keyword, semaphore)
            for index, keyword in enumerate(cleaned)
        ))

        combined = [article for outcome in outcomes for article in outcome.articles]
        failures = [outcome.failure for outcome in outcomes if outcome.failure is not None]

        articles = self._condense(combined)
        logger.info(
            "pipeline: keywords=%d articles=%d failures=%d",
            len(cleaned), len(articles), len(failures),
        )
        return PipelineResult(articles=articles, partial_failures=failures)

    async def _run_keyword(
        self,
        keyword: str,
        index: int,
        limit: int,
        semaphore: asyncio.Semaphore,
    ) -> KeywordOutcome:
        key = cache_key(keyword, tz_name=self.cache_timezone)

        cached = self._cache_get(key)
        if cached:
            logger.info("pipeline[%s]: cache hit (%d articles)", keyword, len(cached))
            return KeywordOutcome(keyword, tuple(cached[:limit]), from_cache=True)

        async with semaphore:
            if index and self.keyword_delay > 0:
                await asyncio.sleep(self.keyword_delay)
            try:
                outcome = await self._process_keyword(keyword, limit)
            except Exception as e:
                logger.exception("pipeline[%s]: unexpected error", keyword)
                return KeywordOutcome(keyword, failure=KeywordFailure(keyword, "pipeline", f"{type(e).__name__}: {e}"))

        if outcome.articles:
            self._cache_put(key, list(outcome.articles))
        return outcome

    async def _process_keyword(self, keyword: str, limit: int) -> KeywordOutcome:
        try:
            fetched = await self.fetcher.fetch_keyword(keyword)
        except ExhaustedSourcesFailure as e:
            logger.warning("pipeline[%s]: fetch failed: %s", keyword, e)
            return KeywordOutcome(keyword, failure=KeywordFailure(keyword, "fetch", str(e)))

        candidates = filter_articles(fetched, keyword, self.vocabulary)[:self.max_scored_per_keyword]
        if not candidates:
            logger.info("pipeline[%s]: nothing left after filtering %d articles", keyword, len(fetched))
            return KeywordOutcome(keyword)

        try:
            scored = await self.scorer.evaluate(candidates, keyword)
        except ScorerFailure as e:
            # Unscored articles are never published
            logger.warning("pipeline[%s]: scoring failed: %s", keyword, e)
            return KeywordOutcome(keyword, failure=KeywordFailure(keyword, "score", str(e)))

        kept = [article for article in scored if article.keep]
        articles = self._condense(kept)[:limit]

        logger.info(
            "pipeline[%s]: fetched=%d candidates=%d kept=%d final=%d",
            keyword, len(fetched), len(candidates), len(kept), len(articles),
        )
        return KeywordOutcome(keyword, tuple(articles))

    def _condense(self, articles: list[ScoredArticle]) -> list[ScoredArticle]:
        ranked = rank_articles(dedup_articles(articles))
        return cluster_articles(ranked, self.similarity_threshold, debug=self.debug_clusters)

    def _cache_get(self, key: str) -> list[ScoredArticle]:
        if self.cache is None:
            return []
        try:
            records = self.cache.get(key) or []
            return [ScoredArticle.from_dict(record) for record in records]
        except Exception as e:
            # Any store error counts as a miss
            logger.warning("cache: read failed for %s, treating as miss: %s", key, e)
            return []

    def _cache_put(self, key: str, articles: list[ScoredArticle]) -> None:
        if self.cache is None:
            return
        try:
            self.cache.put(key, [article.to_dict() for article in articles], self.cache_ttl)
        except Exception as e:
            logger.warning("cache: write failed for %s: %s", key, e)


class DigestService:
    """Service for rendering and saving pipeline results."""

    def __init__(self, digest_generator: DigestGenerator) -> None:
        self.digest_generator = digest_generator

    def generate_digest(self, result: PipelineResult, title: str) -> str:
        return self.digest_generator.generate(result.articles, title)

    def save_digest(self, digest: str, output_path: Path) -> None:
        """Save digest to file."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(digest, encoding="utf-8")
        logger.info("Digest saved to %s", output_path)
