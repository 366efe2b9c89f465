"""CLI entry point for news monitor."""

import asyncio
import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from news_monitor.adapters.cache import FileCacheStore, NullCacheStore
from news_monitor.adapters.digest import MarkdownDigestGenerator
from news_monitor.adapters.llm import ClaudeScorer, FallbackScorer
from news_monitor.adapters.sources import (
    FeedTransport,
    GoogleNewsSource,
    NewsFetcher,
    YahooNewsSource,
)
from news_monitor.adapters.sources.feed_source import DEFAULT_USER_AGENT
from news_monitor.config import Settings, get_settings, parse_keywords
from news_monitor.core import ArticleScorer, ArticleSource, PipelineResult
from news_monitor.use_cases import DigestService, NewsPipeline

SAMPLE_COUNT = 3


def main(
    keywords: Optional[str] = typer.Argument(None, help="Comma-separated keywords (default: preset keywords)"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Articles per keyword"),
    threshold: Optional[float] = typer.Option(None, "--threshold", help="Title similarity threshold in (0, 1]"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Ignore and do not write the result cache"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write a markdown digest to this path"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="Path to config.yaml"),
    debug: bool = typer.Option(False, "--debug", help="Verbose logging"),
) -> None:
    """Fetch, filter, score and rank industry news for the given keywords."""
    configure_logging(debug)
    settings = get_settings(config)

    keyword_list = parse_keywords(keywords) or settings.default_keywords
    if limit is not None:
        settings.pipeline.limit_per_keyword = limit
    if threshold is not None:
        settings.pipeline.similarity_threshold = threshold
    if debug:
        settings.pipeline.debug_clusters = True

    try:
        result = asyncio.run(async_run(settings, keyword_list, not no_cache, output, as_json))
    except ValueError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=2)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))


def app() -> None:
    """CLI entry point."""
    typer.run(main)


def configure_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else os.getenv("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_sources(settings: Settings) -> list[ArticleSource]:
    """Primary and secondary sources, in fallback order."""
    user_agent = settings.fetch.user_agent or DEFAULT_USER_AGENT
    transports = [
        FeedTransport(name=t["name"], prefix=t.get("prefix", ""))
        for t in settings.fetch.transports
    ]

    sources: list[ArticleSource] = [
        GoogleNewsSource(
            negative_terms=settings.vocabulary.negative_query_terms,
            scope=settings.fetch.scope,
            transports=transports,
            timeout=settings.fetch.timeout,
            user_agent=user_agent,
        )
    ]

    if settings.fetch.use_secondary_source:
        sources.append(YahooNewsSource(timeout=settings.fetch.timeout, user_agent=user_agent))

    return sources


def build_scorer(settings: Settings) -> ArticleScorer:
    if settings.has_api_key:
        return ClaudeScorer(settings)
    return FallbackScorer()


def build_pipeline(settings: Settings, use_cache: bool = True) -> NewsPipeline:
    """Wire adapters into a pipeline according to settings."""
    cache = (
        FileCacheStore(settings.paths.cache_dir)
        if use_cache and settings.cache.enabled
        else NullCacheStore()
    )

    return NewsPipeline(
        fetcher=NewsFetcher(build_sources(settings), settings.vocabulary),
        scorer=build_scorer(settings),
        vocabulary=settings.vocabulary,
        cache=cache,
        max_scored_per_keyword=settings.pipeline.max_scored_per_keyword,
        similarity_threshold=settings.pipeline.similarity_threshold,
        max_concurrency=settings.pipeline.max_concurrency,
        keyword_delay=settings.pipeline.keyword_delay,
        cache_ttl=settings.cache.ttl_seconds,
        cache_timezone=settings.cache.timezone,
        debug_clusters=settings.pipeline.debug_clusters,
    )


async def async_run(
    settings: Settings,
    keywords: list[str],
    use_cache: bool,
    output: Optional[Path],
    quiet: bool,
) -> PipelineResult:
    """Async implementation of run command."""
    pipeline = build_pipeline(settings, use_cache=use_cache)

    if not quiet:
        print("\n" + "=" * 70)
        print("📰 NEWS MONITOR")
        print("=" * 70)

        print("\n🔑 Credentials:")
        if settings.has_api_key:
            print(f"  ✓ ANTHROPIC_API_KEY - scoring with {settings.claude_model}")
        else:
            print("  ⚠️  ANTHROPIC_API_KEY - not found (local summaries, no scores)")

        print("\n⚙️  Settings:")
        print(f"  • Keywords: {', '.join(keywords)}")
        print(f"  • Articles per keyword: {settings.pipeline.limit_per_keyword}")
        print(f"  • Similarity threshold: {settings.pipeline.similarity_threshold:.2f}")
        print(f"  • Cache: {'on' if use_cache and settings.cache.enabled else 'off'}")

        print("\n📡 Sources:")
        for source in pipeline.fetcher.sources:
            emoji = getattr(source, "emoji", "•")
            print(f"  {emoji} {source.name}")

    result = await pipeline.run(keywords, settings.pipeline.limit_per_keyword)

    if output is not None:
        digest_service = DigestService(MarkdownDigestGenerator())
        title = f"Industry news {datetime.now().strftime('%Y-%m-%d')}"
        digest_service.save_digest(digest_service.generate_digest(result, title), output)

    if not quiet:
        print_report(result, output)

    return result


def print_report(result: PipelineResult, output: Optional[Path] = None) -> None:
    """Per-category counts, sample articles and failures."""
    print("\n" + "=" * 70)

    if not result.articles:
        print("⚠️  No articles found")
    else:
        print("✅ Done")
        print("=" * 70)

        sections: dict[str, int] = {}
        for article in result.articles:
            category = article.category or "other"
            sections[category] = sections.get(category, 0) + 1

        print("\n📊 Sections:")
        for category, count in sections.items():
            print(f"  - {category}: {count}")

        print(f"\n📈 Total: {len(result.articles)}")

        print(f"\n📰 Sample articles (first {SAMPLE_COUNT}):")
        for index, article in enumerate(result.articles[:SAMPLE_COUNT], 1):
            print(f"\n  {index}. [{article.category}] {article.title}")
            if article.summary:
                print(f"     Summary: {article.summary}")
            print(f"     Source: {article.source or 'N/A'}")
            print(f"     Date: {article.pub_date or 'N/A'}")

        if len(result.articles) > SAMPLE_COUNT:
            print(f"\n  ... and {len(result.articles) - SAMPLE_COUNT} more")

    print(f"\n🕐 Updated: {result.updated_at.isoformat()}")

    if result.partial_failures:
        print(f"\n❌ Failed keywords ({len(result.partial_failures)}):")
        for failure in result.partial_failures:
            print(f"  - {failure.keyword} [{failure.stage}]: {failure.error}")

    if output is not None:
        print(f"\n📄 Digest saved: {output}")
    print()


if __name__ == "__main__":
    app()
