"""Tests for CLI wiring."""

from pathlib import Path

from news_monitor.adapters.cache import FileCacheStore, NullCacheStore
from news_monitor.adapters.llm import ClaudeScorer, FallbackScorer
from news_monitor.adapters.sources import GoogleNewsSource, YahooNewsSource
from news_monitor.cli import build_pipeline, build_sources, print_report
from news_monitor.config import Settings
from news_monitor.core import KeywordFailure, PipelineResult, ScoredArticle


def test_build_sources_order_and_transports() -> None:
    settings = Settings()

    sources = build_sources(settings)

    assert [type(s) for s in sources] == [GoogleNewsSource, YahooNewsSource]
    assert [t.name for t in sources[0].transports] == ["direct", "allorigins", "rss2json"]
    assert "求人" in sources[0].negative_terms


def test_secondary_source_can_be_disabled() -> None:
    settings = Settings()
    settings.fetch.use_secondary_source = False

    assert len(build_sources(settings)) == 1


def test_build_pipeline_picks_scorer_and_cache(tmp_path: Path) -> None:
    settings = Settings(anthropic_api_key="test-key")
    settings.paths.cache_dir = tmp_path

    with_key = build_pipeline(settings)
    without_cache = build_pipeline(Settings(), use_cache=False)

    assert isinstance(with_key.scorer, ClaudeScorer)
    assert isinstance(with_key.cache, FileCacheStore)
    assert isinstance(without_cache.scorer, FallbackScorer)
    assert isinstance(without_cache.cache, NullCacheStore)


def test_print_report(capsys) -> None:
    article = ScoredArticle(
        id="/1", title="カフェ新店舗が開業", link="https://example.com/1",
        description="", pub_date="2024-01-01", source="Example",
        category="カフェ", fetched_at="", summary="要約",
    )
    result = PipelineResult(
        articles=[article],
        partial_failures=[KeywordFailure("ヨガスタジオ", "fetch", "all attempts failed")],
    )

    print_report(result)
    out = capsys.readouterr().out

    assert "- カフェ: 1" in out
    assert "Summary: 要約" in out
    assert "ヨガスタジオ [fetch]: all attempts failed" in out
