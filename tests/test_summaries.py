"""Tests for local summaries and the fallback scorer."""

import pytest

from news_monitor.adapters.llm import FallbackScorer, fallback_summary, shorten_summary
from news_monitor.core import Article


def test_first_sentence():
    assert fallback_summary("A社が新店舗を開いた。駅前の好立地だ。") == "A社が新店舗を開いた"
    assert fallback_summary("Opened today. More later.") == "Opened today"


def test_long_first_sentence_is_truncated():
    summary = fallback_summary("あ" * 80 + "。")

    assert len(summary) == 60
    assert summary.endswith("...")


def test_leading_separator_uses_first_60_chars():
    summary = fallback_summary("。" + "い" * 70)

    assert summary == "。" + "い" * 59


def test_shorten_summary_boundary():
    assert shorten_summary("う" * 60) == "う" * 60
    assert shorten_summary("う" * 61) == "う" * 57 + "..."


@pytest.mark.asyncio
async def test_fallback_scorer_keeps_everything_unscored():
    article = Article(
        id="/1", title="t", link="https://example.com/1",
        description="最初の文。次の文。", pub_date="", source="",
        category="カフェ", fetched_at="",
    )

    results = await FallbackScorer().evaluate([article], "カフェ")

    assert len(results) == 1
    assert results[0].keep is True
    assert results[0].relevance_score is None
    assert results[0].importance_score is None
    assert results[0].summary == "最初の文"
