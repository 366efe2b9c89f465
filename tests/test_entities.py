"""Tests for core entities."""

from dataclasses import FrozenInstanceError

import pytest

from news_monitor.core import Article, KeywordFailure, PipelineResult, ScoredArticle


def make_article(**overrides) -> Article:
    data = {
        "id": "/articles/1",
        "title": "カフェ新店舗オープン",
        "link": "https://example.com/articles/1",
        "description": "駅前に新しいカフェが開店した。",
        "pub_date": "Mon, 01 Jan 2024 09:00:00 GMT",
        "source": "Example News",
        "category": "カフェ",
        "fetched_at": "2024-01-01T10:00:00+00:00",
    }
    data.update(overrides)
    return Article(**data)


def test_article_creation() -> None:
    """Test creating a valid article."""
    article = make_article()

    assert article.title == "カフェ新店舗オープン"
    assert article.category == "カフェ"
    assert article.to_dict()["link"] == "https://example.com/articles/1"


def test_article_validation() -> None:
    """Test article validation."""
    with pytest.raises(ValueError, match="Title cannot be empty"):
        make_article(title="")

    with pytest.raises(ValueError, match="Link cannot be empty"):
        make_article(link="")


def test_article_is_immutable() -> None:
    article = make_article()

    with pytest.raises(FrozenInstanceError):
        article.title = "changed"  # type: ignore[misc]


def test_scored_article_combined_score() -> None:
    """Missing scores count as zero."""
    article = make_article()

    scored = ScoredArticle.from_article(article, relevance_score=0.6, importance_score=0.3)
    unscored = ScoredArticle.from_article(article)

    assert scored.combined_score == pytest.approx(0.9)
    assert unscored.combined_score == 0.0
    assert unscored.keep is True


def test_scored_article_dict_round_trip() -> None:
    scored = ScoredArticle.from_article(
        make_article(), keep=True, relevance_score=0.8, importance_score=0.5, summary="要約"
    )

    assert ScoredArticle.from_dict(scored.to_dict()) == scored


def test_scored_article_from_plain_article_dict() -> None:
    """Cached plain articles load with default annotations."""
    restored = ScoredArticle.from_dict(make_article().to_dict())

    assert restored.keep is True
    assert restored.relevance_score is None
    assert restored.summary == ""


def test_scored_article_from_dict_tolerates_bad_scores() -> None:
    data = make_article().to_dict()
    data["relevance_score"] = "n/a"

    assert ScoredArticle.from_dict(data).relevance_score is None


def test_pipeline_result_to_dict() -> None:
    result = PipelineResult(
        articles=[ScoredArticle.from_article(make_article())],
        partial_failures=[KeywordFailure(keyword="ヨガスタジオ", stage="fetch", error="exhausted")],
    )

    data = result.to_dict()

    assert len(data["articles"]) == 1
    assert data["partial_failures"] == [{"keyword": "ヨガスタジオ", "stage": "fetch", "error": "exhausted"}]
    assert "T" in data["updated_at"]
