"""Tests for feed item normalization."""

from datetime import datetime, timezone

from news_monitor.core import RawFeedItem
from news_monitor.core.normalizer import clean_markup, fingerprint, normalize, normalize_items


def test_fingerprint_uses_path_and_query() -> None:
    assert fingerprint("https://news.example.com/a/b?id=1") == "/a/b?id=1"
    assert fingerprint("https://news.example.com") == "/"


def test_fingerprint_truncates_to_100_chars() -> None:
    link = "https://example.com/" + "x" * 200
    assert len(fingerprint(link)) == 100


def test_fingerprint_falls_back_to_raw_value() -> None:
    assert fingerprint("not a url") == "not a url"
    assert fingerprint("tag:example.com,2024:1") == "tag:example.com,2024:1"


def test_clean_markup() -> None:
    assert clean_markup("<b>カフェ</b>&amp;バー") == "カフェ &バー"
    assert clean_markup("a &lt;b&gt; &quot;c&quot; &#39;d&#39;") == 'a <b> "c" \'d\''
    assert clean_markup("  many \n\n  spaces ") == "many spaces"
    assert clean_markup(None) == ""


def test_normalize_full_item() -> None:
    item = RawFeedItem(
        title="A社が新店舗オープン - 日経",
        link="https://example.com/news/1",
        description="<p>A社は新店舗を開いた。</p>",
        pub_date="Mon, 01 Jan 2024 09:00:00 GMT",
        source="日経",
    )

    article = normalize(item, "カフェ")

    assert article is not None
    assert article.id == "/news/1"
    assert article.description == "A社は新店舗を開いた。"
    assert article.pub_date == "Mon, 01 Jan 2024 09:00:00 GMT"
    assert article.source == "日経"
    assert article.category == "カフェ"


def test_normalize_falls_back_to_guid_and_title() -> None:
    item = RawFeedItem(title="見出し", guid="https://example.com/g/1")

    article = normalize(item, "カフェ", fallback_source_name="Feed")

    assert article is not None
    assert article.link == "https://example.com/g/1"
    assert article.description == "見出し"
    assert article.source == "Feed"


def test_normalize_pub_date_candidates_in_order() -> None:
    item = RawFeedItem(
        title="t",
        link="https://example.com/1",
        pub_date_iso="2024-01-02T00:00:00Z",
        updated="2024-01-03T00:00:00Z",
    )

    assert normalize(item, "カフェ").pub_date == "2024-01-02T00:00:00Z"


def test_normalize_missing_date_uses_ingestion_time() -> None:
    fetched_at = datetime(2024, 5, 1, tzinfo=timezone.utc)
    item = RawFeedItem(title="t", link="https://example.com/1")

    article = normalize(item, "カフェ", fetched_at=fetched_at)

    assert article.pub_date == fetched_at.isoformat()
    assert article.fetched_at == fetched_at.isoformat()


def test_normalize_rejects_blank_title_or_link() -> None:
    assert normalize(RawFeedItem(title="   ", link="https://example.com/1"), "カフェ") is None
    assert normalize(RawFeedItem(title="t", link=" "), "カフェ") is None


def test_normalize_items_drops_unusable_entries() -> None:
    """Three entries, one with an empty title, yield two articles."""
    items = [
        RawFeedItem(title="カフェA開店", link="https://example.com/1"),
        RawFeedItem(title="", link="https://example.com/2"),
        RawFeedItem(title="カフェB閉店", link="https://example.com/3"),
    ]

    articles = normalize_items(items, "カフェ")

    assert [a.title for a in articles] == ["カフェA開店", "カフェB閉店"]
    assert all(a.category == "カフェ" for a in articles)
