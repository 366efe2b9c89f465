"""Tests for feed payload parsing."""

import json

import pytest

from news_monitor.adapters.sources.feed_parser import (
    detect_payload_kind,
    parse_json_envelope,
    parse_markup,
    parse_payload,
)
from news_monitor.core import ParseFailure

RSS_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/">
  <channel>
    <title>"カフェ" - Google ニュース</title>
    <item>
      <title>A社が新店舗オープン - 日経</title>
      <link>https://news.example.com/articles/1</link>
      <guid isPermaLink="false">guid-1</guid>
      <pubDate>Mon, 01 Jan 2024 09:00:00 GMT</pubDate>
      <description>&lt;a href="https://news.example.com/articles/1"&gt;A社が新店舗オープン&lt;/a&gt;</description>
      <source url="https://www.nikkei.com">日経</source>
    </item>
    <item>
      <title>B社のカフェ事業</title>
      <link>https://news.example.com/articles/2</link>
      <content:encoded><![CDATA[<p>本文</p>]]></content:encoded>
    </item>
  </channel>
</rss>
"""

ATOM_FEED = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Example Atom</title>
  <entry>
    <title>Atom entry</title>
    <link rel="self" href="https://example.com/self"/>
    <link href="https://example.com/entry/1"/>
    <id>tag:example.com,2024:1</id>
    <updated>2024-01-02T00:00:00Z</updated>
    <summary>Summary text</summary>
  </entry>
</feed>
"""


def test_detect_payload_kind():
    assert detect_payload_kind("<rss/>", "application/rss+xml") == "markup"
    assert detect_payload_kind('  {"items": []}') == "json"
    assert detect_payload_kind("<rss/>", "application/json; charset=utf-8") == "json"


def test_parse_rss():
    source_name, items = parse_markup(RSS_FEED)

    assert source_name == '"カフェ" - Google ニュース'
    assert len(items) == 2

    first = items[0]
    assert first.title == "A社が新店舗オープン - 日経"
    assert first.link == "https://news.example.com/articles/1"
    assert first.guid == "guid-1"
    assert first.pub_date == "Mon, 01 Jan 2024 09:00:00 GMT"
    assert first.source == "日経"
    assert first.description.startswith("<a href=")

    second = items[1]
    assert second.content == "<p>本文</p>"
    assert second.source == source_name


def test_parse_atom():
    source_name, items = parse_markup(ATOM_FEED)

    assert source_name == "Example Atom"
    assert len(items) == 1
    assert items[0].link == "https://example.com/entry/1"
    assert items[0].guid == "tag:example.com,2024:1"
    assert items[0].updated == "2024-01-02T00:00:00Z"
    assert items[0].description == "Summary text"


def test_parse_json_envelope():
    payload = json.dumps({
        "status": "ok",
        "feed": {"title": "Google ニュース"},
        "items": [
            {
                "title": "記事",
                "link": "https://example.com/1",
                "guid": "g1",
                "pubDate": "2024-01-01 09:00:00",
                "description": "説明",
            },
            "not an item",
        ],
    }, ensure_ascii=False)

    source_name, items = parse_json_envelope(payload)

    assert source_name == "Google ニュース"
    assert len(items) == 1
    assert items[0].pub_date == "2024-01-01 09:00:00"
    assert items[0].source == "Google ニュース"


def test_parse_payload_dispatches_on_content():
    _, items = parse_payload(json.dumps({"items": [{"title": "t", "link": "https://x.com"}]}))
    assert items[0].title == "t"

    _, items = parse_payload(RSS_FEED, "text/xml")
    assert len(items) == 2


@pytest.mark.parametrize("payload", [
    "",
    "   ",
    "<rss><channel><item>",
    "<html><body>blocked</body></html>",
    "<rss version=\"2.0\"></rss>",
    "{not json",
    '{"status": "error", "message": "quota exceeded"}',
    '{"feed": {}}',
    "[1, 2]",
])
def test_invalid_payloads_raise_parse_failure(payload):
    with pytest.raises(ParseFailure):
        parse_payload(payload)


def test_empty_channel_yields_no_items():
    source_name, items = parse_markup("<rss><channel><title>Empty</title></channel></rss>")

    assert source_name == "Empty"
    assert items == []
