"""Yahoo! News Japan RSS search source."""

from urllib.parse import quote

from news_monitor.adapters.sources.feed_source import FeedSearchSource


class YahooNewsSource(FeedSearchSource):
    """Secondary source, queried directly without negative terms."""

    emoji = "📰"
    name = "Yahoo News"
    default_source_name = "Yahoo!ニュース"

    base_url = "https://news.yahoo.co.jp/rss/search"

    def build_feed_url(self, keywords: list[str]) -> str:
        return f"{self.base_url}?p={quote(' OR '.join(keywords), safe='')}"
